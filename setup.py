from setuptools import setup, find_packages

setup(
    name="civicreport",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"civicreport": ["static/*.html"]},
    include_package_data=True,
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy",
        "psycopg2-binary",
        "passlib[bcrypt]",
        "bcrypt<4.1",  # passlib 1.7 breaks on newer bcrypt releases
        "python-multipart",
        "pydantic",
        "pydantic-settings",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest", "httpx"],
    },
    entry_points={
        "console_scripts": ["civicreport=civicreport.main:run"],
    },
)
