# civicreport/database.py - Document store configuration
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from civicreport.config import settings

logger = logging.getLogger(__name__)

# Database URL loaded from .env via civicreport/config.py
DATABASE_URL = settings.DATABASE_URL


def _create_engine(url: str):
    if str(url).startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url)


engine = _create_engine(DATABASE_URL)

# Session maker
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def init_db(bind=None):
    """Create every table that does not exist yet. There are no migrations."""
    from civicreport import models  # noqa: F401 - register tables on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Document store ready: %s", (bind or engine).url)


# Dependency to get database session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
