"""Pytest bootstrap for project imports and shared fixtures."""

from pathlib import Path
import sys

# Ensure project root is on sys.path so `import civicreport` works
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from civicreport import models  # noqa: F401 - register tables
from civicreport.database import Base, get_db
from civicreport.main import app
from civicreport.services.storage import UploadStore, get_upload_store


@pytest.fixture
def engine():
    # One shared in-memory connection so the app threadpool sees the same data
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(engine):
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def upload_store(tmp_path):
    return UploadStore(tmp_path / "uploads")


@pytest.fixture
def client(engine, upload_store):
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_upload_store] = lambda: upload_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
