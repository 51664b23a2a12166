"""Pytest fixtures: throwaway SQLite database for fast, isolated tests."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.services.backup_manager import BackupManager
from app.services.collection_locks import CollectionLocks
from app.services.collection_service import CollectionService
from app.services.record_store import RecordStore
from app.services.undo_engine import UndoEngine

# Import all models so they register with Base.metadata
from app.models.record import Record        # noqa: F401
from app.models.snapshot import Snapshot    # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def locks():
    return CollectionLocks()


def build_service(session, locks: CollectionLocks) -> CollectionService:
    """Wire the storage collaborators the same way app.dependencies does."""
    store = RecordStore(session)
    backups = BackupManager(store)
    return CollectionService(store, backups, UndoEngine(store, backups), locks)


@pytest.fixture(scope="function")
def service(db, locks):
    return build_service(db, locks)


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def admin_client(client):
    """TestClient carrying a logged-in admin session cookie."""
    login(client)
    return client


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def login(client: TestClient) -> None:
    """Helper: POST /api/admin/login with the configured credentials."""
    resp = client.post("/api/admin/login", json={
        "username": settings.ADMIN_USERNAME,
        "password": settings.ADMIN_PASSWORD,
    })
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"success": True}


def submit_appointment(client: TestClient, **fields) -> dict:
    """Helper: POST /api/appointment and return the stored record."""
    payload = {"name": "Asha", "email": "asha@example.com", "fee": 500}
    payload.update(fields)
    resp = client.post("/api/appointment", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def submit_feedback(client: TestClient, **fields) -> dict:
    """Helper: POST /api/feedback and return the stored record."""
    payload = {"name": "Ravi", "feedback": "Very helpful staff", "rating": "5"}
    payload.update(fields)
    resp = client.post("/api/feedback", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]
