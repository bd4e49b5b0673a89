"""
Shared pytest fixtures.

Uses a throwaway SQLite file so no Postgres is required for tests.
"""
import os

SQLITE_URL = "sqlite:///./test_journal.db"
os.environ["DATABASE_URL"] = SQLITE_URL
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest  # noqa: E402
from datetime import date  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.security import create_access_token  # noqa: E402
from app.db.base import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.checkin import DailyCheckIn  # noqa: E402

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Monday. The surrounding Sunday–Saturday week is 2026-10-18 .. 2026-10-24.
FIXED_TODAY = date(2026, 10, 19)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists("./test_journal.db"):
        os.remove("./test_journal.db")


@pytest.fixture(autouse=True)
def clean_checkins():
    yield
    db = TestingSessionLocal()
    try:
        db.query(DailyCheckIn).delete()
        db.commit()
    finally:
        db.close()


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def fixed_today(monkeypatch):
    """Pin "today" for the router and the calendar helpers."""
    monkeypatch.setattr("app.services.journal.today", lambda: FIXED_TODAY)
    monkeypatch.setattr("app.routers.checkins.today", lambda: FIXED_TODAY)
    return FIXED_TODAY


@pytest.fixture()
def auth_headers():
    return {"Authorization": f"Bearer {create_access_token('user-1')}"}


@pytest.fixture()
def other_auth_headers():
    return {"Authorization": f"Bearer {create_access_token('user-2')}"}


@pytest.fixture()
def checkin_payload():
    """Factory for a valid camelCase check-in body."""
    def _make(**overrides) -> dict:
        payload = {
            "moodScore": 5,
            "energyScore": 5,
            "stressScore": 5,
            "pillarSelfAwareness": 3,
            "pillarMindset": 3,
            "pillarAction": 3,
            "pillarImpact": 3,
            "keyWin": "",
            "biggestChallenge": "",
            "penMoment": "",
        }
        payload.update(overrides)
        return payload
    return _make
