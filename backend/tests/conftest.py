"""Shared test fixtures for the booking backend tests."""

import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from barbershop.config import settings
from barbershop.database import get_db, init_db
from barbershop.redis_client import get_redis
from barbershop.services.schedule_store import ScheduleStore


class FakeRedis:
    """In-process stand-in for the few Redis commands the schedule cache uses."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail = False
        self.fail_writes = False

    def _check(self, write=False):
        if self.fail or (write and self.fail_writes):
            raise RedisConnectionError("redis down")

    def get(self, key):
        self._check()
        return self.data.get(key)

    def set(self, key, value, ex=None, nx=False):
        self._check(write=True)
        if nx and key in self.data:
            return None
        self.data[key] = value
        self.ttls[key] = ex
        return True

    def setex(self, key, ttl, value):
        return self.set(key, value, ex=ttl)

    def delete(self, *keys):
        self._check(write=True)
        return sum(1 for key in keys if self.data.pop(key, None) is not None)


@pytest.fixture(autouse=True)
def quiet_settings(monkeypatch):
    """No admin secret and no notification channels unless a test opts in."""
    for field in (
        "admin_secret",
        "smtp_user",
        "smtp_pass",
        "smtp_from",
        "telegram_bot_token",
        "telegram_chat_id",
        "twilio_account_sid",
        "twilio_auth_token",
        "twilio_whatsapp_number",
        "whatsapp_number",
    ):
        monkeypatch.setattr(settings, field, None)


@pytest.fixture(autouse=True)
def fresh_write_marker(monkeypatch):
    """Each test starts a new database, so schedule ids restart at 1."""
    monkeypatch.setattr(ScheduleStore, "_last_written_id", 0)


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of one test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def client(session_factory, fake_redis):
    """TestClient with the database and Redis dependencies swapped for test doubles."""
    from barbershop.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: fake_redis
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def shop_schedule():
    """Mon-Sat 12:00-14:00, 30 min slots, closed 2024-01-10..2024-01-20."""
    return {
        "openDays": [1, 2, 3, 4, 5, 6],
        "startTime": "12:00",
        "endTime": "14:00",
        "slotMinutes": 30,
        "vacationRanges": [{"start": "2024-01-10", "end": "2024-01-20"}],
    }
