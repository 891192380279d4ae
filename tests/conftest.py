"""
Pytest configuration and shared fixtures for all tests.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ["APP_TIMEZONE"] = "UTC"
os.environ.pop("TELEGRAM_BOT_TOKEN", None)
os.environ.pop("TELEGRAM_CHAT_ID", None)

import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from emoclass.db.models import Base, ClassRoom, EmotionCheckin, Student
from emoclass.main import create_app
from emoclass.repositories.checkin_repo import insert_checkin
from emoclass.services.alerts import AlertTrigger


class RecordingNotifier:
    """Notifier double that remembers every message."""

    def __init__(self, ok: bool = True):
        self.ok = ok
        self.messages: list[str] = []

    def send(self, text: str) -> bool:
        self.messages.append(text)
        return self.ok


@pytest.fixture
def test_engine():
    """In-memory SQLite shared across threads for one test."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> sessionmaker:
    return sessionmaker(test_engine, expire_on_commit=False, class_=Session)


@pytest.fixture
def db_session(session_factory) -> Iterator[Session]:
    with session_factory() as session:
        yield session


@pytest.fixture
def classroom(db_session) -> ClassRoom:
    c = ClassRoom(name="7A")
    db_session.add(c)
    db_session.commit()
    return c


@pytest.fixture
def student(db_session, classroom) -> Student:
    s = Student(name="Budi Santoso", class_id=classroom.id)
    db_session.add(s)
    db_session.commit()
    return s


@pytest.fixture
def add_history(db_session):
    """
    Insert past check-ins, oldest first, one per day ending yesterday.
    """
    def _add(student_id: uuid.UUID, emotions: list[str], *, end: date | None = None) -> list[EmotionCheckin]:
        last = end or (datetime.now(timezone.utc).date() - timedelta(days=1))
        rows = []
        for offset, emotion in enumerate(reversed(emotions)):
            day = last - timedelta(days=offset)
            created = datetime(day.year, day.month, day.day, 7, 30, tzinfo=timezone.utc)
            rows.append(insert_checkin(db_session, student_id, emotion, None, day, created_at=created))
        return list(reversed(rows))
    return _add


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def teacher_user():
    return {"user_id": str(uuid.uuid4()), "role": "teacher", "email": "guru@example.com"}


@pytest.fixture
def app(session_factory, notifier, teacher_user):
    """App with database, notifier and identity overridden."""
    from emoclass.api.deps import get_alert_trigger, get_notifier
    from emoclass.core.security import get_current_user
    from emoclass.db.session import get_db

    application = create_app()

    def override_get_db():
        with session_factory() as session:
            yield session

    trigger = AlertTrigger(session_factory, lambda: notifier)

    async def override_auth():
        return teacher_user

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_alert_trigger] = lambda: trigger
    application.dependency_overrides[get_notifier] = lambda: notifier
    application.dependency_overrides[get_current_user] = override_auth
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def notifier_cls():
    return RecordingNotifier
