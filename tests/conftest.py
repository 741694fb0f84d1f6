from __future__ import annotations

import os

# Settings are read at import time; keep tests off Postgres, AWS and the sweeper loop.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TIME_LOCK_SWEEPER_ENABLED", "false")

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Tuple

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.model import Follow, User


class FakeNotifier:
    def __init__(self) -> None:
        self.sent: List[Tuple[uuid.UUID, str, Dict[str, Any]]] = []

    def notify(self, user_id: uuid.UUID, event_type: str, payload: Dict[str, Any]) -> None:
        self.sent.append((user_id, event_type, payload))

    def events(self, event_type: str) -> List[Tuple[uuid.UUID, str, Dict[str, Any]]]:
        return [item for item in self.sent if item[1] == event_type]


class FailingNotifier:
    def notify(self, user_id: uuid.UUID, event_type: str, payload: Dict[str, Any]) -> None:
        raise ConnectionError("push gateway down")


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta) -> None:
        self.now = self.now + delta


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def failing_notifier() -> FailingNotifier:
    return FailingNotifier()


@pytest.fixture()
def clock() -> FakeClock:
    # 23:30 UTC so that "now + 1 hour" already lies past tomorrow's midnight.
    return FakeClock(datetime(2026, 10, 19, 23, 30, tzinfo=timezone.utc))


@pytest.fixture()
def users(db: Session) -> Dict[str, User]:
    """alice follows bob; carol is a stranger to both."""
    alice = User(id=uuid.uuid4(), email="alice@example.com", name="Alice", avatar_url="https://cdn.example.com/a.png")
    bob = User(id=uuid.uuid4(), email="bob@example.com", name="Bob")
    carol = User(id=uuid.uuid4(), email="carol@example.com", name="Carol")
    db.add_all([alice, bob, carol])
    db.add(Follow(follower_id=alice.id, following_id=bob.id))
    db.commit()
    return {"alice": alice, "bob": bob, "carol": carol}
