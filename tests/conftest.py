"""
Shared pytest fixtures for the travel test suite.

Settings are read from the environment at import time, so the
overrides below must run before anything imports ``travel_api``.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("RATE_LIMIT_DEFAULT", "1000/minute")

import pytest  # noqa: E402
from sqlalchemy import create_engine, insert  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from travel_api.domain.travel.entities import LifecycleEvent  # noqa: E402
from travel_api.domain.travel.ports import LifecycleEventNotifier  # noqa: E402
from travel_api.infrastructure.travel.tables import create_schema, users  # noqa: E402
from travel_api.infrastructure.travel.travel_order_repository import (  # noqa: E402
    SqlAlchemyTravelOrderRepository,
)

ALICE_ID = 1
BOB_ID = 2
CAROL_ID = 3
DAVE_ID = 4

SEED_USERS = [
    {"id": ALICE_ID, "name": "Alice", "email": "alice@example.com", "role": "user"},
    {"id": BOB_ID, "name": "Bob", "email": "bob@example.com", "role": "user"},
    {"id": CAROL_ID, "name": "Carol", "email": "carol@example.com", "role": "admin"},
    {"id": DAVE_ID, "name": "Dave", "email": "dave@example.com", "role": "admin"},
]


class RecordingNotifier(LifecycleEventNotifier):
    """Notifier double that keeps every event it is handed."""

    def __init__(self) -> None:
        self.events: list[LifecycleEvent] = []

    def notify(self, event: LifecycleEvent) -> None:
        self.events.append(event)


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across connections, seeded with users."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(eng)
    with eng.begin() as conn:
        conn.execute(insert(users), SEED_USERS)
    yield eng
    eng.dispose()


@pytest.fixture
def repo(engine) -> SqlAlchemyTravelOrderRepository:
    return SqlAlchemyTravelOrderRepository(engine=engine)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
