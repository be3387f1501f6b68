"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import random
from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from arcade.core.feedback import RecordingFeedback
from arcade.core.scheduler import ManualScheduler
from arcade.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

SEED = 1234


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual clock: nothing scheduled happens until the test advances it."""
    return ManualScheduler()


@pytest.fixture
def rng() -> random.Random:
    """Seeded source of randomness so every run plays the same match."""
    return random.Random(SEED)


@pytest.fixture
def feedback() -> RecordingFeedback:
    return RecordingFeedback()
