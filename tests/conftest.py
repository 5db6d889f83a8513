"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Iterator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Iterator[Session]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def scripted_reader() -> Callable[[list[str]], Callable[[str], str]]:
    """Feed a fixed list of lines to an InputView. Running out of lines behaves like closing stdin."""

    def _create_reader(lines: list[str]) -> Callable[[str], str]:
        remaining = iter(lines)

        def _read(prompt: str) -> str:
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError

        return _read

    return _create_reader
