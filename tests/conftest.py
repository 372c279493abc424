"""Test configuration and fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from dto_persist.db.base import Base

from .support import InMemoryPort, UserModel  # noqa: F401  (registers test tables)


@pytest.fixture
def db_session():
    """Create a fresh in-memory database for each test."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def user_port() -> InMemoryPort:
    """In-memory port accepting the user columns, holding one stored user."""
    return InMemoryPort(
        writable={"name", "email", "password"},
        records=[{"id": 1, "name": "Luigi", "email": "luigi@example.com", "password": "old"}],
    )
