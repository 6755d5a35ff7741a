"""
Trash Test Configuration

Provides pytest fixtures for in-memory SQLite database and session management.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from trash import SessionDataStore, TrashRepo

from models import Base


@pytest.fixture(scope="session")
def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """
    Create a new database session for each test function.
    Rolls back all changes after the test completes.
    """
    connection = db_engine.connect()
    transaction = connection.begin()

    SessionLocal = sessionmaker(bind=connection)
    session = SessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def store(db_session: Session) -> SessionDataStore:
    return SessionDataStore(db_session)


@pytest.fixture
def repo(store: SessionDataStore) -> TrashRepo:
    return TrashRepo(store)
