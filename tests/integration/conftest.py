"""
Database fixtures for integration tests: a private SQLite database file per
test. A file is needed because the invoice generation lock opens its own
connections.
"""

import pytest
from sqlalchemy.orm import sessionmaker

from consultdesk.infrastructure.db import create_all_tables, create_db_engine


@pytest.fixture
def db_engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'consultdesk.db'}")
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.rollback()
    session.close()
