"""
Database configuration and session management.
"""

from typing import Generator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import NullPool, StaticPool

from consultdesk.config import settings


def _use_explicit_sqlite_transactions(engine: Engine, write_ahead_log: bool = False) -> None:
    # pysqlite defers BEGIN until the first DML statement, which breaks
    # SAVEPOINT nesting; emit BEGIN ourselves instead
    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        if write_ahead_log:
            # open read transactions must not block the generation lock writes
            dbapi_connection.execute("PRAGMA journal_mode=WAL")

    @event.listens_for(engine, "begin")
    def _emit_begin(connection):
        connection.exec_driver_sql("BEGIN")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build an engine for the given URL.
    SQLite connections are shared across threads; an in-memory SQLite
    database keeps a single connection so every session sees the same data.
    File databases run in WAL mode. The invoice generation lock needs a
    second connection, so generating invoices requires a file database.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        in_memory = ":memory:" in database_url or database_url == "sqlite://"
        if in_memory:
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(database_url, echo=echo, **kwargs)
        _use_explicit_sqlite_transactions(sqlite_engine, write_ahead_log=not in_memory)
        return sqlite_engine

    return create_engine(database_url, poolclass=NullPool, echo=echo)


# Create SQLAlchemy engine
engine = create_db_engine(settings.database_url, echo=settings.debug)

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Create declarative base
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    Commits when the request succeeds and rolls back when it raises.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
