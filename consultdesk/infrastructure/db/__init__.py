from .database import Base, SessionLocal, engine, get_db, create_db_engine
from .models import create_all_tables, drop_all_tables

__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "create_db_engine",
    "create_all_tables",
    "drop_all_tables",
]
