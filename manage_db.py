#!/usr/bin/env python3
"""
Database management script for the billing service.
Creates and drops the schema and clears leftover invoice generation locks.
"""

import sys

from sqlalchemy import inspect

from consultdesk.config import settings
from consultdesk.infrastructure.db.database import SessionLocal, engine
from consultdesk.infrastructure.db.models import (
    InvoiceGenerationLockModel, create_all_tables, drop_all_tables
)


def create_tables():
    """Create any missing tables."""
    print(f"Creating tables in {settings.database_url}...")
    create_all_tables(engine)


def drop_tables():
    """Drop all tables - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        drop_all_tables(engine)
        print("Tables dropped.")
    else:
        print("Drop cancelled.")


def reset_database():
    """Drop and recreate every table - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        print("Resetting database...")
        drop_all_tables(engine)
        create_all_tables(engine)
    else:
        print("Database reset cancelled.")


def show_tables():
    """List the tables present in the database."""
    for table_name in sorted(inspect(engine).get_table_names()):
        print(f"  {table_name}")


def clear_locks():
    """
    Remove invoice generation locks left behind by a crashed process.
    Only run this while no invoice generation is in flight.
    """
    session = SessionLocal()
    try:
        removed = session.query(InvoiceGenerationLockModel).delete(synchronize_session=False)
        session.commit()
        print(f"Removed {removed} generation lock(s).")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


COMMANDS = {
    "create": (create_tables, "Create missing tables"),
    "drop": (drop_tables, "Drop all tables (WARNING: drops all data)"),
    "reset": (reset_database, "Drop and recreate all tables (WARNING: drops all data)"),
    "tables": (show_tables, "List existing tables"),
    "clear-locks": (clear_locks, "Delete leftover invoice generation locks"),
}


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        for name, (_, help_text) in COMMANDS.items():
            print(f"  {name:<14} - {help_text}")
        return

    command_name = sys.argv[1]
    if command_name not in COMMANDS:
        print(f"Unknown command: {command_name}")
        sys.exit(1)

    COMMANDS[command_name][0]()


if __name__ == "__main__":
    main()
