"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from cashbook.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "CASHBOOK_DB_PATH"


def default_database_path() -> str:
    """Return the default database location, creating its directory."""
    db_dir = Path.home() / ".cashbook"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "cashbook.db")


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks CASHBOOK_DB_PATH
            environment variable, then defaults to ~/.cashbook/cashbook.db.
            ":memory:" gives a throwaway in-memory database.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = default_database_path()

    if database_path == ":memory:":
        return SQLAlchemyDatabase("sqlite://")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
