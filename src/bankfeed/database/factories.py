"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from bankfeed.database.sqlalchemy_db import SQLAlchemyDatabase

DEFAULT_DB_DIR = ".bankfeed"
DEFAULT_DB_NAME = "bankfeed.db"


def default_database_path() -> str:
    """Return ``~/.bankfeed/bankfeed.db``, creating the directory if needed."""
    db_dir = Path.home() / DEFAULT_DB_DIR
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / DEFAULT_DB_NAME)


def create_database(database_url: str) -> SQLAlchemyDatabase:
    """Create a database for any SQLAlchemy URL (e.g. ``sqlite:///:memory:``)."""
    return SQLAlchemyDatabase(database_url)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks BANKFEED_DB_PATH
            environment variable, then defaults to ~/.bankfeed/bankfeed.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("BANKFEED_DB_PATH") or default_database_path()

    return create_database(f"sqlite:///{database_path}")
