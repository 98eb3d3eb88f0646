"""Database layer for bankfeed application."""

from bankfeed.database.base import Database
from bankfeed.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
