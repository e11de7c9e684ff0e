"""Database layer for famfin application."""

from famfin.database.base import Database
from famfin.database.factories import create_sqlite_database, create_staging_store

__all__ = ["Database", "create_sqlite_database", "create_staging_store"]
