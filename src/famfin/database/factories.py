"""Factory functions for creating database and staging store instances."""

import os
from pathlib import Path
from typing import Optional

from famfin.database.sqlalchemy_db import SQLAlchemyDatabase
from famfin.domain.staging import FileStagingStore


def _default_data_dir() -> Path:
    data_dir = Path.home() / ".famfin"
    data_dir.mkdir(exist_ok=True)
    return data_dir


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks FAMFIN_DB_PATH
            environment variable, then defaults to ~/.famfin/famfin.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("FAMFIN_DB_PATH")

    if database_path is None:
        database_path = str(_default_data_dir() / "famfin.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)


def create_staging_store(
    namespace: str, staging_dir: Optional[str] = None
) -> FileStagingStore:
    """Create the file-backed staging store for one import session.

    Args:
        namespace: Session namespace (e.g. "<workspace_id>-<user_id>"); each
            namespace holds at most one staged batch
        staging_dir: Base directory. If None, checks FAMFIN_STAGING_DIR
            environment variable, then defaults to ~/.famfin/staging

    Returns:
        FileStagingStore rooted at the namespace directory
    """
    if staging_dir is None:
        staging_dir = os.environ.get("FAMFIN_STAGING_DIR")

    if staging_dir is None:
        staging_dir = str(_default_data_dir() / "staging")

    return FileStagingStore(Path(staging_dir) / namespace)
