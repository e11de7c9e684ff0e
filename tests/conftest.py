"""Shared pytest fixtures for famfin tests."""

import tempfile
import os
from decimal import Decimal
from pathlib import Path
import pytest

from famfin.database.factories import create_sqlite_database
from famfin.domain.account import AccountService
from famfin.domain.category import CategoryService
from famfin.domain.csv_import import CSVImportService
from famfin.domain.entities import TransactionKind
from famfin.domain.staging import FileStagingStore
from famfin.domain.transaction import TransactionService
from famfin.domain.workspace import WorkspaceService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def workspace(temp_db):
    """The default workspace, the same one the CLI uses."""
    return WorkspaceService(temp_db).get_or_create("default")


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def sample_account(account_service, workspace):
    """Create a checking account with a 1000.00 balance."""
    account_id = account_service.create_account(
        workspace_id=workspace.id, name="Conta Corrente", balance=Decimal("1000.00")
    )
    return account_service.get_account(account_id)


@pytest.fixture
def sample_categories(category_service, workspace):
    """Create income and expense categories, keyed by name."""
    categories = [
        ("Salário", TransactionKind.INCOME),
        ("Serviços", TransactionKind.INCOME),
        ("Moradia", TransactionKind.EXPENSE),
        ("Alimentação", TransactionKind.EXPENSE),
        ("Lazer", TransactionKind.EXPENSE),
    ]
    return {
        name: category_service.create_category(workspace_id=workspace.id, name=name, kind=kind)
        for name, kind in categories
    }


@pytest.fixture
def staging_dir(tmp_path):
    """Base directory for staged imports."""
    return tmp_path / "staging"


@pytest.fixture
def staging(staging_dir, workspace):
    """File staging store at the location the CLI uses for the default user."""
    return FileStagingStore(staging_dir / f"{workspace.id}-local")


@pytest.fixture
def import_service(temp_db, staging):
    """Create a CSVImportService with a temporary database and staging store."""
    return CSVImportService(temp_db, staging)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db, staging_dir):
    """Global CLI options pointing at the temporary database and staging area."""
    return ["--db-path", temp_db.database_path, "--staging-dir", str(staging_dir)]


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
