"""Shared pytest fixtures for cashbook tests."""

import tempfile
import os

import pytest

from cashbook.database.factories import create_sqlite_database
from cashbook.domain.account import AccountService
from cashbook.domain.csv_import import CSVImportService
from cashbook.domain.summary import SummaryService
from cashbook.domain.transaction import TransactionService


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
def user_id():
    """Owner used by most tests."""
    return "user-1"


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def csv_import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def sample_accounts(account_service, user_id):
    """Create one account of each kind and return their IDs by name."""
    return {
        "Cash": account_service.create_account(user_id, name="Cash", type="Asset", balance=300),
        "Bank": account_service.create_account(user_id, name="Bank", type="Asset", balance=1000),
        "Investment": account_service.create_account(user_id, name="Investment", type="Asset", balance=0),
        "Alice": account_service.create_account(user_id, name="Alice", type="Party", balance=0),
        "Emergency": account_service.create_account(user_id, name="Emergency", type="Fund", balance=0),
    }


@pytest.fixture
def balance_of(account_service, user_id):
    """Return a helper reading an account balance by ID."""

    def _balance(account_id):
        return account_service.get_account(user_id, account_id).balance

    return _balance


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
