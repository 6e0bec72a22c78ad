"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Callable, Optional
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from cashbook.domain.entities import (
    Account,
    Transaction,
    TransactionFields,
)

Unsubscribe = Callable[[], None]


class Database(ABC):
    """Abstract database interface for cashbook.

    Every operation is scoped to a user. Looking up an account or transaction
    that belongs to another user behaves exactly like looking up one that
    does not exist.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        user_id: str,
        name: str,
        type: str,
        balance: Decimal = Decimal(0),
        disabled: bool = False,
        role: Optional[str] = None,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, user_id: str, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: str) -> list[Account]:
        """List all accounts, oldest first."""
        pass

    @abstractmethod
    def update_account(
        self,
        user_id: str,
        account_id: int,
        name: Optional[str] = None,
        type: Optional[str] = None,
    ) -> None:
        """Update account name and/or type."""
        pass

    @abstractmethod
    def set_account_disabled(self, user_id: str, account_id: int, disabled: bool) -> None:
        """Enable or disable an account."""
        pass

    @abstractmethod
    def set_account_balance(self, user_id: str, account_id: int, balance: Decimal) -> None:
        """Overwrite an account balance."""
        pass

    @abstractmethod
    def adjust_account_balance(self, user_id: str, account_id: int, delta: Decimal) -> bool:
        """Atomically add ``delta`` to an account balance.

        Returns:
            True if an account was updated, False if it does not exist
        """
        pass

    @abstractmethod
    def delete_account(self, user_id: str, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, user_id: str, account_id: int) -> int:
        """Count transactions using the account as primary or extra account."""
        pass

    @abstractmethod
    def listen_accounts(
        self, user_id: str, on_change: Callable[[list[Account]], None]
    ) -> Unsubscribe:
        """Subscribe to the user's account list. Returns an unsubscribe callable."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, user_id: str, fields: TransactionFields) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, user_id: str, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def set_transaction(self, user_id: str, transaction_id: int, fields: TransactionFields) -> None:
        """Overwrite all writable fields of a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, user_id: str, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        account_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List transactions, newest first.

        Args:
            user_id: Owner of the transactions
            account_id: Optional account filter, matching primary or extra account
            start: Optional inclusive lower bound on created_at
            end: Optional exclusive upper bound on created_at
        """
        pass

    @abstractmethod
    def listen_transactions(
        self, user_id: str, on_change: Callable[[list[Transaction]], None]
    ) -> Unsubscribe:
        """Subscribe to the user's transaction list. Returns an unsubscribe callable."""
        pass
