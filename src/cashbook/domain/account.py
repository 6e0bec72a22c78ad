"""Account domain service."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from cashbook.database.base import Database, Unsubscribe
from cashbook.domain.balance import default_role_for_name
from cashbook.domain.entities import (
    ACCOUNT_ROLES,
    ACCOUNT_TYPES,
    ASSET,
    Account as AccountEntity,
)
from cashbook.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_name,
)

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS = ("Cash", "Bank", "Investment")


def normalize_account_type(account_type: Optional[str]) -> str:
    """Normalize an account type to its canonical spelling.

    Args:
        account_type: Account type in any case, or None for the default

    Returns:
        "Asset", "Party" or "Fund"

    Raises:
        ValidationError: If the type is not recognized
    """
    if account_type is None or not account_type.strip():
        return ASSET
    for known in ACCOUNT_TYPES:
        if account_type.strip().lower() == known.lower():
            return known
    raise ValidationError(
        f"Unknown account type '{account_type}'. Expected one of: {', '.join(ACCOUNT_TYPES)}"
    )


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        user_id: str,
        name: str,
        type: Optional[str] = ASSET,
        balance: Decimal | int | str = 0,
        disabled: bool = False,
        role: Optional[str] = None,
    ) -> int:
        """Create a new account.

        Args:
            user_id: Owner of the account
            name: Account name
            type: Account type (asset, party or fund, any case)
            balance: Opening balance
            disabled: Whether the account starts disabled
            role: Optional account role. Defaults to "transfer-inverted" for
                accounts named "investment" and to no role otherwise.

        Returns:
            Account ID

        Raises:
            ValidationError: If name, type, balance or role is invalid
            ConflictError: If an account with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")

        account_type = normalize_account_type(type)

        try:
            opening_balance = Decimal(str(balance))
        except InvalidOperation:
            raise ValidationError(f"Invalid opening balance '{balance}'")

        if role is None:
            role = default_role_for_name(name)
        elif role not in ACCOUNT_ROLES:
            raise ValidationError(
                f"Unknown account role '{role}'. Expected one of: {', '.join(ACCOUNT_ROLES)}"
            )

        # Check if account with same name exists
        for acc in self.db.list_accounts(user_id):
            if acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        account_id = self.db.create_account(
            user_id=user_id,
            name=name,
            type=account_type,
            balance=opening_balance,
            disabled=disabled,
            role=role,
        )
        logger.info("Created %s account '%s' (%s) for user %s", account_type, name, account_id, user_id)
        return account_id

    def create_default_accounts(self, user_id: str) -> list[int]:
        """Create the Cash, Bank and Investment asset accounts.

        Names that already exist are skipped.

        Returns:
            IDs of the accounts that were created
        """
        existing = {acc.name.lower() for acc in self.db.list_accounts(user_id)}
        created = []
        for name in DEFAULT_ACCOUNTS:
            if name.lower() in existing:
                continue
            created.append(self.create_account(user_id, name=name, type=ASSET))
        return created

    def get_account(self, user_id: str, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            user_id: Owner of the account
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(user_id, account_id)

    def require_account(self, user_id: str, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(user_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def find_account_by_name(self, user_id: str, name: str) -> Optional[AccountEntity]:
        """Find an account by name, ignoring case."""
        wanted = name.strip().lower()
        for acc in self.db.list_accounts(user_id):
            if acc.name.lower() == wanted:
                return acc
        return None

    def list_accounts(self, user_id: str, include_disabled: bool = True) -> list[AccountEntity]:
        """List accounts, oldest first.

        Args:
            user_id: Owner of the accounts
            include_disabled: If False, disabled accounts are left out

        Returns:
            List of account entities
        """
        accounts = self.db.list_accounts(user_id)
        if include_disabled:
            return accounts
        return [acc for acc in accounts if not acc.disabled]

    def list_selectable_accounts(self, user_id: str) -> list[AccountEntity]:
        """Accounts that may be picked for a new transaction."""
        return self.list_accounts(user_id, include_disabled=False)

    def set_disabled(self, user_id: str, account_id: int, disabled: bool) -> None:
        """Enable or disable an account.

        Disabled accounts keep their balance and history.
        """
        self.require_account(user_id, account_id)
        self.db.set_account_disabled(user_id, account_id, disabled)
        logger.info("%s account %s for user %s", "Disabled" if disabled else "Enabled", account_id, user_id)

    def rename_account(
        self, user_id: str, account_id: int, name: str, type: Optional[str] = None
    ) -> None:
        """Rename an account and optionally change its type.

        Existing transactions keep the name and type they were recorded
        with, and the account role is left untouched.

        Raises:
            NotFoundError: If account not found
            ConflictError: If name already exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")
        account_type = normalize_account_type(type) if type is not None else None

        self.require_account(user_id, account_id)

        # Check for duplicate names (excluding current account)
        for acc in self.db.list_accounts(user_id):
            if acc.id != account_id and acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        self.db.update_account(user_id, account_id, name=name, type=account_type)

    def delete_account(self, user_id: str, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If account not found
            DependencyError: If any transaction uses the account
        """
        self.require_account(user_id, account_id)

        transaction_count = self.db.get_account_transaction_count(user_id, account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))

        self.db.delete_account(user_id, account_id)
        logger.info("Deleted account %s for user %s", account_id, user_id)

    def listen_accounts(
        self, user_id: str, on_change: Callable[[list[AccountEntity]], None]
    ) -> Unsubscribe:
        """Subscribe to live changes of the user's accounts."""
        return self.db.listen_accounts(user_id, on_change)
