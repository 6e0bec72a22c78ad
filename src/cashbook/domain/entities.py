"""Domain model entities for cashbook.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these types; the
SQLAlchemy models stay inside the database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


# Account types
ASSET = "Asset"
PARTY = "Party"
FUND = "Fund"
ACCOUNT_TYPES = (ASSET, PARTY, FUND)

# Transaction types and resolved effects
CREDIT = "credit"
DEBIT = "debit"
NONE = "none"
TRANSACTION_TYPES = (CREDIT, DEBIT)

# Account role whose secondary effect is the inverse of the transaction type
TRANSFER_INVERTED = "transfer-inverted"
ACCOUNT_ROLES = (TRANSFER_INVERTED,)


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    user_id: str
    name: str
    type: str
    balance: Decimal
    disabled: bool
    role: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``account_type``, ``account_name`` and ``account_role`` are a snapshot of
    the primary account taken when the transaction was written. The secondary
    effect is always resolved from this snapshot, so renaming or retyping the
    account later does not change how historical transactions are reverted.
    """

    id: int
    user_id: str
    account_id: int
    extra_account_id: Optional[int]
    type: str
    amount: Decimal
    note: Optional[str]
    account_type: Optional[str]
    account_name: Optional[str]
    account_role: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class TransactionFields:
    """Writable fields of a transaction record, as passed to the store."""

    account_id: int
    type: str
    amount: Decimal
    note: Optional[str] = None
    extra_account_id: Optional[int] = None
    account_type: Optional[str] = None
    account_name: Optional[str] = None
    account_role: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class BalanceEffect:
    """A signed change to one account's balance."""

    account_id: int
    delta: Decimal
    leg: str = "primary"

    def reversed(self) -> "BalanceEffect":
        """Return the algebraic inverse of this effect."""
        return BalanceEffect(account_id=self.account_id, delta=-self.delta, leg=self.leg)


@dataclass(frozen=True)
class AccountSummary:
    """Dashboard totals across a user's accounts."""

    total_everything: Decimal
    total_excluding_funds: Decimal
    investment_only: Decimal
    cash_balance: Decimal
    total_to_take_from_parties: Decimal
    total_to_pay_to_parties: Decimal
    total_funds: Decimal


@dataclass(frozen=True)
class StatementRow:
    """One line of an account statement."""

    transaction_id: int
    created_at: datetime
    note: Optional[str]
    credit: Decimal
    debit: Decimal
    balance: Decimal


@dataclass(frozen=True)
class Statement:
    """Account statement with running balance, oldest row first."""

    account: Account
    opening_balance: Decimal
    closing_balance: Decimal
    total_cash_in: Decimal
    total_cash_out: Decimal
    rows: tuple[StatementRow, ...] = field(default_factory=tuple)
