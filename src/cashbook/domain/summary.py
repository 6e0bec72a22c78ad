"""Account summary and statement building."""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from cashbook.database.base import Database
from cashbook.domain.balance import effect_for_account, is_transfer_inverted
from cashbook.domain.entities import (
    ASSET,
    FUND,
    PARTY,
    Account,
    AccountSummary,
    Statement,
    StatementRow,
    Transaction,
)
from cashbook.domain.errors import NotFoundError, ValidationError, account_not_found

CASH_ACCOUNT_NAMES = ("bank", "cash")


def _total(accounts: Iterable[Account]) -> Decimal:
    return sum((acc.balance for acc in accounts), Decimal(0))


def calculate_summary(accounts: Sequence[Account]) -> AccountSummary:
    """Compute dashboard totals for a list of accounts.

    Party balances below zero are money to take from the party and count
    towards the totals; positive party balances are money owed to parties.
    """
    assets = [acc for acc in accounts if acc.type == ASSET]
    funds = [acc for acc in accounts if acc.type == FUND]
    parties = [acc for acc in accounts if acc.type == PARTY]

    to_take = sum((abs(acc.balance) for acc in parties if acc.balance < 0), Decimal(0))
    to_pay = sum((acc.balance for acc in parties if acc.balance > 0), Decimal(0))

    investment = next((acc for acc in assets if is_transfer_inverted(acc.name, acc.role)), None)
    cash = [acc for acc in assets if acc.name.lower() in CASH_ACCOUNT_NAMES]

    return AccountSummary(
        total_everything=_total(assets) + _total(funds) + to_take,
        total_excluding_funds=_total(assets) + to_take,
        investment_only=investment.balance if investment is not None else Decimal(0),
        cash_balance=_total(cash),
        total_to_take_from_parties=to_take,
        total_to_pay_to_parties=to_pay,
        total_funds=_total(funds),
    )


def build_statement(
    account: Account,
    transactions: Iterable[Transaction],
    closing_balance: Optional[Decimal] = None,
) -> Statement:
    """Build a running-balance statement for one account.

    Each row shows the transaction from this account's point of view: the
    primary effect when the account is the primary account, the resolved
    secondary effect when it is the extra account.

    Args:
        account: Account the statement is for
        transactions: Transactions touching the account, in any order
        closing_balance: Balance after the last row (defaults to the
            account's current balance)

    Returns:
        Statement with rows oldest first
    """
    ordered = sorted(transactions, key=lambda t: (t.created_at, t.id))
    if closing_balance is None:
        closing_balance = account.balance

    deltas = [effect_for_account(txn, account.id) for txn in ordered]
    opening_balance = closing_balance - sum(deltas, Decimal(0))

    rows = []
    running = opening_balance
    for txn, delta in zip(ordered, deltas):
        running += delta
        rows.append(
            StatementRow(
                transaction_id=txn.id,
                created_at=txn.created_at,
                note=txn.note,
                credit=delta if delta > 0 else Decimal(0),
                debit=-delta if delta < 0 else Decimal(0),
                balance=running,
            )
        )

    return Statement(
        account=account,
        opening_balance=opening_balance,
        closing_balance=closing_balance,
        total_cash_in=sum((row.credit for row in rows), Decimal(0)),
        total_cash_out=sum((row.debit for row in rows), Decimal(0)),
        rows=tuple(rows),
    )


class SummaryService:
    """Service for account summaries and statements."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_summary(self, user_id: str) -> AccountSummary:
        """Summarize all of a user's accounts, disabled ones included."""
        return calculate_summary(self.db.list_accounts(user_id))

    def get_statement(
        self,
        user_id: str,
        account_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Statement:
        """Build a statement for an account over an optional date range.

        The closing balance is the account balance at the end of the range,
        found by taking back the effects of every later transaction.

        Raises:
            NotFoundError: If the account doesn't exist
            ValidationError: If start_date is after end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError("Start date must not be after end date")

        account = self.db.get_account(user_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        start = datetime.combine(start_date, time.min) if start_date is not None else None
        end = datetime.combine(end_date + timedelta(days=1), time.min) if end_date is not None else None

        in_range = self.db.list_transactions(user_id, account_id=account_id, start=start, end=end)

        closing_balance = account.balance
        if end is not None:
            later = self.db.list_transactions(user_id, account_id=account_id, start=end)
            closing_balance -= sum((effect_for_account(txn, account_id) for txn in later), Decimal(0))

        return build_statement(account, in_range, closing_balance=closing_balance)
