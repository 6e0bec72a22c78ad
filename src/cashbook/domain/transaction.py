"""Transaction domain service.

Adding, updating and deleting a transaction changes up to two account
balances besides the transaction record itself. Each change is committed on
its own; if a later change fails, earlier ones stay committed and the caller
gets a PartialApplicationError describing what was and was not applied.
"""

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Any, Callable, Optional

from cashbook.database.base import Database, Unsubscribe
from cashbook.domain.balance import reverse_effects, transaction_effects
from cashbook.domain.entities import (
    TRANSACTION_TYPES,
    BalanceEffect,
    Transaction as TransactionEntity,
    TransactionFields,
)
from cashbook.domain.errors import (
    DomainError,
    NotFoundError,
    PartialApplicationError,
    ValidationError,
    account_not_found,
    partial_application,
    transaction_not_found,
)

logger = logging.getLogger(__name__)


def coerce_amount(amount: Any) -> Decimal:
    """Coerce a transaction amount to a positive whole number.

    Fractional amounts are truncated toward zero, so 99.9 is stored as 99.

    Raises:
        ValidationError: If the amount is missing, not a number or not
            positive after truncation
    """
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        raise ValidationError("Amount is required")
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise ValidationError(f"Invalid amount '{amount}'")
    if not value.is_finite():
        raise ValidationError(f"Invalid amount '{amount}'")

    value = value.to_integral_value(rounding=ROUND_DOWN)
    if value <= 0:
        raise ValidationError(f"Amount must be a positive whole number, got '{amount}'")
    return value


def normalize_transaction_type(txn_type: Optional[str]) -> str:
    """Normalize a transaction type to "credit" or "debit"."""
    normalized = (txn_type or "").strip().lower()
    if normalized not in TRANSACTION_TYPES:
        raise ValidationError(
            f"Unknown transaction type '{txn_type}'. Expected one of: {', '.join(TRANSACTION_TYPES)}"
        )
    return normalized


class _Mutation:
    """Ordered list of store writes making up one mutation."""

    def __init__(self, operation: str):
        self.operation = operation
        self._steps: list[tuple[str, Callable[[], Any]]] = []

    def add(self, description: str, action: Callable[[], Any]) -> None:
        self._steps.append((description, action))

    def run(self) -> list[Any]:
        completed: list[str] = []
        results = []
        for index, (description, action) in enumerate(self._steps):
            try:
                results.append(action())
            except DomainError as exc:
                if not completed:
                    raise
                pending = [d for d, _ in self._steps[index:]]
                message = partial_application(self.operation, completed, pending)
                logger.error(message)
                raise PartialApplicationError(message, completed, pending) from exc
            completed.append(description)
            logger.debug("%s: %s", self.operation, description)
        return results


class TransactionService:
    """Service for managing transactions and their balance effects."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _build_fields(
        self,
        user_id: str,
        account_id: Optional[int],
        type: Optional[str],
        amount: Any,
        note: Optional[str],
        extra_account_id: Optional[int],
        account_type: Optional[str],
        account_name: Optional[str],
        created_at: Optional[datetime],
    ) -> TransactionFields:
        """Validate input and snapshot the primary account.

        Everything here happens before the first write.
        """
        if account_id is None or account_id == "":
            raise ValidationError("Account is required")
        txn_amount = coerce_amount(amount)
        txn_type = normalize_transaction_type(type)
        if extra_account_id is not None and extra_account_id == account_id:
            raise ValidationError("Extra account must differ from the primary account")

        account = self.db.get_account(user_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        if extra_account_id is not None and self.db.get_account(user_id, extra_account_id) is None:
            raise NotFoundError(account_not_found(extra_account_id))

        return TransactionFields(
            account_id=account_id,
            type=txn_type,
            amount=txn_amount,
            note=note,
            extra_account_id=extra_account_id,
            account_type=account_type if account_type else account.type,
            account_name=account_name if account_name else account.name,
            account_role=account.role,
            created_at=created_at,
        )

    def _apply(self, user_id: str, effect: BalanceEffect) -> None:
        """Apply one balance effect, warning if the account has vanished."""
        if not self.db.adjust_account_balance(user_id, effect.account_id, effect.delta):
            logger.warning(
                "Skipped %s balance change of %s: account %s no longer exists",
                effect.leg,
                effect.delta,
                effect.account_id,
            )

    def _add_effects(self, mutation: _Mutation, user_id: str, effects: list[BalanceEffect], verb: str) -> None:
        for effect in effects:
            mutation.add(
                f"{verb} {effect.leg} {effect.delta:+} on account {effect.account_id}",
                lambda effect=effect: self._apply(user_id, effect),
            )

    def add_transaction(
        self,
        user_id: str,
        account_id: Optional[int],
        type: Optional[str],
        amount: Any,
        note: Optional[str] = None,
        extra_account_id: Optional[int] = None,
        account_type: Optional[str] = None,
        account_name: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> int:
        """Record a transaction and apply its balance effects.

        Args:
            user_id: Owner of the transaction
            account_id: Primary account ID
            type: "credit" or "debit", the effect on the primary account
            amount: Positive amount; fractions are truncated
            note: Optional free-text note
            extra_account_id: Optional secondary account ID
            account_type: Primary account type snapshot (defaults to the
                account's current type)
            account_name: Primary account name snapshot (defaults to the
                account's current name)
            created_at: Optional timestamp (defaults to now)

        Returns:
            Transaction ID

        Raises:
            ValidationError: If required fields are missing or invalid
            NotFoundError: If the primary or extra account doesn't exist
            StoreUnavailableError: If the store fails before anything is written
            PartialApplicationError: If a write fails after earlier writes committed
        """
        fields = self._build_fields(
            user_id, account_id, type, amount, note, extra_account_id, account_type, account_name, created_at
        )

        mutation = _Mutation("Add transaction")
        mutation.add("create transaction record", lambda: self.db.create_transaction(user_id, fields))
        self._add_effects(mutation, user_id, transaction_effects(fields), "apply")
        transaction_id = mutation.run()[0]

        logger.info(
            "Added %s of %s to account %s (transaction %s)",
            fields.type,
            fields.amount,
            fields.account_id,
            transaction_id,
        )
        return transaction_id

    def get_transaction(self, user_id: str, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            user_id: Owner of the transaction
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(user_id, transaction_id)

    def update_transaction(
        self,
        user_id: str,
        transaction_id: int,
        account_id: Optional[int],
        type: Optional[str],
        amount: Any,
        note: Optional[str] = None,
        extra_account_id: Optional[int] = None,
        account_type: Optional[str] = None,
        account_name: Optional[str] = None,
    ) -> None:
        """Replace a transaction, moving its balance effects accordingly.

        The old effects are reverted before the new ones are applied, so any
        field may change, including the primary and extra accounts. The
        record's created_at is kept.

        Raises:
            ValidationError: If the new fields are invalid
            NotFoundError: If the transaction or a referenced account doesn't exist
            PartialApplicationError: If a write fails after earlier writes committed
        """
        old = self.db.get_transaction(user_id, transaction_id)
        if old is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        fields = self._build_fields(
            user_id, account_id, type, amount, note, extra_account_id, account_type, account_name, None
        )

        mutation = _Mutation(f"Update transaction {transaction_id}")
        self._add_effects(mutation, user_id, reverse_effects(transaction_effects(old)), "revert")
        self._add_effects(mutation, user_id, transaction_effects(fields), "apply")
        mutation.add(
            "overwrite transaction record",
            lambda: self.db.set_transaction(user_id, transaction_id, fields),
        )
        mutation.run()

        logger.info("Updated transaction %s", transaction_id)

    def delete_transaction(self, user_id: str, transaction_id: int) -> bool:
        """Revert a transaction's balance effects and delete it.

        Returns:
            True if the transaction was deleted, False if it didn't exist
            (nothing is written in that case)

        Raises:
            PartialApplicationError: If a write fails after earlier writes committed
        """
        txn = self.db.get_transaction(user_id, transaction_id)
        if txn is None:
            logger.debug("Delete of missing transaction %s ignored", transaction_id)
            return False

        mutation = _Mutation(f"Delete transaction {transaction_id}")
        self._add_effects(mutation, user_id, reverse_effects(transaction_effects(txn)), "revert")
        mutation.add(
            "delete transaction record",
            lambda: self.db.delete_transaction(user_id, transaction_id),
        )
        mutation.run()

        logger.info("Deleted transaction %s", transaction_id)
        return True

    def list_transactions(
        self,
        user_id: str,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first.

        Args:
            user_id: Owner of the transactions
            account_id: Optional account filter; matches the primary or extra account
            start_date: Optional first day to include
            end_date: Optional last day to include
            month: Optional month (1-12), in any year unless ``year`` is given
            year: Optional year

        Returns:
            List of transaction entities
        """
        if month is not None and not 1 <= month <= 12:
            raise ValidationError(f"Invalid month {month}")

        start = datetime.combine(start_date, time.min) if start_date is not None else None
        end = datetime.combine(end_date + timedelta(days=1), time.min) if end_date is not None else None

        transactions = self.db.list_transactions(user_id, account_id=account_id, start=start, end=end)
        if month is not None:
            transactions = [t for t in transactions if t.created_at.month == month]
        if year is not None:
            transactions = [t for t in transactions if t.created_at.year == year]
        return transactions

    def listen_transactions(
        self, user_id: str, on_change: Callable[[list[TransactionEntity]], None]
    ) -> Unsubscribe:
        """Subscribe to live changes of the user's transactions."""
        return self.db.listen_transactions(user_id, on_change)
