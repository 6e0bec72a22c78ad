"""Shared domain error messages and error types."""

from typing import Sequence


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class StoreUnavailableError(DomainError):
    """The backing store rejected or failed a read or write."""


class PartialApplicationError(StoreUnavailableError):
    """A mutation failed after some of its writes were already committed.

    The committed writes are not rolled back, so account balances and the
    transaction record may disagree until someone repairs them.

    Attributes:
        completed: Descriptions of the steps that were committed
        pending: Descriptions of the steps that were not applied
    """

    def __init__(self, message: str, completed: Sequence[str], pending: Sequence[str]):
        super().__init__(message)
        self.completed = tuple(completed)
        self.pending = tuple(pending)


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for duplicate account name."""
    return f"Account with name '{name}' already exists"


def account_delete_blocked(account_id: int, transaction_count: int) -> str:
    """Return message when account is referenced by transactions."""
    return (
        f"Cannot delete account {account_id}: it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. "
        "Please reassign or delete them first."
    )


def partial_application(operation: str, completed: Sequence[str], pending: Sequence[str]) -> str:
    """Return message for a mutation that stopped half way."""
    return (
        f"{operation} failed after {len(completed)} committed step(s) "
        f"({', '.join(completed)}); not applied: {', '.join(pending) or 'none'}. "
        "Account balances may be inconsistent."
    )
