"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal

from cashbook.domain import entities as domain
from cashbook.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        type=orm_account.type,
        balance=Decimal(orm_account.balance if orm_account.balance is not None else 0),
        disabled=bool(orm_account.disabled),
        role=orm_account.role,
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        account_id=orm_transaction.account_id,
        extra_account_id=orm_transaction.extra_account_id,
        type=orm_transaction.type,
        amount=Decimal(orm_transaction.amount),
        note=orm_transaction.note,
        account_type=orm_transaction.account_type,
        account_name=orm_transaction.account_name,
        account_role=orm_transaction.account_role,
        created_at=orm_transaction.created_at,
    )


def apply_transaction_fields(orm_transaction: ORMTransaction, fields: domain.TransactionFields) -> None:
    """Copy writable domain fields onto an ORM transaction (full overwrite).

    ``created_at`` is only written when the fields carry one.
    """
    orm_transaction.account_id = fields.account_id
    orm_transaction.extra_account_id = fields.extra_account_id
    orm_transaction.type = fields.type
    orm_transaction.amount = fields.amount
    orm_transaction.note = fields.note
    orm_transaction.account_type = fields.account_type
    orm_transaction.account_name = fields.account_name
    orm_transaction.account_role = fields.account_role
    if fields.created_at is not None:
        orm_transaction.created_at = fields.created_at
