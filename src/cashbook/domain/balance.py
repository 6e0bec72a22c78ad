"""Balance effect resolution.

Every balance change made by the transaction service is derived from the
functions in this module. Reverting a transaction negates its forward
effects; there is no separate table of "undo" rules.
"""

from decimal import Decimal
from typing import Iterable, Optional

from cashbook.domain.entities import (
    CREDIT,
    DEBIT,
    NONE,
    TRANSFER_INVERTED,
    BalanceEffect,
    Transaction,
    TransactionFields,
)

INVESTMENT_ACCOUNT_NAME = "investment"


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def default_role_for_name(name: Optional[str]) -> Optional[str]:
    """Return the role an account gets by default when created with ``name``.

    Accounts named "investment" historically behaved as inverted transfers,
    so they keep that behaviour through an explicit role.
    """
    if _normalize(name) == INVESTMENT_ACCOUNT_NAME:
        return TRANSFER_INVERTED
    return None


def is_transfer_inverted(account_name: Optional[str], account_role: Optional[str] = None) -> bool:
    """Check whether a primary account uses inverted-transfer rules.

    An explicit role wins. Records without a role fall back to matching the
    account name against "investment".
    """
    role = _normalize(account_role)
    if role:
        return role == TRANSFER_INVERTED
    return _normalize(account_name) == INVESTMENT_ACCOUNT_NAME


def resolve_secondary_effect(
    account_name: Optional[str],
    account_type: Optional[str],
    txn_type: Optional[str],
    account_role: Optional[str] = None,
) -> str:
    """Resolve the effect a transaction has on its extra account.

    Args:
        account_name: Primary account name snapshot
        account_type: Primary account type snapshot (asset, party or fund)
        txn_type: Transaction type, "credit" or "debit"
        account_role: Optional primary account role snapshot

    Returns:
        "credit", "debit" or "none". Never raises.
    """
    txn_type = _normalize(txn_type)
    if txn_type not in (CREDIT, DEBIT):
        return NONE

    # Name/role check takes precedence over the type check
    if is_transfer_inverted(account_name, account_role):
        return DEBIT if txn_type == CREDIT else CREDIT

    account_type = _normalize(account_type)
    if account_type == "party":
        return txn_type
    if account_type == "fund" and txn_type == CREDIT:
        return DEBIT
    return NONE


def primary_effect(txn_type: str) -> str:
    """Return the effect a transaction has on its primary account."""
    return CREDIT if _normalize(txn_type) == CREDIT else DEBIT


def signed_amount(effect: str, amount: Decimal) -> Decimal:
    """Turn an effect and a positive magnitude into a balance delta."""
    if effect == CREDIT:
        return Decimal(amount)
    if effect == DEBIT:
        return -Decimal(amount)
    return Decimal(0)


def transaction_effects(txn: Transaction | TransactionFields) -> list[BalanceEffect]:
    """Compute the forward balance effects of a transaction.

    The primary account is always affected. The extra account is only
    included when one is set and the resolved effect is not "none".
    """
    effects = [
        BalanceEffect(
            account_id=txn.account_id,
            delta=signed_amount(primary_effect(txn.type), txn.amount),
            leg="primary",
        )
    ]

    if txn.extra_account_id is not None:
        effect = resolve_secondary_effect(
            txn.account_name, txn.account_type, txn.type, txn.account_role
        )
        if effect != NONE:
            effects.append(
                BalanceEffect(
                    account_id=txn.extra_account_id,
                    delta=signed_amount(effect, txn.amount),
                    leg="secondary",
                )
            )

    return effects


def reverse_effects(effects: Iterable[BalanceEffect]) -> list[BalanceEffect]:
    """Negate a list of effects, keeping their order."""
    return [effect.reversed() for effect in effects]


def effect_for_account(txn: Transaction, account_id: int) -> Decimal:
    """Net balance delta a transaction applied to ``account_id``."""
    return sum(
        (e.delta for e in transaction_effects(txn) if e.account_id == account_id),
        Decimal(0),
    )
