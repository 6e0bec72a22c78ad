"""Tests for AccountService."""

from decimal import Decimal

import pytest

from cashbook.domain.account import normalize_account_type
from cashbook.domain.errors import ConflictError, DependencyError, NotFoundError, ValidationError


def test_create_account_defaults(account_service, user_id):
    account_id = account_service.create_account(user_id, name="Wallet")

    account = account_service.get_account(user_id, account_id)
    assert account.name == "Wallet"
    assert account.type == "Asset"
    assert account.balance == Decimal(0)
    assert account.disabled is False
    assert account.role is None
    assert account.user_id == user_id


def test_create_account_normalizes_type(account_service, user_id):
    account_id = account_service.create_account(user_id, name="Alice", type="party", balance="250")

    account = account_service.get_account(user_id, account_id)
    assert account.type == "Party"
    assert account.balance == Decimal(250)


def test_investment_account_gets_inverted_role(account_service, user_id):
    account_id = account_service.create_account(user_id, name="Investment")

    assert account_service.get_account(user_id, account_id).role == "transfer-inverted"


def test_explicit_role(account_service, user_id):
    account_id = account_service.create_account(user_id, name="Brokerage", role="transfer-inverted")

    assert account_service.get_account(user_id, account_id).role == "transfer-inverted"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": ""},
        {"name": "   "},
        {"name": "X", "type": "Loan"},
        {"name": "X", "balance": "lots"},
        {"name": "X", "role": "sideways"},
    ],
)
def test_create_account_validation(account_service, user_id, kwargs):
    with pytest.raises(ValidationError):
        account_service.create_account(user_id, **kwargs)


def test_duplicate_name_is_a_conflict(account_service, user_id):
    account_service.create_account(user_id, name="Cash")

    with pytest.raises(ConflictError, match="already exists"):
        account_service.create_account(user_id, name="Cash")


def test_same_name_for_different_users(account_service):
    first = account_service.create_account("alice", name="Cash")
    second = account_service.create_account("bob", name="Cash")

    assert first != second
    assert [a.name for a in account_service.list_accounts("alice")] == ["Cash"]
    assert account_service.get_account("bob", first) is None


def test_create_default_accounts(account_service, user_id):
    account_service.create_account(user_id, name="cash")

    created = account_service.create_default_accounts(user_id)

    names = [a.name for a in account_service.list_accounts(user_id)]
    assert len(created) == 2
    assert names == ["cash", "Bank", "Investment"]
    assert account_service.create_default_accounts(user_id) == []


def test_find_account_by_name_ignores_case(account_service, user_id):
    account_id = account_service.create_account(user_id, name="Bank")

    assert account_service.find_account_by_name(user_id, "  bank ").id == account_id
    assert account_service.find_account_by_name(user_id, "Vault") is None


def test_disable_and_enable(account_service, user_id):
    cash = account_service.create_account(user_id, name="Cash", balance=100)
    bank = account_service.create_account(user_id, name="Bank")

    account_service.set_disabled(user_id, cash, True)

    assert [a.id for a in account_service.list_selectable_accounts(user_id)] == [bank]
    assert len(account_service.list_accounts(user_id)) == 2
    disabled = account_service.get_account(user_id, cash)
    assert disabled.disabled is True
    assert disabled.balance == Decimal(100)

    account_service.set_disabled(user_id, cash, False)
    assert len(account_service.list_selectable_accounts(user_id)) == 2


def test_disable_missing_account(account_service, user_id):
    with pytest.raises(NotFoundError):
        account_service.set_disabled(user_id, 42, True)


def test_rename_account(account_service, user_id):
    account_id = account_service.create_account(user_id, name="Investment")

    account_service.rename_account(user_id, account_id, "Mutual Funds", type="fund")

    account = account_service.get_account(user_id, account_id)
    assert account.name == "Mutual Funds"
    assert account.type == "Fund"
    # The role stays with the account
    assert account.role == "transfer-inverted"


def test_rename_conflict(account_service, user_id):
    account_service.create_account(user_id, name="Cash")
    bank = account_service.create_account(user_id, name="Bank")

    with pytest.raises(ConflictError):
        account_service.rename_account(user_id, bank, "Cash")
    with pytest.raises(NotFoundError):
        account_service.rename_account(user_id, 999, "Vault")
    with pytest.raises(ValidationError):
        account_service.rename_account(user_id, bank, "")


def test_delete_unused_account(account_service, user_id):
    account_id = account_service.create_account(user_id, name="Spare")

    account_service.delete_account(user_id, account_id)

    assert account_service.get_account(user_id, account_id) is None
    with pytest.raises(NotFoundError):
        account_service.delete_account(user_id, account_id)


def test_delete_account_in_use(account_service, transaction_service, sample_accounts, user_id):
    transaction_service.add_transaction(
        user_id, sample_accounts["Alice"], "credit", 10, extra_account_id=sample_accounts["Cash"]
    )

    with pytest.raises(DependencyError, match="1 transaction"):
        account_service.delete_account(user_id, sample_accounts["Alice"])
    # Extra account references block deletion as well
    with pytest.raises(DependencyError):
        account_service.delete_account(user_id, sample_accounts["Cash"])


def test_listen_accounts(account_service, user_id):
    snapshots = []
    unsubscribe = account_service.listen_accounts(user_id, snapshots.append)

    account_service.create_account(user_id, name="Cash")
    unsubscribe()
    account_service.create_account(user_id, name="Bank")

    assert [[a.name for a in snapshot] for snapshot in snapshots] == [[], ["Cash"]]


def test_normalize_account_type():
    assert normalize_account_type(None) == "Asset"
    assert normalize_account_type("FUND") == "Fund"
    with pytest.raises(ValidationError):
        normalize_account_type("savings")
