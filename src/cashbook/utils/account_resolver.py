"""Utility for resolving account names to IDs."""

from cashbook.domain.account import AccountService


def resolve_account(account_service: AccountService, user_id: str, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    Names are matched exactly first, then ignoring case.

    Args:
        account_service: AccountService instance
        user_id: Owner of the account
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found
    """
    if isinstance(account, int):
        if account_service.get_account(user_id, account) is None:
            raise ValueError(f"Account ID {account} not found")
        return account

    # Try to parse as integer (handles string IDs like "1")
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        if account_service.get_account(user_id, account_id) is None:
            raise ValueError(f"Account ID {account_id} not found")
        return account_id

    accounts = account_service.list_accounts(user_id)
    for acc in accounts:
        if acc.name == account:
            return acc.id

    match = account_service.find_account_by_name(user_id, account)
    if match is not None:
        return match.id

    raise ValueError(f"Account '{account}' not found")
