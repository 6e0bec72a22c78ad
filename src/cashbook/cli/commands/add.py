"""Add transaction command."""

import click
from cashbook.cli.account_resolution import resolve_account_or_exit
from cashbook.cli.error_handling import handle_domain_error
from cashbook.domain.account import AccountService
from cashbook.domain.balance import resolve_secondary_effect
from cashbook.domain.entities import NONE, TRANSACTION_TYPES
from cashbook.domain.errors import DomainError
from cashbook.domain.transaction import TransactionService
from cashbook.utils.amount_parser import parse_amount
from cashbook.utils.date_parser import parse_datetime

TRANSACTION_TYPE_CHOICE = click.Choice(TRANSACTION_TYPES, case_sensitive=False)


@click.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--type", "txn_type", required=True, type=TRANSACTION_TYPE_CHOICE, help="Effect on the account")
@click.option("--amount", required=True, help="Transaction amount (whole units; fractions are dropped)")
@click.option("--extra-account", help="Extra account name or ID affected by the same transaction")
@click.option("--note", help="Note")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--time", "time_str", help="Time of day (e.g., 14:30)")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    txn_type: str,
    amount: str,
    extra_account: str | None,
    note: str | None,
    date: str | None,
    time_str: str | None,
):
    """Add a transaction.

    Examples:
        cashbook add --account Cash --type credit --amount 500 --note "Salary"
        cashbook add --account Investment --type credit --amount 500 --extra-account Bank
        cashbook add --account Alice --type debit --amount 200 --extra-account Cash --date 2024-01-15
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    extra_account_id = None
    if extra_account is not None:
        extra_account_id = resolve_account_or_exit(ctx, account_service, extra_account)

    # Disabled accounts can't be picked for new transactions
    selectable = {acc.id for acc in account_service.list_selectable_accounts(user_id)}
    for candidate in (account_id, extra_account_id):
        if candidate is not None and candidate not in selectable:
            click.echo(f"Error: Account {candidate} is disabled", err=True)
            ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    created_at = None
    if date is not None:
        try:
            created_at = parse_datetime(date, time_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        transaction_id = transaction_service.add_transaction(
            user_id,
            account_id=account_id,
            type=txn_type,
            amount=txn_amount,
            note=note,
            extra_account_id=extra_account_id,
            created_at=created_at,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    txn = transaction_service.get_transaction(user_id, transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Account: {txn.account_name} ({txn.type} {txn.amount:,.2f})")
    if extra_account_id is not None:
        effect = resolve_secondary_effect(txn.account_name, txn.account_type, txn.type, txn.account_role)
        extra = account_service.get_account(user_id, extra_account_id)
        if effect == NONE:
            click.echo(f"  Extra account: {extra.name} (unchanged)")
        else:
            click.echo(f"  Extra account: {extra.name} ({effect} {txn.amount:,.2f})")
    if note:
        click.echo(f"  Note: {note}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
