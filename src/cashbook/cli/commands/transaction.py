"""Transaction management commands."""

import click
from cashbook.cli.account_resolution import resolve_account_or_exit
from cashbook.cli.commands.add import TRANSACTION_TYPE_CHOICE
from cashbook.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from cashbook.cli.error_handling import handle_domain_error
from cashbook.domain.account import AccountService
from cashbook.domain.errors import DomainError
from cashbook.domain.transaction import TransactionService
from cashbook.utils.amount_parser import parse_amount


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--type", "txn_type", type=TRANSACTION_TYPE_CHOICE, help="Effect on the account")
@click.option("--amount", help="Transaction amount")
@click.option("--extra-account", help="Extra account name or ID")
@click.option("--no-extra-account", is_flag=True, help="Remove the extra account")
@click.option("--note", help="Note")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    txn_type: str | None,
    amount: str | None,
    extra_account: str | None,
    no_extra_account: bool,
    note: str | None,
) -> None:
    """Update a transaction.

    Options that are not given keep their current value. Balances are moved
    from the old accounts to the new ones.

    Examples:
        cashbook transaction update 1 --amount 750
        cashbook transaction update 1 --account Bank --type debit
        cashbook transaction update 1 --no-extra-account
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)

    if extra_account is not None and no_extra_account:
        click.echo("Error: --extra-account and --no-extra-account cannot be combined.", err=True)
        ctx.exit(1)

    txn = transaction_service.get_transaction(user_id, transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    account_id = txn.account_id
    if account is not None:
        account_id = resolve_account_or_exit(ctx, account_service, account)

    extra_account_id = txn.extra_account_id
    if no_extra_account:
        extra_account_id = None
    elif extra_account is not None:
        extra_account_id = resolve_account_or_exit(ctx, account_service, extra_account)

    txn_amount = txn.amount
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        transaction_service.update_transaction(
            user_id,
            transaction_id,
            account_id=account_id,
            type=txn_type or txn.type,
            amount=txn_amount,
            note=note if note is not None else txn.note,
            extra_account_id=extra_account_id,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@period_options
@click.option("--month", type=click.IntRange(1, 12), help="Only this month (1-12)")
@click.option("--year", type=int, help="Only this year")
@click.option("--account", help="Account name or ID (matches account or extra account)")
@click.option("--verbose", "-v", is_flag=True, help="Show all fields including the account snapshot")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    month: int | None,
    year: int | None,
    account: str | None,
    verbose: bool,
    **period_kwargs,
):
    """View transactions with optional filters, newest first."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = TransactionService(db)
    account_service = AccountService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_kwargs),
    )

    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, account_service, account)

    transactions = service.list_transactions(
        user_id, account_id=account_id, start_date=start, end_date=end, month=month, year=year
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    # Get account names for display
    accounts = {acc.id: acc.name for acc in account_service.list_accounts(user_id)}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.created_at:%Y-%m-%d %H:%M}")
            click.echo(f"  Type: {txn.type}")
            click.echo(f"  Amount: {txn.amount:,.2f}")
            click.echo(f"  Account: {accounts.get(txn.account_id, 'Unknown')} (ID: {txn.account_id})")
            if txn.extra_account_id is not None:
                click.echo(
                    f"  Extra account: {accounts.get(txn.extra_account_id, 'Unknown')} (ID: {txn.extra_account_id})"
                )
            click.echo(f"  Recorded as: {txn.account_name} / {txn.account_type}")
            if txn.note:
                click.echo(f"  Note: {txn.note}")
            click.echo("-" * 100)
    else:
        click.echo("-" * 100)
        click.echo(f"{'ID':<6} {'Date':<17} {'Type':<7} {'Amount':>12}  {'Account':<18} {'Extra':<18} {'Note':<20}")
        click.echo("-" * 100)
        for txn in transactions:
            extra = accounts.get(txn.extra_account_id, "Unknown") if txn.extra_account_id is not None else ""
            click.echo(
                f"{txn.id:<6} {txn.created_at:%Y-%m-%d %H:%M} {txn.type:<7} {txn.amount:>12,.2f}  "
                f"{accounts.get(txn.account_id, 'Unknown')[:18]:<18} {extra[:18]:<18} {(txn.note or '')[:20]:<20}"
            )

    total_credit = sum(txn.amount for txn in transactions if txn.type == "credit")
    total_debit = sum(txn.amount for txn in transactions if txn.type == "debit")
    click.echo("-" * 100)
    click.echo(f"Credits: {total_credit:,.2f} | Debits: {total_debit:,.2f} | Count: {len(transactions)}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction and take back its balance changes.

    Deleting a transaction that doesn't exist is not an error.

    Examples:
        cashbook transaction delete 1
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    transaction_service = TransactionService(db)

    txn = transaction_service.get_transaction(user_id, transaction_id)
    if txn is None:
        click.echo(f"Transaction {transaction_id} not found, nothing to delete.")
        return

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        transaction_service.delete_transaction(user_id, transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
