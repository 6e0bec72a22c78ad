"""Account management commands."""

import click
from cashbook.cli.account_resolution import resolve_account_or_exit
from cashbook.cli.error_handling import handle_domain_error
from cashbook.domain.account import AccountService
from cashbook.domain.entities import ACCOUNT_ROLES, ACCOUNT_TYPES
from cashbook.domain.errors import DomainError

ACCOUNT_TYPE_CHOICE = click.Choice(ACCOUNT_TYPES, case_sensitive=False)


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, default="Asset", show_default=True, help="Account type")
@click.option("--balance", default="0", show_default=True, help="Opening balance")
@click.option(
    "--role",
    type=click.Choice(ACCOUNT_ROLES),
    help="Account role (accounts named 'Investment' default to transfer-inverted)",
)
@click.option("--disabled", is_flag=True, help="Create the account disabled")
@click.pass_context
def create_account(ctx, name: str, account_type: str, balance: str, role: str | None, disabled: bool):
    """Create a new account.

    Examples:
        cashbook account create "Cash"
        cashbook account create "Alice" --type party
        cashbook account create "Emergency" --type fund --balance 500
    """
    service = AccountService(ctx.obj["db"])

    try:
        account_id = service.create_account(
            ctx.obj["user_id"],
            name=name,
            type=account_type,
            balance=balance,
            disabled=disabled,
            role=role,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    account = service.get_account(ctx.obj["user_id"], account_id)
    click.echo(f"Created {account.type} account '{account.name}' (ID: {account_id})")
    if account.role:
        click.echo(f"Role set to '{account.role}'")


@account_group.command("defaults")
@click.pass_context
def create_default_accounts(ctx):
    """Create the Cash, Bank and Investment accounts."""
    service = AccountService(ctx.obj["db"])
    created = service.create_default_accounts(ctx.obj["user_id"])
    if not created:
        click.echo("Default accounts already exist.")
        return
    click.echo(f"Created {len(created)} default account(s).")


@account_group.command("list")
@click.option("--active", is_flag=True, help="Hide disabled accounts")
@click.pass_context
def list_accounts(ctx, active: bool):
    """List all accounts with their balances."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(ctx.obj["user_id"], include_disabled=not active)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        status = " (disabled)" if acc.disabled else ""
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | {acc.type:6s} | {acc.balance:>14,.2f}{status}")


def _set_disabled(ctx, account: str, disabled: bool) -> None:
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        service.set_disabled(ctx.obj["user_id"], account_id, disabled)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{'Disabled' if disabled else 'Enabled'} account {account_id}")


@account_group.command("disable")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def disable_account(ctx, account: str) -> None:
    """Disable an account so it can't be picked for new transactions.

    The balance and transaction history are kept.
    """
    _set_disabled(ctx, account, True)


@account_group.command("enable")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def enable_account(ctx, account: str) -> None:
    """Enable a disabled account."""
    _set_disabled(ctx, account, False)


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, help="New account type (optional)")
@click.pass_context
def rename_account(ctx, account: str, new_name: str, account_type: str | None) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID. Existing transactions keep the
    name and type they were recorded with.

    Examples:
        cashbook account rename "Bank" "Savings Bank"
        cashbook account rename 4 "Alice" --type party
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        service.rename_account(ctx.obj["user_id"], account_id, name=new_name, type=account_type)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Renamed account to '{new_name}'")
    if account_type is not None:
        click.echo(f"Account type updated to '{account_type}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no transaction uses it, either as
    its account or as its extra account.
    """
    service = AccountService(ctx.obj["db"])
    user_id = ctx.obj["user_id"]
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(user_id, account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(user_id, account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
