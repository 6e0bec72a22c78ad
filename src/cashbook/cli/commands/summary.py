"""Summary and statement commands."""

import click
from cashbook.cli.account_resolution import resolve_account_or_exit
from cashbook.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from cashbook.cli.error_handling import handle_domain_error
from cashbook.domain.account import AccountService
from cashbook.domain.errors import DomainError
from cashbook.domain.summary import SummaryService


def _amount(value) -> str:
    return f"{value:,.2f}"


@click.command("summary")
@click.pass_context
def summary(ctx):
    """Show totals across all accounts."""
    service = SummaryService(ctx.obj["db"])
    result = service.get_summary(ctx.obj["user_id"])

    click.echo("\nSummary:")
    click.echo("-" * 60)
    click.echo(f"{'Total (everything)':<40} {_amount(result.total_everything):>19}")
    click.echo(f"{'Total (excluding funds)':<40} {_amount(result.total_excluding_funds):>19}")
    click.echo(f"{'Investment':<40} {_amount(result.investment_only):>19}")
    click.echo(f"{'Cash in hand and bank':<40} {_amount(result.cash_balance):>19}")
    click.echo("-" * 60)
    click.echo(f"{'To take from parties':<40} {_amount(result.total_to_take_from_parties):>19}")
    click.echo(f"{'To pay to parties':<40} {_amount(result.total_to_pay_to_parties):>19}")
    click.echo(f"{'Funds':<40} {_amount(result.total_funds):>19}")


@click.command("statement")
@click.argument("account", metavar="ACCOUNT")
@period_options
@click.pass_context
def statement(ctx, account: str, start_date: str | None, end_date: str | None, **period_kwargs):
    """Show a running-balance statement for an account.

    ACCOUNT can be an account name or ID.

    Examples:
        cashbook statement Cash --this-month
        cashbook statement Alice --start-date 2024-01-01 --end-date 2024-03-31
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_kwargs),
    )

    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        result = SummaryService(db).get_statement(user_id, account_id, start_date=start, end_date=end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nStatement for {result.account.name} ({result.account.type})")
    click.echo("-" * 90)
    click.echo(f"{'Opening balance':<60} {_amount(result.opening_balance):>29}")
    click.echo("-" * 90)
    if not result.rows:
        click.echo("No transactions in this period.")
    else:
        click.echo(f"{'Date':<17} {'Note':<25} {'Cash In':>14} {'Cash Out':>14} {'Balance':>16}")
        for row in result.rows:
            cash_in = _amount(row.credit) if row.credit else ""
            cash_out = _amount(row.debit) if row.debit else ""
            click.echo(
                f"{row.created_at:%Y-%m-%d %H:%M} {(row.note or '')[:25]:<25} "
                f"{cash_in:>14} {cash_out:>14} {_amount(row.balance):>16}"
            )
    click.echo("-" * 90)
    click.echo(f"{'Total cash in':<60} {_amount(result.total_cash_in):>29}")
    click.echo(f"{'Total cash out':<60} {_amount(result.total_cash_out):>29}")
    click.echo(f"{'Closing balance':<60} {_amount(result.closing_balance):>29}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(statement)
