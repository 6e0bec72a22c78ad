"""CSV import command."""

import click
from cashbook.cli.commands.account import ACCOUNT_TYPE_CHOICE
from cashbook.cli.error_handling import handle_domain_error
from cashbook.domain.csv_import import CSVImportService
from cashbook.domain.errors import DomainError


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--account-type",
    type=ACCOUNT_TYPE_CHOICE,
    default="Asset",
    show_default=True,
    help="Type given to accounts created for new categories",
)
@click.pass_context
def import_csv(ctx, csv_file: str, account_type: str):
    """Import transactions from a cash book CSV export.

    The file needs Date and Category columns; Time, Cash In, Cash Out and
    Remark are optional. Every category becomes an account.
    """
    service = CSVImportService(ctx.obj["db"])

    try:
        result = service.import_csv(ctx.obj["user_id"], csv_file, account_type=account_type)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} transactions")
    if result["created_accounts"]:
        click.echo(f"  Created accounts: {', '.join(result['created_accounts'])}")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
