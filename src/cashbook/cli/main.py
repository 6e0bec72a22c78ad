"""Main CLI entry point."""

import click
from cashbook.database.factories import create_sqlite_database
from cashbook.logging import setup_logging

# Import and register all commands at module level
from cashbook.cli.commands import (
    account,
    add,
    import_cmd,
    summary,
    transaction,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CASHBOOK_DB_PATH environment variable)",
    envvar="CASHBOOK_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    default="default",
    show_default=True,
    help="User whose accounts and transactions to use",
    envvar="CASHBOOK_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level for diagnostic output on stderr",
    envvar="CASHBOOK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str, log_level: str | None):
    """Cashbook - Account balances and cash book tracking.

    Record credits and debits against asset, party and fund accounts. A
    transaction may also move money on a second ("extra") account.
    """
    ctx.ensure_object(dict)

    if log_level is not None:
        setup_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
import_cmd.register_commands(cli)
summary.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
