"""CLI error handling helpers."""

import click

from cashbook.domain.errors import DomainError, PartialApplicationError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, PartialApplicationError):
        click.echo("Warning: some balance changes were saved; check the affected accounts.", err=True)
    ctx.exit(1)
