"""CLI helpers for date range options."""

from datetime import date
from typing import Callable

import click

from cashbook.utils.date_parser import PERIODS, get_date_range, parse_date

PERIOD_FLAGS = ", ".join(f"--{period}" for period in PERIODS)


def period_options(func: Callable) -> Callable:
    """Add --start-date/--end-date and one flag per named period to a command.

    The flags arrive as keyword arguments named after the period with
    underscores (``this_month`` and so on); pass them through
    :func:`collect_period_flags`.
    """
    for period in reversed(PERIODS):
        relation, unit = period.split("-")
        label = "current" if relation == "this" else "previous"
        func = click.option(f"--{period}", is_flag=True, help=f"Filter to {label} {unit}")(func)
    func = click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")(func)
    func = click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")(func)
    return func


def collect_period_flags(kwargs: dict) -> dict[str, bool]:
    """Pop the period flags added by :func:`period_options` out of ``kwargs``."""
    return {period: kwargs.pop(period.replace("-", "_"), False) for period in PERIODS}


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates.

    Exits with status 1 on conflicting options or unparseable dates.
    """
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(f"Error: Only one period option ({PERIOD_FLAGS}) can be specified at a time.", err=True)
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    start = None
    end = None
    for label, value in (("start", start_date), ("end", end_date)):
        if not value:
            continue
        try:
            parsed = parse_date(value)
        except ValueError as e:
            click.echo(f"Error: Invalid {label} date: {e}", err=True)
            ctx.exit(1)
        if label == "start":
            start = parsed
        else:
            end = parsed

    if start is None and end is None and default_range is not None:
        return default_range
    return start, end
