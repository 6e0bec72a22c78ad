"""Utility functions for cashbook."""

from cashbook.utils.date_parser import parse_date, parse_datetime
from cashbook.utils.amount_parser import parse_amount
from cashbook.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_datetime", "parse_amount", "resolve_account"]
