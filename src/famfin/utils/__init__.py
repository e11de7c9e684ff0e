"""Utility functions for famfin."""

from famfin.utils.date_parser import parse_date, parse_user_date
from famfin.utils.amount_parser import parse_amount, signed_amount

__all__ = ["parse_date", "parse_user_date", "parse_amount", "signed_amount"]
