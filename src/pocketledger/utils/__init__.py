"""Utility functions for pocketledger."""

from pocketledger.utils.date_parser import parse_date, start_of_day
from pocketledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "start_of_day", "parse_amount"]
