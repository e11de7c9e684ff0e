"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser


def parse_date(date_str: str) -> date:
    """Parse an ISO calendar date (``YYYY-MM-DD``) into a date object.

    Full ISO timestamps are accepted too and truncated to their date part.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string is not a valid calendar date
    """
    if not date_str or not date_str.strip():
        raise ValueError("Empty date string")

    try:
        return date_parser.isoparse(date_str.strip()).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_user_date(date_str: str) -> date:
    """Parse a date typed on the command line.

    Besides absolute dates this accepts "today" and "yesterday".
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
