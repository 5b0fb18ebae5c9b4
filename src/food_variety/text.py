"""Text normalization and display formatting helpers."""

from datetime import datetime

_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


def normalize_name(text: str) -> str:
    """Return the display form of a name: trimmed and lower-cased."""
    return text.strip().lower()


def normalize_for_comparison(text: str) -> str:
    """Return the matching key of a text: display form with spaces removed."""
    return normalize_name(text).replace(" ", "")


def suffix_with_ordinal(number: int) -> str:
    """Return the number with its English ordinal suffix (1st, 12th, 23rd)."""
    if 11 <= number % 100 <= 13:
        return f"{number}th"
    return f"{number}{_ORDINAL_SUFFIXES.get(number % 10, 'th')}"


def format_date(value: datetime) -> str:
    """Format a date as 'January 7th, 2024'."""
    return f"{value.strftime('%B')} {suffix_with_ordinal(value.day)}, {value.year}"


def format_date_with_time(value: datetime) -> str:
    """Format a date as 'January 7th, 09:05'."""
    return f"{value.strftime('%B')} {suffix_with_ordinal(value.day)}, {value:%H:%M}"
