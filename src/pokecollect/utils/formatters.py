"""
Formatting utilities for displaying catalog and collection data.
"""
from datetime import datetime
from typing import Optional


def format_release_date(release_date: Optional[str], format_str: str = "%b %Y") -> str:
    """
    Format a ``yyyy-MM-dd`` release date for display.

    Args:
        release_date: Date string as sent by the backend
        format_str: Output format

    Returns:
        Formatted date (e.g. "May 2024"), or the input unchanged if unparsable
    """
    if not release_date:
        return "N/A"

    try:
        parsed = datetime.strptime(release_date, "%Y-%m-%d")
    except ValueError:
        return release_date

    return parsed.strftime(format_str)


def format_set_total(printed_total: int, total_cards: int) -> str:
    """Format a set's card count, showing secret rares beyond the printed total."""
    if total_cards > printed_total:
        return f"{printed_total} (+{total_cards - printed_total})"
    return str(printed_total)


def format_quantity(quantity: int) -> str:
    if quantity <= 0:
        return "Not owned"
    return f"x{quantity}"


def truncate_text(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """
    Truncate text to maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add when truncated

    Returns:
        Truncated text
    """
    if not text:
        return ""

    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
