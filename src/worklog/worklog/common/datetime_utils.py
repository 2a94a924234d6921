from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock_time(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) string into time."""
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value, fmt).time()


def format_iso_date(value: date | str) -> str:
    if isinstance(value, str):
        return value
    return value.strftime("%Y-%m-%d")


def today_local() -> date:
    """Current calendar day in the server's local timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
