"""Date helpers shared by the Tempo mixins."""

from datetime import date

# Tempo wants midnight local time without an offset
TEMPO_DAY_START = "T00:00:00.000"


def parse_date_ymd(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` string.

    Returns:
        The parsed date, or None for an empty value

    Raises:
        ValueError: If the string is not a valid calendar date
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD") from e


def to_tempo_datetime(value: str) -> str:
    """Turn ``2025-07-01`` into ``2025-07-01T00:00:00.000``."""
    parse_date_ymd(value)
    return f"{value}{TEMPO_DAY_START}"


def started_date(started: str | None) -> str:
    """Extract the calendar date from a worklog ``started`` value.

    Tempo returns ``2025-07-02 00:00:00.000`` and Jira returns
    ``2025-07-02T09:00:00.000+0000``; both begin with the ISO date.
    """
    if not started:
        return ""
    return started[:10]


def in_date_range(started: str | None, from_date: str, to_date: str) -> bool:
    """True when the date part of ``started`` lies in ``[from_date, to_date]``."""
    day = started_date(started)
    if not day:
        return False
    return from_date <= day <= to_date
