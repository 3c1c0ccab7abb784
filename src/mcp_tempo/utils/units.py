"""Conversions between decimal hours and the integer seconds Tempo stores."""

SECONDS_PER_HOUR = 3600


def hours_to_seconds(hours: float) -> int:
    """Convert decimal hours to whole seconds, rounding to the nearest second."""
    return round(hours * SECONDS_PER_HOUR)


def seconds_to_hours(seconds: int | float) -> float:
    """Convert seconds to hours rounded to two decimal places."""
    return round(seconds / SECONDS_PER_HOUR, 2)
