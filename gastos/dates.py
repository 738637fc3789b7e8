"""Date utilities for gastos.

Pure functions for date range calculations.
"""

from datetime import date, datetime, timedelta

from gastos.errors import ValidationError


def month_range(month: str) -> tuple[date, date, str]:
    """Calculate the inclusive date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (first_day, last_day, label) where:
        - first_day: First day of month
        - last_day: Last day of month
        - label: Month as YYYY-MM (e.g., "2026-01")

    Raises:
        ValueError: If month is not a valid YYYY-MM string.
    """
    dt = datetime.strptime(month, "%Y-%m")
    first = dt.date()
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    last = next_month.date() - timedelta(days=1)
    return first, last, dt.strftime("%Y-%m")


def resolve_range(
    start: str | None,
    end: str | None,
    month: str | None,
    today: date,
) -> tuple[date, date]:
    """Work out the summary range from command line options.

    A month wins over explicit bounds. A missing bound defaults to today.

    Args:
        start: Optional first day (YYYY-MM-DD).
        end: Optional last day (YYYY-MM-DD).
        month: Optional month (YYYY-MM).
        today: Current date.

    Returns:
        Tuple of (start, end). start may be after end; callers get an empty range then.

    Raises:
        ValidationError: If any value is malformed.
    """
    if month:
        try:
            first, last, _ = month_range(month)
        except ValueError as e:
            raise ValidationError(f"Invalid month '{month}'. Expected YYYY-MM") from e
        return first, last

    return _parse_bound(start, today), _parse_bound(end, today)


def _parse_bound(value: str | None, default: date) -> date:
    if not value:
        return default
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date '{value}'. Expected YYYY-MM-DD") from e
