"""Pure functions for date-range filtering and totals.

This module contains the functional core for summaries:
- No I/O operations (no storage, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All amounts are Decimal (Amount type).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal

from gastos.domain.models import Amount, Category, ExpenseRecord

# Range start is start-of-day, range end is end-of-day, records sit at midday,
# so records dated on either boundary are always included.
_RANGE_START = time.min
_RANGE_END = time.max
_RECORD_TIME = time(12, 0)


@dataclass(frozen=True)
class RangeSummary:
    """Immutable summary of the expenses inside a date range."""

    start: date
    end: date
    records: list[ExpenseRecord]
    total: Amount
    by_category: dict[Category, Amount]


def filter_by_range(records: Iterable[ExpenseRecord], start: date, end: date) -> list[ExpenseRecord]:
    """Keep records whose date falls inside the inclusive range.

    Args:
        records: Records to filter.
        start: First day of the range.
        end: Last day of the range.

    Returns:
        Matching records in input order. Empty when start is after end.
    """
    lower = datetime.combine(start, _RANGE_START)
    upper = datetime.combine(end, _RANGE_END)
    if lower > upper:
        return []
    return [r for r in records if lower <= datetime.combine(r.date, _RECORD_TIME) <= upper]


def total(records: Iterable[ExpenseRecord]) -> Amount:
    """Sum amounts. Empty input yields zero."""
    return Amount(sum((r.amount for r in records), start=Decimal(0)))


def totals_by_category(records: Iterable[ExpenseRecord]) -> dict[Category, Amount]:
    """Sum amounts per category.

    Args:
        records: Records to aggregate.

    Returns:
        Mapping with every category present (zero when unused), in display order.
    """
    totals = {category: Decimal(0) for category in Category}
    for record in records:
        totals[record.category] += record.amount
    return {category: Amount(amount) for category, amount in totals.items()}


def sort_for_display(records: Sequence[ExpenseRecord]) -> list[ExpenseRecord]:
    """Sort most recent date first, keeping input order for equal dates."""
    return sorted(records, key=lambda r: r.date, reverse=True)


def sort_chronological(records: Sequence[ExpenseRecord]) -> list[ExpenseRecord]:
    """Sort oldest date first, keeping input order for equal dates."""
    return sorted(records, key=lambda r: r.date)


def summarize(records: Iterable[ExpenseRecord], start: date, end: date) -> RangeSummary:
    """Create the summary shown for a date range.

    Args:
        records: Full record list.
        start: First day of the range.
        end: Last day of the range.

    Returns:
        RangeSummary with filtered records (most recent first) and totals.
    """
    filtered = filter_by_range(records, start, end)
    return RangeSummary(
        start=start,
        end=end,
        records=sort_for_display(filtered),
        total=total(filtered),
        by_category=totals_by_category(filtered),
    )
