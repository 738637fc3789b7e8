"""Domain types for gastos.

- Category: the closed set of six expense labels
- ExpenseRecord: a single logged expense (immutable)
- Amount: positive decimal amount in pesos

The coercion helpers turn raw user input into domain values and raise
ValidationError for anything that cannot become one.
"""

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import Any, NewType

from gastos.errors import ValidationError

# Amounts are kept as Decimal so sums never drift
Amount = NewType("Amount", Decimal)


class Category(StrEnum):
    """Expense categories, in display order."""

    CASA = "casa"
    PERSONAL = "personal"
    OCIO = "ocio"
    COMIDA = "comida"
    EVENTUALES = "eventuales"
    LOLO = "lolo"


DEFAULT_CATEGORY = Category.COMIDA

# Largest amount whose cents still fit exactly in a JSON (double) number
MAX_AMOUNT = Decimal("1000000000000")
_CENT = Decimal("0.01")


def parse_amount(raw: object) -> Amount:
    """Coerce raw input into a positive, finite amount.

    Amounts are limited to whole cents and to MAX_AMOUNT so they survive the
    JSON number format unchanged. Trailing zeros are dropped ("12.50" becomes
    12.5, "1E+3" becomes 1000).

    Args:
        raw: Number or numeric string.

    Returns:
        Amount as Decimal.

    Raises:
        ValidationError: If the value is not a number, is not greater than zero,
            is larger than MAX_AMOUNT or has fractions of a cent.
    """
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(f"Invalid amount: {raw!r}")
    if isinstance(raw, float) and not math.isfinite(raw):
        raise ValidationError(f"Invalid amount: {raw!r}")
    try:
        amount = raw if isinstance(raw, Decimal) else Decimal(str(raw).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(f"Invalid amount: {raw!r}") from e

    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {raw!r}")
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Amount must not exceed {MAX_AMOUNT:,}")

    cents = amount.quantize(_CENT)
    if cents != amount:
        raise ValidationError(f"Invalid amount: {raw!r}. Use at most two decimals")
    if cents == cents.to_integral_value():
        return Amount(cents.quantize(Decimal(1)))
    return Amount(cents.normalize())


def parse_category(raw: object) -> Category:
    """Coerce a label (any case) into a Category.

    Raises:
        ValidationError: If the label is not one of the six categories.
    """
    if isinstance(raw, Category):
        return raw
    if not isinstance(raw, str):
        raise ValidationError(f"Invalid category: {raw!r}")
    try:
        return Category(raw.strip().lower())
    except ValueError as e:
        allowed = ", ".join(c.value for c in Category)
        raise ValidationError(f"Invalid category '{raw}'. Choose one of: {allowed}") from e


def parse_date(raw: object) -> date:
    """Coerce a date, datetime or YYYY-MM-DD string into a calendar date.

    Raises:
        ValidationError: If the value is not a valid calendar date.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        try:
            return date.fromisoformat(raw.strip())
        except ValueError as e:
            raise ValidationError(f"Invalid date '{raw}'. Expected YYYY-MM-DD") from e
    raise ValidationError(f"Invalid date: {raw!r}")


def new_record_id() -> str:
    """Generate an opaque unique record identifier."""
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_created_at(raw: object) -> datetime:
    # createdAt is informational; anything unreadable falls back to now
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return _utcnow()
    try:
        return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return _utcnow()


@dataclass(frozen=True)
class ExpenseRecord:
    """Immutable expense record."""

    id: str
    amount: Amount
    description: str
    category: Category
    date: date
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(
        cls,
        amount: object,
        description: str | None,
        category: object,
        date: object,
    ) -> "ExpenseRecord":
        """Validate raw input and build a new record with a fresh id.

        Raises:
            ValidationError: If amount, category or date is invalid.
        """
        return cls(
            id=new_record_id(),
            amount=parse_amount(amount),
            description=(description or "").strip(),
            category=parse_category(category),
            date=parse_date(date),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON wire format.

        Keys are id, amount, desc, category, date and createdAt (epoch ms).
        """
        amount: int | float
        if self.amount == self.amount.to_integral_value():
            amount = int(self.amount)
        else:
            amount = float(self.amount)
        return {
            "id": self.id,
            "amount": amount,
            "desc": self.description,
            "category": self.category.value,
            "date": self.date.isoformat(),
            "createdAt": int(self.created_at.timestamp() * 1000),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExpenseRecord":
        """Hydrate a record from its wire format.

        Raises:
            ValidationError: If a field is missing or invalid.
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Expected an object, got {type(data).__name__}")
        try:
            record_id = str(data["id"])
            raw_amount = data["amount"]
            raw_category = data["category"]
            raw_date = data["date"]
        except KeyError as e:
            raise ValidationError(f"Missing field {e.args[0]!r}") from e

        created_at = _parse_created_at(data.get("createdAt"))

        return cls(
            id=record_id,
            amount=parse_amount(raw_amount),
            description=str(data.get("desc") or ""),
            category=parse_category(raw_category),
            date=parse_date(raw_date),
            created_at=created_at,
        )
