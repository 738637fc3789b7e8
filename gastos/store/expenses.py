"""The live expense list and its persistence."""

import json
import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from gastos.domain.models import ExpenseRecord
from gastos.errors import NotFoundError, PersistenceError, ValidationError
from gastos.store.backends import KeyValueBackend

logger = logging.getLogger(__name__)

ITEMS_KEY = "gastos_items_v1"


def decode_records(raw: Any, source: str) -> list[ExpenseRecord]:
    """Hydrate records from a decoded JSON list, skipping malformed entries.

    Args:
        raw: Decoded JSON value expected to be a list of record objects.
        source: Label used in log messages.

    Returns:
        Valid records in stored order. Anything but a list yields an empty list.
    """
    if not isinstance(raw, list):
        logger.warning("Expected a list of expenses in %s, got %s; starting empty", source, type(raw).__name__)
        return []

    records = []
    for index, item in enumerate(raw):
        try:
            records.append(ExpenseRecord.from_dict(item))
        except ValidationError as e:
            logger.warning("Skipping malformed expense #%d in %s: %s", index, source, e)
    return records


def encode_records(records: Iterable[ExpenseRecord]) -> list[dict[str, Any]]:
    """Serialize records to JSON-native dicts."""
    return [record.to_dict() for record in records]


def read_json(backend: KeyValueBackend, key: str) -> Any:
    """Read and decode the JSON stored under key.

    Returns:
        Decoded value, or None if the slot is missing or not valid JSON.

    Raises:
        PersistenceError: If the backend itself fails.
    """
    text = backend.read(key)
    if text is None:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring malformed JSON under '%s': %s", key, e)
        return None


class ExpenseStore:
    """Owns the live expense list, most recent insertion first.

    Every mutation is written to the backend before returning. If that write
    fails the mutation still stands in memory and PersistenceError is raised
    with the operation's return value attached.
    """

    def __init__(self, backend: KeyValueBackend, key: str = ITEMS_KEY) -> None:
        self._backend = backend
        self._key = key
        self._records: list[ExpenseRecord] = []
        self.refresh()

    def refresh(self) -> None:
        """Replace the in-memory list with what the backend holds.

        Raises:
            PersistenceError: If the backend cannot be read.
        """
        raw = read_json(self._backend, self._key)
        self._records = [] if raw is None else decode_records(raw, self._key)
        logger.debug("Loaded %d expenses", len(self._records))

    def add(
        self,
        amount: object,
        description: str | None,
        category: object,
        date: date | str,
    ) -> ExpenseRecord:
        """Validate and prepend a new expense.

        Args:
            amount: Positive number.
            description: Free text, may be empty.
            category: One of the six category labels.
            date: Calendar date or YYYY-MM-DD string.

        Returns:
            The stored record.

        Raises:
            ValidationError: If any field is invalid. The list is unchanged.
            PersistenceError: If the record was added but could not be saved.
        """
        record = ExpenseRecord.create(amount, description, category, date)
        self._records.insert(0, record)
        logger.info("Added expense %s (%s %s)", record.id, record.category.value, record.amount)
        self._persist(record)
        return record

    def remove(self, record_id: str) -> bool:
        """Remove the record with the given id.

        Returns:
            True if a record was removed, False if the id was not present.

        Raises:
            PersistenceError: If the record was removed but the list could not be saved.
        """
        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            return False
        self._records = remaining
        logger.info("Removed expense %s", record_id)
        self._persist(True)
        return True

    def replace_all(self, records: Iterable[ExpenseRecord]) -> None:
        """Replace the whole list (snapshot load, clear all).

        Raises:
            PersistenceError: If the list was replaced but could not be saved.
        """
        self._records = list(records)
        logger.info("Replaced expense list (%d records)", len(self._records))
        self._persist(None)

    def clear(self) -> None:
        """Remove every expense."""
        self.replace_all([])

    def get(self, record_id: str) -> ExpenseRecord:
        """Return the record with the given id.

        Raises:
            NotFoundError: If no record has that id.
        """
        for record in self._records:
            if record.id == record_id:
                return record
        raise NotFoundError(f"Expense '{record_id}' not found")

    def list(self) -> list[ExpenseRecord]:
        """Return a copy of the current records."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def _persist(self, result: Any) -> None:
        payload = json.dumps(encode_records(self._records), ensure_ascii=False)
        try:
            self._backend.write(self._key, payload)
        except PersistenceError as e:
            logger.warning("Could not save expenses: %s", e)
            raise PersistenceError(str(e), result=result) from e
