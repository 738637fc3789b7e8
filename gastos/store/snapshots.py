"""Named copies of the expense list ("months")."""

import json
import logging
from collections.abc import Iterable
from typing import Any

from gastos.domain.models import ExpenseRecord
from gastos.errors import NotFoundError, PersistenceError, ValidationError
from gastos.store.backends import KeyValueBackend
from gastos.store.expenses import decode_records, encode_records, read_json

logger = logging.getLogger(__name__)

MONTHS_KEY = "gastos_months_v1"


def normalize_name(name: str | None) -> str:
    """Strip a snapshot name and reject blank ones.

    Raises:
        ValidationError: If the name is empty or only whitespace.
    """
    if name is None or not name.strip():
        raise ValidationError("Month name cannot be empty")
    return name.strip()


class SnapshotStore:
    """Owns saved months, each an independent copy of an expense list.

    Saving under an existing name overwrites it silently.
    """

    def __init__(self, backend: KeyValueBackend, key: str = MONTHS_KEY) -> None:
        self._backend = backend
        self._key = key
        self._snapshots: dict[str, tuple[ExpenseRecord, ...]] = {}
        self.refresh()

    def refresh(self) -> None:
        """Replace the in-memory snapshots with what the backend holds.

        Raises:
            PersistenceError: If the backend cannot be read.
        """
        raw = read_json(self._backend, self._key)
        if raw is None:
            self._snapshots = {}
        elif not isinstance(raw, dict):
            logger.warning("Expected an object of months under '%s'; starting empty", self._key)
            self._snapshots = {}
        else:
            self._snapshots = {
                str(name): tuple(decode_records(records, f"{self._key}[{name}]")) for name, records in raw.items()
            }
        logger.debug("Loaded %d saved months", len(self._snapshots))

    def save(self, name: str, records: Iterable[ExpenseRecord]) -> str:
        """Store a copy of records under name.

        Args:
            name: Month name; surrounding whitespace is dropped.
            records: Records to copy.

        Returns:
            The name the snapshot was stored under.

        Raises:
            ValidationError: If the name is blank.
            PersistenceError: If the snapshot was stored but could not be saved.
        """
        key = normalize_name(name)
        # Records are frozen, so copying the sequence is enough to detach it.
        self._snapshots[key] = tuple(records)
        logger.info("Saved month '%s' (%d records)", key, len(self._snapshots[key]))
        self._persist(key)
        return key

    def load(self, name: str) -> list[ExpenseRecord]:
        """Return a fresh copy of the records saved under name.

        Raises:
            NotFoundError: If no month has that name.
        """
        key = name.strip() if name else ""
        try:
            return list(self._snapshots[key])
        except KeyError as e:
            raise NotFoundError(f"Month '{name}' not found") from e

    def delete(self, name: str) -> None:
        """Remove a saved month.

        Raises:
            NotFoundError: If no month has that name.
            PersistenceError: If the month was removed but the change could not be saved.
        """
        key = name.strip() if name else ""
        if key not in self._snapshots:
            raise NotFoundError(f"Month '{name}' not found")
        del self._snapshots[key]
        logger.info("Deleted month '%s'", key)
        self._persist(None)

    def list_names(self) -> list[str]:
        """Return all saved month names."""
        return list(self._snapshots)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._snapshots

    def _persist(self, result: Any) -> None:
        payload = {name: encode_records(records) for name, records in self._snapshots.items()}
        try:
            self._backend.write(self._key, json.dumps(payload, ensure_ascii=False))
        except PersistenceError as e:
            logger.warning("Could not save months: %s", e)
            raise PersistenceError(str(e), result=result) from e
