"""Exceptions raised by the gastos stores and domain helpers."""

from typing import Any


class GastosError(Exception):
    """Base class for all gastos errors."""


class ValidationError(GastosError, ValueError):
    """Raised when input is rejected before any state change."""


class NotFoundError(GastosError, LookupError):
    """Raised when a snapshot or expense cannot be located."""


class PersistenceError(GastosError, OSError):
    """Raised when the backing store cannot be read or written.

    For mutating store operations this is non-fatal: the in-memory change has
    already been applied and ``result`` holds what the operation returned.
    """

    def __init__(self, message: str, result: Any = None) -> None:
        super().__init__(message)
        self.result = result
