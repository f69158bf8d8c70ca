from __future__ import annotations


class ExpenseTrackerError(RuntimeError):
    pass


class ValidationError(ExpenseTrackerError):
    """Malformed input, reported before the store is touched."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class StoreUnavailableError(ExpenseTrackerError):
    """The backing database could not be reached or kept timing out."""


class StoreIntegrityError(ExpenseTrackerError):
    """The store rejected an insert and no record explains the rejection."""
