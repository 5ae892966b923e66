"""Custom exception hierarchy for pybustrack."""

from __future__ import annotations

from typing import Any


class BusTrackError(Exception):
    """Base exception for all pybustrack errors."""


class BusTrackConfigError(BusTrackError):
    """Invalid or missing configuration."""


class StoreError(BusTrackError):
    """Storage-level failure (engine, schema, connection lifecycle)."""

    def __init__(
        self,
        message: str,
        *,
        location: str = "",
    ) -> None:
        self.location = location
        super().__init__(message)


class StoreConnectionError(StoreError):
    """Storage could not be opened or initialized, or the store is not ready.

    Raised by ``open()`` when the engine refuses the location or the schema
    script fails, and by every other operation when called on a store that
    was never opened or has already been closed.
    """


class StoreWriteError(StoreError):
    """A write statement failed to bind or execute.

    The transaction is rolled back before this is raised, so the target
    table is left exactly as it was before the call.
    """

    def __init__(
        self,
        message: str,
        *,
        location: str = "",
        table: str = "",
    ) -> None:
        self.table = table
        super().__init__(message, location=location)


class RecordFormatError(BusTrackError):
    """A stored value cannot be decoded back into a :class:`~pybustrack.models.Record`."""

    def __init__(
        self,
        message: str,
        *,
        column: str = "",
        value: Any = None,
    ) -> None:
        self.column = column
        self.value = value
        super().__init__(message)
