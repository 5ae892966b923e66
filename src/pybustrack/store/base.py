"""Structural store interfaces.

Having protocols here makes it easy to pass the in-memory fake to code
that writes telemetry, while keeping the production implementation
(:class:`~pybustrack.store.sqlite.SQLiteStore`) concrete.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pybustrack.models import Record

RECORDS_TABLE = "records"
STATUS_TABLE = "status"


@runtime_checkable
class RecordStore(Protocol):
    """Production write contract."""

    def add_record(self, record: Record) -> None:
        """Append *record* to the history table."""
        ...

    def update_status(self, record: Record) -> None:
        """Insert or replace the latest-state row for ``record.bus_id``."""
        ...


@runtime_checkable
class DiagnosticStore(RecordStore, Protocol):
    """Write contract plus full-table reads, for tests and diagnostics only.

    Neither read guarantees an ordering.
    """

    def list_records(self) -> list[Record]:
        ...

    def list_status(self) -> list[Record]:
        ...
