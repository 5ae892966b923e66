"""In-memory store for unit tests.

Rows are kept in their encoded form and decoded on read, so code under
test sees the same codec behaviour as with the SQLite store.
"""

from __future__ import annotations

from pybustrack.codec import RecordRow, decode_row, encode_record
from pybustrack.models import Record


class InMemoryStore:
    """Engine-free store with the same write semantics as ``SQLiteStore``."""

    def __init__(self) -> None:
        self._records: list[RecordRow] = []
        self._status: dict[int, RecordRow] = {}

    def add_record(self, record: Record) -> None:
        self._records.append(encode_record(record))

    def update_status(self, record: Record) -> None:
        row = encode_record(record)
        # Replace in place so a re-upserted bus keeps its slot.
        self._status[row.bus_id] = row

    def list_records(self) -> list[Record]:
        return [decode_row(row) for row in self._records]

    def list_status(self) -> list[Record]:
        return [decode_row(row) for row in self._status.values()]
