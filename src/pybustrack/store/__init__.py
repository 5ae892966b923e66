"""Telemetry persistence: store interfaces, implementations and factory."""

from __future__ import annotations

import os

from pybustrack.config import MEMORY_LOCATION, StoreConfig
from pybustrack.store.base import RECORDS_TABLE, STATUS_TABLE, DiagnosticStore, RecordStore
from pybustrack.store.memory import InMemoryStore
from pybustrack.store.sqlite import SQLiteStore


def open_store(location: str | os.PathLike[str] | StoreConfig = MEMORY_LOCATION) -> SQLiteStore:
    """Open a ready-to-use SQLite store.

    *location* is ``":memory:"`` (the default), a database file path, or a
    full :class:`StoreConfig`.
    """
    if isinstance(location, StoreConfig):
        config = location
    elif location == MEMORY_LOCATION:
        config = StoreConfig.in_memory()
    else:
        config = StoreConfig.from_path(location)
    return SQLiteStore(config).open()


__all__ = [
    "RECORDS_TABLE",
    "STATUS_TABLE",
    "DiagnosticStore",
    "InMemoryStore",
    "RecordStore",
    "SQLiteStore",
    "open_store",
]
