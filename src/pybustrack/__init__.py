"""pybustrack - Persistence layer for bus fleet location telemetry."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybustrack")
except PackageNotFoundError:
    __version__ = "0+local"
from pybustrack.codec import RecordRow, decode_row, encode_record
from pybustrack.config import StoreConfig
from pybustrack.exceptions import (
    BusTrackConfigError,
    BusTrackError,
    RecordFormatError,
    StoreConnectionError,
    StoreError,
    StoreWriteError,
)
from pybustrack.models import Position, Record
from pybustrack.store import (
    DiagnosticStore,
    InMemoryStore,
    RecordStore,
    SQLiteStore,
    open_store,
)

__all__ = [
    "__version__",
    "BusTrackConfigError",
    "BusTrackError",
    "DiagnosticStore",
    "InMemoryStore",
    "Position",
    "Record",
    "RecordFormatError",
    "RecordRow",
    "RecordStore",
    "SQLiteStore",
    "StoreConfig",
    "StoreConnectionError",
    "StoreError",
    "StoreWriteError",
    "decode_row",
    "encode_record",
    "open_store",
]
