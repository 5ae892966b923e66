"""SQLite-backed telemetry store.

Usage::

    store = open_store("~/.pybustrack/fleet.db")

    # Every report goes into the history table...
    store.add_record(record)
    # ...and replaces the vehicle's latest known state.
    store.update_status(record)

    store.close()
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from types import TracebackType

from pybustrack.codec import COLUMNS, decode_row, encode_record
from pybustrack.config import StoreConfig
from pybustrack.exceptions import StoreConnectionError, StoreWriteError
from pybustrack.models import Record
from pybustrack.store.base import RECORDS_TABLE, STATUS_TABLE

_logger = logging.getLogger(__name__)

# Path to the SQL schema file bundled with this package
_SCHEMA_PATH = Path(__file__).with_name("schema.sql")

_COLUMN_LIST = ", ".join(COLUMNS)
_PLACEHOLDERS = ", ".join("?" for _ in COLUMNS)

_INSERT_RECORD = f"INSERT INTO {RECORDS_TABLE} ({_COLUMN_LIST}) VALUES ({_PLACEHOLDERS})"
_UPSERT_STATUS = f"INSERT OR REPLACE INTO {STATUS_TABLE} ({_COLUMN_LIST}) VALUES ({_PLACEHOLDERS})"


class SQLiteStore:
    """Telemetry store over a single SQLite connection.

    A store starts *uninitialized*. :meth:`open` connects and applies the
    schema exactly once; afterwards the store is *ready* until
    :meth:`close` releases the connection. A closed store is not reused.

    The connection is owned by this object and is not shared across
    threads; callers needing concurrency must serialize access themselves.
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        self._config = config or StoreConfig()
        self._connection: sqlite3.Connection | None = None
        self._opened = False

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def location(self) -> str:
        return self._config.location

    @property
    def is_ready(self) -> bool:
        return self._connection is not None

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def _database(self) -> str:
        if self._config.is_memory:
            return self._config.location
        path = Path(self._config.location).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreConnectionError(
                f"Cannot create directory for database {path}: {exc}",
                location=self.location,
            ) from exc
        return str(path)

    def open(self) -> SQLiteStore:
        """Connect to the engine and make sure both tables exist.

        Returns the store itself so construction and opening chain.

        Raises:
            StoreConnectionError: the store was opened before, the engine
                cannot open the location, or the schema script fails.
        """
        if self._opened:
            raise StoreConnectionError("Store has already been opened", location=self.location)

        database = self._database()
        try:
            connection = sqlite3.connect(database, timeout=self._config.timeout)
        except sqlite3.Error as exc:
            raise StoreConnectionError(
                f"Error connecting to database {database}: {exc}",
                location=self.location,
            ) from exc

        try:
            connection.row_factory = sqlite3.Row
            if self._config.journal_mode and not self._config.is_memory:
                connection.execute(f"PRAGMA journal_mode={self._config.journal_mode}")
            connection.executescript(_SCHEMA_PATH.read_text(encoding="utf-8"))
        except (sqlite3.Error, OSError) as exc:
            connection.close()
            raise StoreConnectionError(
                f"Error initializing database {database}: {exc}",
                location=self.location,
            ) from exc

        self._connection = connection
        self._opened = True
        _logger.debug("Opened telemetry store at %s", database)
        return self

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self._connection is None:
            return
        self._connection.close()
        self._connection = None
        _logger.debug("Closed telemetry store at %s", self.location)

    def __enter__(self) -> SQLiteStore:
        if not self._opened:
            self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _require_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            state = "closed" if self._opened else "not open"
            raise StoreConnectionError(f"Store is {state}", location=self.location)
        return self._connection

    # ── Writes ────────────────────────────────────────────────────────────

    def _write(self, statement: str, table: str, record: Record) -> None:
        connection = self._require_connection()
        row = encode_record(record)
        try:
            # Commits on success, rolls back on error.
            with connection:
                connection.execute(statement, row.as_params())
        except sqlite3.Error as exc:
            _logger.debug("Write to %s failed for bus %s: %s", table, record.bus_id, exc)
            raise StoreWriteError(
                f"Failed to write bus {record.bus_id} to {table}: {exc}",
                location=self.location,
                table=table,
            ) from exc
        _logger.debug("Wrote bus %s to %s", record.bus_id, table)

    def add_record(self, record: Record) -> None:
        """Append *record* to the history table, whatever else is stored for its bus."""
        self._write(_INSERT_RECORD, RECORDS_TABLE, record)

    def update_status(self, record: Record) -> None:
        """Insert or fully replace the status row for ``record.bus_id``.

        The most recent call wins; the timestamp carried by the record
        plays no part in resolving the conflict.
        """
        self._write(_UPSERT_STATUS, STATUS_TABLE, record)

    # ── Diagnostic reads ──────────────────────────────────────────────────

    def _list(self, table: str) -> list[Record]:
        connection = self._require_connection()
        try:
            rows = connection.execute(f"SELECT {_COLUMN_LIST} FROM {table}").fetchall()
        except sqlite3.Error as exc:
            raise StoreConnectionError(
                f"Failed to read {table}: {exc}",
                location=self.location,
            ) from exc
        _logger.debug("Read %d rows from %s", len(rows), table)
        return [decode_row(row) for row in rows]

    def list_records(self) -> list[Record]:
        """Every history row, decoded. No ordering is guaranteed."""
        return self._list(RECORDS_TABLE)

    def list_status(self) -> list[Record]:
        """Every latest-state row, decoded. No ordering is guaranteed."""
        return self._list(STATUS_TABLE)
