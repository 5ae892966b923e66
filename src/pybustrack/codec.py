"""Record <-> row codec.

Maps a :class:`~pybustrack.models.Record` onto the five scalar columns the
``records`` and ``status`` tables share, and back:

* ``bus_id`` is stored as a signed 64-bit integer (two's complement of the
  unsigned vehicle id).
* ``timestamp`` is ISO 8601 text with an explicit UTC offset.
* ``position`` is split into ``latitude`` / ``longitude`` floats.
* ``doors_open`` is stored as ``1`` / ``0`` and read back as "nonzero is true".

``decode_row(encode_record(r)) == r`` holds for every valid record.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from pybustrack.exceptions import RecordFormatError
from pybustrack.models import Position, Record

COLUMNS: tuple[str, ...] = ("bus_id", "timestamp", "latitude", "longitude", "doors_open")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_SPAN = 2**64


@dataclasses.dataclass(frozen=True)
class RecordRow:
    """Encoded form of a record, one field per column in table order."""

    bus_id: int
    timestamp: str
    latitude: float
    longitude: float
    doors_open: int

    def as_params(self) -> tuple[int, str, float, float, int]:
        return (self.bus_id, self.timestamp, self.latitude, self.longitude, self.doors_open)


def encode_bus_id(bus_id: int) -> int:
    """Map an unsigned vehicle id onto the signed 64-bit column."""
    return bus_id - _UINT64_SPAN if bus_id > _INT64_MAX else bus_id


def decode_bus_id(value: Any) -> int:
    """Map a signed 64-bit column value back to the unsigned vehicle id."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordFormatError(f"bus_id must be an integer, got {value!r}", column="bus_id", value=value)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise RecordFormatError(f"bus_id {value} is outside the signed 64-bit range", column="bus_id", value=value)
    return value + _UINT64_SPAN if value < 0 else value


def encode_timestamp(timestamp: datetime) -> str:
    return timestamp.astimezone(UTC).isoformat()


def decode_timestamp(value: Any) -> datetime:
    """Parse ISO 8601 text carrying a UTC offset into a UTC datetime."""
    if not isinstance(value, str):
        raise RecordFormatError(f"timestamp must be text, got {value!r}", column="timestamp", value=value)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise RecordFormatError(f"Failed to parse timestamp [{value}]", column="timestamp", value=value) from exc
    if parsed.utcoffset() is None:
        raise RecordFormatError(f"timestamp [{value}] has no UTC offset", column="timestamp", value=value)
    try:
        return parsed.astimezone(UTC)
    except OverflowError as exc:
        raise RecordFormatError(f"timestamp [{value}] is out of range in UTC", column="timestamp", value=value) from exc


def _decode_float(column: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RecordFormatError(f"{column} must be a number, got {value!r}", column=column, value=value)
    return float(value)


def _decode_flag(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordFormatError(f"doors_open must be an integer, got {value!r}", column="doors_open", value=value)
    return value != 0


def encode_record(record: Record) -> RecordRow:
    latitude, longitude = record.position.as_tuple()
    return RecordRow(
        bus_id=encode_bus_id(record.bus_id),
        timestamp=encode_timestamp(record.timestamp),
        latitude=latitude,
        longitude=longitude,
        doors_open=1 if record.doors_open else 0,
    )


def _row_values(row: RecordRow | Mapping[str, Any] | Sequence[Any]) -> tuple[Any, ...]:
    if isinstance(row, RecordRow):
        return row.as_params()
    if isinstance(row, Mapping):
        try:
            return tuple(row[column] for column in COLUMNS)
        except KeyError as exc:
            raise RecordFormatError(f"row is missing column {exc.args[0]!r}", column=str(exc.args[0])) from exc
    # sqlite3.Row is neither a Mapping nor a plain tuple but supports keys().
    keys = getattr(row, "keys", None)
    if callable(keys):
        missing = [column for column in COLUMNS if column not in keys()]
        if missing:
            raise RecordFormatError(f"row is missing column {missing[0]!r}", column=missing[0])
        return tuple(row[column] for column in COLUMNS)  # type: ignore[call-overload]
    values = tuple(row)
    if len(values) != len(COLUMNS):
        raise RecordFormatError(f"row must have {len(COLUMNS)} columns, got {len(values)}", value=values)
    return values


def decode_row(row: RecordRow | Mapping[str, Any] | Sequence[Any]) -> Record:
    """Decode a stored row into a :class:`Record`.

    Accepts a :class:`RecordRow`, a mapping or ``sqlite3.Row`` keyed by
    column name, or a plain sequence in column order.

    Raises
    ------
    RecordFormatError
        When any column holds a value that cannot be mapped back.
    """
    bus_id, timestamp, latitude, longitude, doors_open = _row_values(row)
    try:
        return Record(
            bus_id=decode_bus_id(bus_id),
            timestamp=decode_timestamp(timestamp),
            position=Position(
                latitude=_decode_float("latitude", latitude),
                longitude=_decode_float("longitude", longitude),
            ),
            doors_open=_decode_flag(doors_open),
        )
    except ValidationError as exc:
        raise RecordFormatError(f"row does not form a valid record: {exc}", value=(bus_id, timestamp)) from exc
