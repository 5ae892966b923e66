from __future__ import annotations

from pybustrack.exceptions import (
    BusTrackConfigError,
    BusTrackError,
    RecordFormatError,
    StoreConnectionError,
    StoreError,
    StoreWriteError,
)


def test_hierarchy() -> None:
    assert issubclass(BusTrackConfigError, BusTrackError)
    assert issubclass(StoreError, BusTrackError)
    assert issubclass(StoreConnectionError, StoreError)
    assert issubclass(StoreWriteError, StoreError)
    assert issubclass(RecordFormatError, BusTrackError)
    assert not issubclass(RecordFormatError, StoreError)


def test_error_kinds_are_distinguishable() -> None:
    kinds = (StoreConnectionError, StoreWriteError, RecordFormatError)
    for kind in kinds:
        others = [other for other in kinds if other is not kind]
        assert not any(issubclass(kind, other) for other in others)


def test_write_error_carries_context() -> None:
    exc = StoreWriteError("boom", location="fleet.db", table="status")
    assert str(exc) == "boom"
    assert exc.location == "fleet.db"
    assert exc.table == "status"


def test_format_error_carries_context() -> None:
    exc = RecordFormatError("bad", column="timestamp", value="yesterday")
    assert exc.column == "timestamp"
    assert exc.value == "yesterday"
