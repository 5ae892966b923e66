"""Write/read semantics shared by every store implementation."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest

from pybustrack.models import Position, Record
from pybustrack.store import DiagnosticStore, InMemoryStore, RecordStore, SQLiteStore, open_store

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _record(
    bus_id: int = 0,
    timestamp: datetime = _EPOCH,
    position: tuple[float, float] = (0.0, 0.0),
    doors_open: bool = True,
) -> Record:
    return Record(bus_id=bus_id, timestamp=timestamp, position=position, doors_open=doors_open)


@pytest.fixture(params=["sqlite", "memory"])
def store(request: pytest.FixtureRequest) -> Iterator[DiagnosticStore]:
    if request.param == "sqlite":
        sqlite_store = open_store()
        yield sqlite_store
        sqlite_store.close()
    else:
        yield InMemoryStore()


def test_implementations_satisfy_protocols() -> None:
    sqlite_store = open_store()
    try:
        for impl in (sqlite_store, InMemoryStore()):
            assert isinstance(impl, RecordStore)
            assert isinstance(impl, DiagnosticStore)
    finally:
        sqlite_store.close()


def test_new_store_is_empty(store: DiagnosticStore) -> None:
    assert store.list_records() == []
    assert store.list_status() == []


def test_should_add_first_record(store: DiagnosticStore) -> None:
    record = _record()

    store.add_record(record)

    assert store.list_records() == [record]


def test_should_add_first_status(store: DiagnosticStore) -> None:
    record = _record()

    store.update_status(record)

    assert store.list_status() == [record]


def test_earliest_representable_timestamp_is_kept(store: DiagnosticStore) -> None:
    record = _record(timestamp=datetime.min.replace(tzinfo=UTC))

    store.add_record(record)

    assert store.list_records() == [record]


def test_same_bus_records_are_appended(store: DiagnosticStore) -> None:
    record_a = _record(bus_id=0, timestamp=_EPOCH)
    record_b = _record(bus_id=0, timestamp=_EPOCH + timedelta(seconds=5))

    store.add_record(record_a)
    store.add_record(record_b)

    records = store.list_records()
    assert len(records) == 2
    assert record_a in records
    assert record_b in records


def test_identical_records_are_both_kept(store: DiagnosticStore) -> None:
    record = _record()

    store.add_record(record)
    store.add_record(record)

    assert store.list_records() == [record, record]


def test_different_bus_records(store: DiagnosticStore) -> None:
    record_a = _record(bus_id=0)
    record_b = _record(bus_id=1)

    store.add_record(record_a)
    store.add_record(record_b)

    records = store.list_records()
    assert record_a in records
    assert record_b in records


def test_should_replace_same_bus_status(store: DiagnosticStore) -> None:
    record_a = _record(bus_id=0, timestamp=_EPOCH, position=(1.0, 2.0), doors_open=True)
    record_b = _record(bus_id=0, timestamp=_EPOCH + timedelta(seconds=5), position=(3.0, 4.0), doors_open=False)

    store.update_status(record_a)
    store.update_status(record_b)

    assert store.list_status() == [record_b]


def test_stale_status_still_overwrites(store: DiagnosticStore) -> None:
    newer = _record(bus_id=7, timestamp=_EPOCH + timedelta(hours=1))
    older = _record(bus_id=7, timestamp=_EPOCH)

    store.update_status(newer)
    store.update_status(older)

    assert store.list_status() == [older]


def test_different_bus_status_rows_are_independent(store: DiagnosticStore) -> None:
    bus_0 = _record(bus_id=0)
    bus_1 = _record(bus_id=1)
    bus_1_moved = _record(bus_id=1, timestamp=_EPOCH + timedelta(seconds=30), position=(51.5, -0.1))

    store.update_status(bus_0)
    store.update_status(bus_1)
    store.update_status(bus_1_moved)

    status = store.list_status()
    assert len(status) == 2
    assert bus_0 in status
    assert bus_1_moved in status
    assert bus_1 not in status


def test_status_and_records_are_separate_tables(store: DiagnosticStore) -> None:
    history = _record(bus_id=3)
    latest = _record(bus_id=4)

    store.add_record(history)
    store.update_status(latest)

    assert store.list_records() == [history]
    assert store.list_status() == [latest]


@pytest.mark.parametrize("doors_open", [True, False])
def test_doors_open_flag_is_kept(store: DiagnosticStore, doors_open: bool) -> None:
    record = _record(doors_open=doors_open)

    store.add_record(record)
    store.update_status(record)

    assert store.list_records()[0].doors_open is doors_open
    assert store.list_status()[0].doors_open is doors_open


@pytest.mark.parametrize("bus_id", [0, 2**63 - 1, 2**63, 2**64 - 1])
def test_full_unsigned_bus_id_range(store: DiagnosticStore, bus_id: int) -> None:
    record = _record(bus_id=bus_id)

    store.add_record(record)
    store.update_status(record)

    assert store.list_records() == [record]
    assert store.list_status() == [record]


def test_high_bus_ids_do_not_collide_in_status(store: DiagnosticStore) -> None:
    low = _record(bus_id=1)
    high = _record(bus_id=2**63 + 1)

    store.update_status(low)
    store.update_status(high)

    status = store.list_status()
    assert len(status) == 2
    assert low in status
    assert high in status


def test_precise_values_survive_storage(store: DiagnosticStore) -> None:
    record = Record(
        bus_id=42,
        timestamp=datetime(2024, 5, 1, 12, 30, 15, 123456, tzinfo=UTC),
        position=Position(latitude=52.370216, longitude=4.895168),
        doors_open=False,
    )

    store.add_record(record)

    stored = store.list_records()[0]
    assert stored == record
    assert stored.timestamp.microsecond == 123456
    assert stored.position.latitude == 52.370216


def test_sqlite_store_type_from_factory() -> None:
    with open_store() as sqlite_store:
        assert isinstance(sqlite_store, SQLiteStore)
        assert sqlite_store.is_ready
