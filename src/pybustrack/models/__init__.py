"""Data models for bus telemetry."""

from pybustrack.models.position import Position
from pybustrack.models.record import BUS_ID_MAX, Record

__all__ = [
    "BUS_ID_MAX",
    "Position",
    "Record",
]
