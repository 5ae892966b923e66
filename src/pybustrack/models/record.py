"""Telemetry record model."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from pybustrack.models.position import Position

# Vehicle ids live in the unsigned 64-bit domain.
BUS_ID_MAX = 2**64 - 1


class Record(BaseModel):
    """One telemetry report from a vehicle.

    Records are immutable. Writing a newer report for the same bus means
    building a new ``Record``, never changing an existing one.

    Parameters
    ----------
    bus_id : int
        Vehicle identifier, ``0 <= bus_id <= 2**64 - 1``.
    timestamp : datetime
        Timezone-aware instant, normalized to UTC.
    position : Position
        Where the vehicle was. A ``(latitude, longitude)`` pair is accepted.
    doors_open : bool
        Whether any door was open.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    bus_id: int = Field(strict=True)
    timestamp: AwareDatetime
    position: Position
    doors_open: bool = Field(strict=True)

    @field_validator("bus_id")
    @classmethod
    def _check_bus_id_range(cls, value: int) -> int:
        if not 0 <= value <= BUS_ID_MAX:
            raise ValueError(f"bus_id must be between 0 and {BUS_ID_MAX}, got {value}")
        return value

    @field_validator("timestamp")
    @classmethod
    def _normalize_utc(cls, value: datetime) -> datetime:
        try:
            return value.astimezone(UTC)
        except OverflowError as exc:
            raise ValueError(f"timestamp {value.isoformat()} is out of range in UTC") from exc
