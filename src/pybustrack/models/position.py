"""Geographic position model."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Position(BaseModel):
    """A latitude/longitude pair in degrees.

    No range check is applied. NaN is rejected because the backing
    engine stores it as NULL.

    Parameters
    ----------
    latitude : float
        Latitude in degrees.
    longitude : float
        Longitude in degrees.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    latitude: float
    longitude: float

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, values: Any) -> Any:
        if isinstance(values, Sequence) and not isinstance(values, (str, bytes)):
            if len(values) != 2:
                raise ValueError(f"position pair must have 2 items, got {len(values)}")
            latitude, longitude = values
            return {"latitude": latitude, "longitude": longitude}
        return values

    @field_validator("latitude", "longitude")
    @classmethod
    def _reject_nan(cls, value: float) -> float:
        if math.isnan(value):
            raise ValueError("coordinate must not be NaN")
        return value

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)
