"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from models.readings import Reading


class ValueRequest(BaseModel):
    """Inbound reading payload; absent or null fields decode to zero values."""

    timestamp: int = Field(default=0, description="Seconds since the epoch.")
    terminal: str = Field(default="", description="Reporting device identifier.")
    sensor: str = Field(default="", description="Sensor kind, e.g. 'temperature'.")
    value: float = Field(default=0.0, allow_inf_nan=False)

    @field_validator("timestamp", "terminal", "sensor", "value", mode="before")
    @classmethod
    def _null_as_zero_value(cls, raw: Any, info: ValidationInfo) -> Any:
        if raw is None:
            return cls.model_fields[info.field_name].default
        return raw

    def to_reading(self) -> Reading:
        return Reading(
            timestamp=self.timestamp,
            terminal=self.terminal,
            sensor=self.sensor,
            value=self.value,
        )


class ValueResponse(BaseModel):
    """Outcome of a submitted reading; only the relevant fields are set."""

    message: Optional[str] = None
    value: Optional[float] = None
    error: Optional[str] = None
