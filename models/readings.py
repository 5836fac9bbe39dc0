"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass

TEMPERATURE = "temperature"

SUPPORTED_SENSORS = frozenset({TEMPERATURE})


@dataclass(frozen=True, slots=True)
class Reading:
    """A single sensor measurement submitted for ingestion."""

    timestamp: int
    terminal: str
    sensor: str
    value: float
