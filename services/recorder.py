"""Applies validated readings to the metric registry."""

from __future__ import annotations

from models.readings import Reading
from services.metrics import MetricRegistry


class RecordingService:
    """Updates the temperature aggregates and passes the value through.

    Callers are expected to validate the reading first; nothing is checked
    here.
    """

    def __init__(self, metrics: MetricRegistry) -> None:
        self.metrics = metrics

    def record(self, reading: Reading) -> float:
        self.metrics.temperature_accumulated.inc(reading.value)
        self.metrics.temperature_last.set(reading.value)
        self.metrics.temperature_collected.labels(
            terminal=reading.terminal, sensor=reading.sensor
        ).inc()
        return reading.value
