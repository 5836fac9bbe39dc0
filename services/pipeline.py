"""Request pipeline turning a decoded reading into an outcome."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Union

from models.readings import TEMPERATURE, Reading
from services.metrics import MetricRegistry
from services.recorder import RecordingService
from services.validator import ValidationError, ValidationResult, validate_reading

logger = logging.getLogger(__name__)

RECEIVED = "received"
UNSUPPORTED_SENSOR = "sensor: unsupported sensor kind."


@dataclass(frozen=True)
class Accepted:
    value: float
    message: str = RECEIVED


@dataclass(frozen=True)
class Rejected:
    error: str


Outcome = Union[Accepted, Rejected]


class ReadingPipeline:
    """Validates a reading and records it when the sensor kind is known."""

    def __init__(
        self,
        recorder: RecordingService,
        validator: Callable[[Reading], ValidationResult] = validate_reading,
    ) -> None:
        self.recorder = recorder
        self.validator = validator
        self._handlers: Dict[str, Callable[[Reading], float]] = {
            TEMPERATURE: recorder.record,
        }

    def handle(self, reading: Reading) -> Outcome:
        logger.info(
            "Data Collected",
            extra={
                "timestamp": reading.timestamp,
                "terminal": reading.terminal,
                "sensor": reading.sensor,
                "value": reading.value,
            },
        )
        try:
            self.validator(reading).raise_for_violations()
        except ValidationError as exc:
            logger.error("Reading rejected", extra={"error": str(exc)})
            return Rejected(error=str(exc))

        handler = self._handlers.get(reading.sensor)
        if handler is None:
            logger.error("Reading rejected", extra={"error": UNSUPPORTED_SENSOR})
            return Rejected(error=UNSUPPORTED_SENSOR)

        return Accepted(value=handler(reading))


class TracedPipeline:
    """Wraps a pipeline with timing, debug logging and a duration histogram."""

    def __init__(self, inner: ReadingPipeline, metrics: MetricRegistry) -> None:
        self.inner = inner
        self.metrics = metrics

    def handle(self, reading: Reading) -> Outcome:
        start_time = time.perf_counter()
        outcome = self.inner.handle(reading)
        elapsed = time.perf_counter() - start_time
        outcome_kind = "accepted" if isinstance(outcome, Accepted) else "rejected"
        self.metrics.request_duration.labels(outcome=outcome_kind).observe(elapsed)
        logger.debug(
            "Reading handled",
            extra={
                "terminal": reading.terminal,
                "outcome": outcome_kind,
                "duration_ms": round(elapsed * 1000, 3),
            },
        )
        return outcome


def build_pipeline(
    metrics: MetricRegistry, tracing: bool = False
) -> Union[ReadingPipeline, TracedPipeline]:
    """Wire the recording service and pipeline around ``metrics``."""
    pipeline = ReadingPipeline(recorder=RecordingService(metrics))
    if tracing:
        return TracedPipeline(pipeline, metrics)
    return pipeline
