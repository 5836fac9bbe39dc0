"""Prometheus metric definitions for recorded sensor readings."""

from __future__ import annotations

from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

NAMESPACE = "collector"


class MetricRegistry:
    """Owns the collector registry and every aggregate the service updates.

    Each instance registers its metrics on its own ``CollectorRegistry`` so
    that separate applications (and tests) never share state.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()

        self.temperature_accumulated = Gauge(
            "terminal_temperature_fahrenheit_add",
            "Terminal Sensor Temperature Value Fahrenheit",
            namespace=NAMESPACE,
            registry=self.registry,
        )
        self.temperature_last = Gauge(
            "terminal_temperature_fahrenheit_set",
            "Terminal Sensor Temperature Value Fahrenheit",
            namespace=NAMESPACE,
            registry=self.registry,
        )
        self.temperature_collected = Counter(
            "terminal_temperature_total",
            "Number of temperature collected.",
            ["terminal", "sensor"],
            registry=self.registry,
        )
        self.request_duration = Histogram(
            "value_request_duration_seconds",
            "Time spent handling a submitted reading.",
            ["outcome"],
            namespace=NAMESPACE,
            registry=self.registry,
        )

    def accumulated_temperature(self) -> float:
        return self._sample("collector_terminal_temperature_fahrenheit_add")

    def last_temperature(self) -> float:
        return self._sample("collector_terminal_temperature_fahrenheit_set")

    def collected_count(self, terminal: str, sensor: str) -> float:
        return self._sample(
            "terminal_temperature_total",
            {"terminal": terminal, "sensor": sensor},
        )

    def render(self) -> bytes:
        """Serialize the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)

    def _sample(self, name: str, labels: Optional[dict[str, str]] = None) -> float:
        value = self.registry.get_sample_value(name, labels or {})
        return 0.0 if value is None else value
