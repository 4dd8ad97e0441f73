"""Publishing of check outcomes as Prometheus gauges."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from .executor import ExecutionOutcome

log = logging.getLogger(__name__)

DEFAULT_TEST_NAME = "linkedin-login"
METRIC_NAME = "playwright_test_success"
METRIC_HELP = "Indicates if the Playwright test succeeded (1) or failed (0)."
LABEL_NAME = "test_name"


class MetricsSink(Protocol):
    def set_gauge(self, labels: Mapping[str, str], value: float) -> None: ...


class PrometheusSink:
    """Gauge ``playwright_test_success{test_name=...}`` on its own registry."""

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self.gauge = Gauge(METRIC_NAME, METRIC_HELP, [LABEL_NAME], registry=self.registry)

    def set_gauge(self, labels: Mapping[str, str], value: float) -> None:
        self.gauge.labels(**labels).set(value)

    def value(self, test_name: str) -> Optional[float]:
        return self.registry.get_sample_value(METRIC_NAME, {LABEL_NAME: test_name})

    def exposition(self) -> bytes:
        return generate_latest(self.registry)


class ResultReporter:
    def __init__(self, sink: MetricsSink) -> None:
        self.sink = sink

    def report(self, test_identity: str, outcome: ExecutionOutcome) -> None:
        self.sink.set_gauge({LABEL_NAME: test_identity}, outcome.value)
        log.info("Recorded %s{%s=%r} = %s", METRIC_NAME, LABEL_NAME, test_identity, outcome.value)
