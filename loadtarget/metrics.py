from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from loadtarget import __version__


class Metrics:
    """Request counter, latency histogram and version gauge on a private registry."""

    def __init__(self, version: str = __version__, registry: CollectorRegistry | None = None):
        self.registry = registry if registry is not None else CollectorRegistry()
        self.requests = Counter(
            "http_requests_total", "Count of all HTTP requests",
            ["code", "method"], registry=self.registry,
        )
        self.latency = Histogram(
            "http_request_duration_seconds", "Duration of all HTTP requests",
            ["code", "handler", "method"], registry=self.registry,
        )
        self.version = Gauge(
            "version", "Version information about this binary",
            ["version"], registry=self.registry,
        )
        self.version.labels(version=version).set(1)

    def observe(self, handler: str, method: str, code: int, duration: float) -> None:
        code_label = str(code)
        method_label = method.lower()
        self.requests.labels(code=code_label, method=method_label).inc()
        self.latency.labels(code=code_label, handler=handler, method=method_label).observe(duration)

    def exposition(self) -> tuple[bytes, str]:
        return generate_latest(self.registry), CONTENT_TYPE_LATEST
