from __future__ import annotations

from typing import Any

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST

from inventory_api.core.config import Settings


class _NoOpMetric:
    def labels(self, *args: Any, **kwargs: Any) -> "_NoOpMetric":
        return self

    def observe(self, *_: Any, **__: Any) -> None:
        return None

    def inc(self, *_: Any, **__: Any) -> None:
        return None


class Metrics:
    """Prometheus collectors bound to a private registry.

    Each application instance owns its registry so several apps (one per
    test) can coexist in the same process without duplicate registration.
    """

    def __init__(self, settings: Settings) -> None:
        self.enabled = settings.METRICS_ENABLED
        self.registry = CollectorRegistry(auto_describe=True)
        ns = settings.METRICS_NAMESPACE

        if not self.enabled:
            self.request_latency = self.request_count = self.request_errors = _NoOpMetric()
            self.import_rows = _NoOpMetric()
            return

        self.request_latency = Histogram(
            f"{ns}_http_request_duration_seconds",
            "HTTP request latency in seconds.",
            ["method", "path", "status_code"],
            buckets=settings.METRICS_LATENCY_BUCKETS,
            registry=self.registry,
        )
        self.request_count = Counter(
            f"{ns}_http_requests_total",
            "Total HTTP requests processed.",
            ["method", "path", "status_code"],
            registry=self.registry,
        )
        self.request_errors = Counter(
            f"{ns}_http_errors_total",
            "Total HTTP requests resulting in 4xx/5xx.",
            ["method", "path", "status_code"],
            registry=self.registry,
        )
        self.import_rows = Counter(
            f"{ns}_import_rows_total",
            "CSV import rows partitioned by outcome.",
            ["outcome"],
            registry=self.registry,
        )

    def record_request(self, request, status_code: int, elapsed: float) -> None:
        labels = (request.method, normalize_path(request), str(status_code))
        self.request_count.labels(*labels).inc()
        self.request_latency.labels(*labels).observe(elapsed)
        if status_code >= 400:
            self.request_errors.labels(*labels).inc()

    def record_import(self, added: int, skipped: int, errors: int) -> None:
        self.import_rows.labels(outcome="added").inc(added)
        self.import_rows.labels(outcome="skipped").inc(skipped)
        self.import_rows.labels(outcome="error").inc(errors)

    def export(self) -> tuple[bytes, str]:
        if not self.enabled:
            return b"", "text/plain; charset=utf-8"
        return generate_latest(self.registry), CONTENT_TYPE_LATEST


def normalize_path(request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if path:
        return path
    return request.url.path
