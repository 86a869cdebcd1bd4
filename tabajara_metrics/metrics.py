"""Prometheus metric registrations for the synthetic HTTP workload."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram


REQUEST_LABELS = ("uri", "method", "status")

LATENCY_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


class MetricSet:
    """Wrapper object holding Prometheus metric instances."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        reg = registry
        self.http_requests_per_service_version = Histogram(
            "http_requests_per_service_version",
            "Request latency in seconds per backend service version.",
            labelnames=REQUEST_LABELS + ("service_version",),
            buckets=LATENCY_BUCKETS,
            registry=reg,
        )
        self.http_requests_per_app_version = Counter(
            "http_requests_per_app_version",
            "Requests received per client app version.",
            labelnames=REQUEST_LABELS + ("app_version",),
            registry=reg,
        )
        self.http_pending_requests = Gauge(
            "http_pending_requests",
            "Requests waiting to be served per backend service version.",
            labelnames=("service_version",),
            registry=reg,
        )
        self.http_requests_per_device = Counter(
            "http_requests_per_device",
            "Requests received per client OS and device.",
            labelnames=REQUEST_LABELS + ("device",),
            registry=reg,
        )


__all__ = ["MetricSet", "LATENCY_BUCKETS"]
