"""Prometheus metrics for storage operations."""

from prometheus_client import Histogram

storage_latency_histogram = Histogram(
    "dumpster_storage_latency_seconds",
    "Duration of storage backend operations in seconds",
    ["backend", "operation"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)


def observe(backend: str, operation: str):
    """Context manager timing one storage operation."""
    return storage_latency_histogram.labels(backend=backend, operation=operation).time()
