"""Prometheus metrics for itemsapi."""

from prometheus_client import Counter, Histogram

STORE_OPERATIONS = Counter(
    "items_store_operations_total",
    "Total number of item store operations",
    labelnames=["operation", "backend", "outcome"],
)

STORE_LATENCY = Histogram(
    "items_store_latency_seconds",
    "Item store call latency in seconds",
    labelnames=["operation", "backend"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

# Update requests that compiled to an empty plan and never reached the store
NOOP_UPDATES = Counter(
    "items_noop_updates_total",
    "Update requests skipped because the patch was empty",
)
