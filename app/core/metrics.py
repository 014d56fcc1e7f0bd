"""
Food Ordering API — Prometheus metrics

Exposed at /metrics when METRICS_ENABLED is set.
"""
from prometheus_client import Counter, Histogram, make_asgi_app

ORDERS_PLACED = Counter(
    "orders_placed_total",
    "Orders written with a queue number.",
)
QUEUE_COUNTER_CONFLICTS = Counter(
    "queue_counter_conflicts_total",
    "Optimistic lock conflicts while advancing a queue counter (each one is retried).",
)
ORDER_FAILURES = Counter(
    "order_failures_total",
    "Order placements that failed after validation.",
    ["stage"],  # "sequencer": nothing consumed; "persist": queue number skipped
)

metrics_app = make_asgi_app()

# Per-route HTTP metrics, named and labelled like prometheus-fastapi-instrumentator
HTTP_REQUESTS = Counter(
    "http_requests_total",
    "Total number of requests by method, status and handler.",
    ["method", "status", "handler"],
)
HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "Latency with only few buckets by handler.",
    ["method", "handler"],
    buckets=(0.1, 0.5, 1.0),
)
