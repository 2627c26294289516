"""Prometheus metrics for the backend.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# Item store metrics
# ---------------------------------------------------------------------------

ITEMS_CREATED = Counter(
    "backend_items_created_total",
    "Total number of items appended to the store",
)

ITEMS_REJECTED = Counter(
    "backend_items_rejected_total",
    "Total number of item submissions rejected by validation",
)

# Assumes one ItemStore per process; each store overwrites the value
ITEMS_STORED = Gauge(
    "backend_items_stored",
    "Number of items currently held in the store",
)

# ---------------------------------------------------------------------------
# HTTP request metrics
# ---------------------------------------------------------------------------

HTTP_REQUESTS = Counter(
    "backend_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_DURATION = Histogram(
    "backend_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["endpoint"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0),
)
