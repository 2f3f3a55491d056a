"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

from contextlib import contextmanager
from time import perf_counter

from prometheus_client import Counter, Histogram, make_asgi_app

REQUESTS_TOTAL = Counter("logs_adapter_requests_total", "Total API requests", ["endpoint"])
REQUEST_LATENCY = Histogram("logs_adapter_request_latency_ms", "API latency (ms)", ["endpoint"])
BACKEND_LATENCY = Histogram(
    "logs_adapter_backend_latency_ms", "OpenObserve backend latency (ms)", ["operation"]
)
BACKEND_ERRORS_TOTAL = Counter(
    "logs_adapter_backend_errors_total", "Failed OpenObserve calls", ["operation", "kind"]
)

metrics_app = make_asgi_app()


@contextmanager
def track_request(endpoint: str):
    """Count a request and record its latency, including failed ones."""
    REQUESTS_TOTAL.labels(endpoint=endpoint).inc()
    t0 = perf_counter()
    try:
        yield
    finally:
        REQUEST_LATENCY.labels(endpoint=endpoint).observe((perf_counter() - t0) * 1000)
