"""Métricas Prometheus de ambos servicios (registro por defecto)."""
from __future__ import annotations

from prometheus_client import Counter, Histogram

LATENCY_BUCKETS = [0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0]

# ============================================================================
# HTTP METRICS
# ============================================================================

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests served",
    ["service", "path", "method", "status"],
)

http_request_latency_seconds = Histogram(
    "http_request_latency_seconds",
    "HTTP request latency in seconds",
    ["service", "path", "method"],
    buckets=LATENCY_BUCKETS,
)

# ============================================================================
# UPSTREAM METRICS
# ============================================================================

upstream_requests_total = Counter(
    "upstream_requests_total",
    "Outbound calls to external services by outcome",
    ["upstream", "outcome"],
)


def record_upstream(upstream: str, outcome: str) -> None:
    upstream_requests_total.labels(upstream=upstream, outcome=outcome).inc()
