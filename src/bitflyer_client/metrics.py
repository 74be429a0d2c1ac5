"""
Prometheus metrics for dispatched API calls.

The collectors register with the default ``prometheus_client`` registry.
The library never starts an HTTP exporter itself; applications that want
to scrape these metrics call ``prometheus_client.start_http_server`` as
usual.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

OUTCOME_OK = "ok"
OUTCOME_HTTP_ERROR = "http_error"
OUTCOME_DECODE_ERROR = "decode_error"
OUTCOME_TRANSPORT_ERROR = "transport_error"

REQUESTS = Counter(
    "bitflyer_requests_total",
    "bitFlyer API calls by outcome",
    labelnames=["method", "path", "outcome"],
)
LATENCY = Histogram(
    "bitflyer_request_seconds",
    "Time from sending a bitFlyer API call to receiving its response",
    labelnames=["method", "path"],
)


def record(method: str, path: str, outcome: str, elapsed: float) -> None:
    REQUESTS.labels(method=method, path=path, outcome=outcome).inc()
    LATENCY.labels(method=method, path=path).observe(elapsed)


__all__ = [
    "OUTCOME_OK",
    "OUTCOME_HTTP_ERROR",
    "OUTCOME_DECODE_ERROR",
    "OUTCOME_TRANSPORT_ERROR",
    "REQUESTS",
    "LATENCY",
    "record",
]
