"""
Prometheus metrics for observability
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from prometheus_client.core import CollectorRegistry

# Create a custom registry to avoid conflicts
metrics_registry = CollectorRegistry()

# HTTP request metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["path", "method", "status"],
    registry=metrics_registry,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["path", "method"],
    registry=metrics_registry,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Payment metrics
payment_attempts_total = Counter(
    "payment_attempts_total",
    "Total payment attempts by terminal status",
    ["status"],  # Success, Unauthorized, ValidationFailed, Error
    registry=metrics_registry,
)

payment_duration_seconds = Histogram(
    "payment_duration_seconds",
    "Payment procedure duration in seconds",
    ["status"],
    registry=metrics_registry,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

# Ledger metrics
ledger_invariant_violations_total = Counter(
    "ledger_invariant_violations_total",
    "Total ledger invariant violations detected",
    registry=metrics_registry,
)


def record_http_request(
    path: str,
    method: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """
    Record HTTP request metrics.

    Args:
        path: Request path
        method: HTTP method
        status_code: Response status code
        duration_seconds: Request duration in seconds
    """
    http_requests_total.labels(path=path, method=method, status=str(status_code)).inc()
    http_request_duration_seconds.labels(path=path, method=method).observe(duration_seconds)


def record_payment_attempt(status: str, duration_seconds: float) -> None:
    """Record the terminal status and duration of one payment attempt"""
    payment_attempts_total.labels(status=status).inc()
    payment_duration_seconds.labels(status=status).observe(duration_seconds)


def record_ledger_invariant_violation() -> None:
    """Record ledger invariant violation"""
    ledger_invariant_violations_total.inc()


def get_metrics_output() -> bytes:
    """Get Prometheus metrics output in exposition format"""
    return generate_latest(metrics_registry)


__all__ = [
    "metrics_registry",
    "record_http_request",
    "record_payment_attempt",
    "record_ledger_invariant_violation",
    "get_metrics_output",
    "CONTENT_TYPE_LATEST",
]
