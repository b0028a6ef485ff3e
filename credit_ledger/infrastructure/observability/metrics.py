"""Prometheus metrics for ledger operations, drawdown volume and pool custody performance"""

from prometheus_client import Counter, Histogram

from credit_ledger.domain.fixed_point import WAD

# Ledger metrics
ledger_operation_counter = Counter(
    "credit_ledger_operations_total",
    "Ledger operations by outcome",
    ["operation", "outcome"],  # outcome: committed | error kind
)

drawdown_amount_histogram = Histogram(
    "credit_ledger_drawdown_amount_units",
    "Drawdown size in whole currency units",
    buckets=[1, 10, 100, 1_000, 10_000, 100_000, 1_000_000],
)

# Pool custody metrics
pool_transfer_latency_histogram = Histogram(
    "pool_transfer_latency_seconds",
    "Pool custody transfer response time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

pool_transfer_failure_counter = Counter(
    "pool_transfer_failures_total",
    "Failed pool custody transfers",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_operation(operation: str, outcome: str) -> None:
    """Count a ledger operation; outcome is "committed" or the rejecting error kind"""
    ledger_operation_counter.labels(operation=operation, outcome=outcome).inc()


def record_drawdown(amount: int) -> None:
    drawdown_amount_histogram.observe(amount // WAD)
