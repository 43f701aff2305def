"""
Prometheus Metrics

Metrics for Heartbeat alerting observability.
Exposes metrics at /metrics endpoint for Prometheus scraping.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
"""

from prometheus_client import (
    Counter,
    Histogram,
    Info,
    generate_latest,
    CONTENT_TYPE_LATEST,
    REGISTRY,
)
from fastapi import APIRouter, Response

# =============================================================================
# SWEEP METRICS
# =============================================================================

SWEEPS_TOTAL = Counter(
    "heartbeat_sweeps_total",
    "Daily sweeps by outcome",
    ["outcome"],  # completed, dropped, store_unavailable
)

SWEEP_DURATION = Histogram(
    "heartbeat_sweep_duration_seconds",
    "Duration of a full sweep over all users",
    buckets=[0.1, 0.5, 1, 5, 15, 60, 300, 900],
)

SWEEP_USERS_TOTAL = Counter(
    "heartbeat_sweep_users_total",
    "Users examined by the sweep, by decision",
    ["decision"],  # alerted, undelivered, not_overdue, cooldown, failed
)

# =============================================================================
# DISPATCH METRICS
# =============================================================================

DISPATCH_ATTEMPTS_TOTAL = Counter(
    "heartbeat_dispatch_attempts_total",
    "Contact dispatch attempts",
    ["provider", "outcome"],  # outcome: success, failure, timeout, no_phone
)

DISPATCH_LATENCY = Histogram(
    "heartbeat_dispatch_latency_seconds",
    "Call provider latency per dispatch",
    ["provider"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# =============================================================================
# EVALUATION METRICS
# =============================================================================

EVALUATIONS_TOTAL = Counter(
    "heartbeat_evaluations_total",
    "On-demand evaluations by outcome",
    ["outcome"],  # triggered, undelivered, not_overdue, cooldown, not_found
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "heartbeat_system",
    "Heartbeat system information",
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_dispatch(provider: str, outcome: str, duration_seconds: float | None = None) -> None:
    """Record one contact dispatch attempt."""
    DISPATCH_ATTEMPTS_TOTAL.labels(provider=provider, outcome=outcome).inc()
    if duration_seconds is not None:
        DISPATCH_LATENCY.labels(provider=provider).observe(duration_seconds)


def track_sweep_user(decision: str) -> None:
    """Record the sweep decision for one user."""
    SWEEP_USERS_TOTAL.labels(decision=decision).inc()


def track_sweep(outcome: str, duration_seconds: float | None = None) -> None:
    """Record a sweep run."""
    SWEEPS_TOTAL.labels(outcome=outcome).inc()
    if duration_seconds is not None:
        SWEEP_DURATION.observe(duration_seconds)


def track_evaluation(outcome: str) -> None:
    """Record an on-demand evaluation outcome."""
    EVALUATIONS_TOTAL.labels(outcome=outcome).inc()


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )


def update_system_info(environment: str, call_provider: str, version: str = "0.1.0") -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
        "call_provider": call_provider,
    })
