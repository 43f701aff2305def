"""Metrics infrastructure package."""

from heartbeat.infrastructure.metrics.prometheus_metrics import (
    # Sweep metrics
    SWEEPS_TOTAL,
    SWEEP_DURATION,
    SWEEP_USERS_TOTAL,
    # Dispatch metrics
    DISPATCH_ATTEMPTS_TOTAL,
    DISPATCH_LATENCY,
    # Evaluation metrics
    EVALUATIONS_TOTAL,
    # Helpers
    track_dispatch,
    track_sweep_user,
    track_sweep,
    track_evaluation,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "SWEEPS_TOTAL",
    "SWEEP_DURATION",
    "SWEEP_USERS_TOTAL",
    "DISPATCH_ATTEMPTS_TOTAL",
    "DISPATCH_LATENCY",
    "EVALUATIONS_TOTAL",
    "track_dispatch",
    "track_sweep_user",
    "track_sweep",
    "track_evaluation",
    "update_system_info",
    "metrics_router",
]
