# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the `rate_limit_lab_` prefix.

Label Best Practices:
    Use only bounded labels:
    - `algorithm` - Algorithm kind (fixed-window, token-bucket, ...)
    - `reason` - Rejection reason (one of REJECTION_REASONS)

    NEVER use the request timestamp or id as a label.
"""

METRIC_PREFIX = "rate_limit_lab"
"""Prefix for all Prometheus metrics in this library."""

ADMISSIONS_ALLOWED_TOTAL = f"{METRIC_PREFIX}_admissions_allowed_total"
"""Total requests admitted, labeled by algorithm."""

ADMISSIONS_REJECTED_TOTAL = f"{METRIC_PREFIX}_admissions_rejected_total"
"""Total requests rejected, labeled by algorithm and reason."""

COUNTER_LABELS: dict[str, tuple[str, ...]] = {
    ADMISSIONS_ALLOWED_TOTAL: ("algorithm",),
    ADMISSIONS_REJECTED_TOTAL: ("algorithm", "reason"),
}

COUNTER_DESCRIPTIONS: dict[str, str] = {
    ADMISSIONS_ALLOWED_TOTAL: "Total requests admitted",
    ADMISSIONS_REJECTED_TOTAL: "Total requests rejected",
}


__all__ = [
    "ADMISSIONS_ALLOWED_TOTAL",
    "ADMISSIONS_REJECTED_TOTAL",
    "COUNTER_DESCRIPTIONS",
    "COUNTER_LABELS",
    "METRIC_PREFIX",
]
