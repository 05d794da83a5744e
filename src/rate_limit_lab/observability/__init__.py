# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for rate limit lab.

Exports:
    AdmissionMetricsCollector: Thread-safe admission counters with optional
        Prometheus mirroring.
    PROMETHEUS_AVAILABLE: Whether prometheus_client is available.
"""

from .collector import PROMETHEUS_AVAILABLE, AdmissionMetricsCollector
from .constants import (
    ADMISSIONS_ALLOWED_TOTAL,
    ADMISSIONS_REJECTED_TOTAL,
    METRIC_PREFIX,
)

__all__ = [
    "ADMISSIONS_ALLOWED_TOTAL",
    "ADMISSIONS_REJECTED_TOTAL",
    "METRIC_PREFIX",
    "PROMETHEUS_AVAILABLE",
    "AdmissionMetricsCollector",
]
