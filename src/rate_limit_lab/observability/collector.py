# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Admission metrics collector supporting both dict-based and Prometheus metrics.

Counts admission decisions by algorithm kind, outcome and rejection
reason. Counts are always kept in plain dicts for JSON export; when
prometheus_client is installed they are mirrored into Prometheus counters.

Usage:
    >>> from rate_limit_lab.observability import AdmissionMetricsCollector
    >>> collector = AdmissionMetricsCollector(enable_prometheus=False)
    >>> limiter = TokenBucket(10, 2, metrics_collector=collector)
    >>> limiter.admit(0)
    >>> collector.allowed_count("token-bucket")
    1

Thread Safety:
    All operations are thread-safe. Uses RLock for reentrant locking.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import TYPE_CHECKING, Any

from .constants import (
    ADMISSIONS_ALLOWED_TOTAL,
    ADMISSIONS_REJECTED_TOTAL,
    COUNTER_DESCRIPTIONS,
    COUNTER_LABELS,
)

if TYPE_CHECKING:
    from ..config import AlgorithmKind
    from ..types.admission import AdmissionResult

logger = logging.getLogger(__name__)

try:
    from prometheus_client import REGISTRY, Counter

    PROMETHEUS_AVAILABLE = True
except ImportError:
    REGISTRY = None
    Counter = None
    PROMETHEUS_AVAILABLE = False


def _labels_to_key(labels: dict[str, str]) -> str:
    """Convert labels dict to a stable string key."""
    return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))


class AdmissionMetricsCollector:
    """
    Thread-safe counters of admission decisions.

    Args:
        enable_prometheus: Mirror counters into Prometheus (if available)
        registry: Optional Prometheus CollectorRegistry, mainly for tests;
            defaults to the global registry

    Example:
        >>> collector = AdmissionMetricsCollector()
        >>> algorithm = create_algorithm("fixed-window", {"limit": 1},
        ...                              metrics_collector=collector)
        >>> algorithm.admit(0); algorithm.admit(0)
        >>> collector.get_metrics()["counters"]
        {'rate_limit_lab_admissions_allowed_total': {'algorithm=fixed-window': 1},
         'rate_limit_lab_admissions_rejected_total':
             {'algorithm=fixed-window,reason=window limit exceeded': 1}}
    """

    def __init__(
        self,
        enable_prometheus: bool = True,
        registry: Any | None = None,
    ) -> None:
        self._enable_prometheus = enable_prometheus and PROMETHEUS_AVAILABLE
        self._registry = registry if registry is not None else REGISTRY
        self._counters: dict[str, dict[str, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        self._lock = threading.RLock()
        self._prom_counters: dict[str, Any] = {}

        logger.debug(
            f"AdmissionMetricsCollector initialized "
            f"(prometheus={'enabled' if self._enable_prometheus else 'disabled'})"
        )

    def _get_or_create_prom_counter(self, name: str) -> Any | None:
        if not self._enable_prometheus or Counter is None:
            return None
        with self._lock:
            if name not in self._prom_counters:
                try:
                    self._prom_counters[name] = Counter(
                        name,
                        COUNTER_DESCRIPTIONS[name],
                        list(COUNTER_LABELS[name]),
                        registry=self._registry,
                    )
                except ValueError as e:
                    # Duplicate registration in a shared registry. Cache the
                    # miss so the warning is logged once per counter.
                    logger.warning(f"Failed to create Prometheus counter {name}: {e}")
                    self._prom_counters[name] = None
            return self._prom_counters[name]

    def inc_counter(self, name: str, labels: dict[str, str], value: int = 1) -> None:
        """
        Increment a counter metric.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("Counter increment must be non-negative")

        with self._lock:
            self._counters[name][_labels_to_key(labels)] += value

        prom_counter = self._get_or_create_prom_counter(name)
        if prom_counter is not None:
            prom_counter.labels(**labels).inc(value)

    def record(self, kind: AlgorithmKind, result: AdmissionResult) -> None:
        """Count one admission decision."""
        if result.allowed:
            self.inc_counter(ADMISSIONS_ALLOWED_TOTAL, {"algorithm": kind.value})
        else:
            self.inc_counter(
                ADMISSIONS_REJECTED_TOTAL,
                {"algorithm": kind.value, "reason": result.reason or ""},
            )

    def allowed_count(self, algorithm: str) -> int:
        with self._lock:
            return self._counters[ADMISSIONS_ALLOWED_TOTAL].get(
                _labels_to_key({"algorithm": algorithm}), 0
            )

    def rejected_count(self, algorithm: str, reason: str | None = None) -> int:
        """Rejections for ``algorithm``, optionally limited to one reason."""
        prefix = _labels_to_key({"algorithm": algorithm})
        with self._lock:
            return sum(
                value
                for key, value in self._counters[ADMISSIONS_REJECTED_TOTAL].items()
                if key.startswith(prefix + ",")
                and (reason is None or key == f"{prefix},reason={reason}")
            )

    def get_metrics(self) -> dict[str, Any]:
        """
        Get a snapshot of all counters.

        Returns a dict suitable for JSON serialization:
        {"counters": {"metric_name": {"label_key": value, ...}, ...}}
        """
        with self._lock:
            counters = {
                name: dict(label_values)
                for name, label_values in self._counters.items()
            }
        return {"counters": counters}

    def reset(self) -> None:
        """Reset the dict-based counters to zero.

        Prometheus counters are monotonic and keep their values.
        """
        with self._lock:
            self._counters.clear()
        logger.debug("Metrics collector reset")

    @property
    def prometheus_enabled(self) -> bool:
        return self._enable_prometheus


__all__ = [
    "PROMETHEUS_AVAILABLE",
    "AdmissionMetricsCollector",
]
