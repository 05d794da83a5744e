# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Fixed window counter."""

from typing import TYPE_CHECKING, Any

from ..config import (
    AlgorithmConfig,
    AlgorithmKind,
    require_positive,
    require_positive_int,
)
from ..types.admission import WINDOW_LIMIT_EXCEEDED, AdmissionResult
from ..types.snapshots import FixedWindowSnapshot
from .base import BaseRateLimitAlgorithm

if TYPE_CHECKING:
    from ..observability.collector import AdmissionMetricsCollector


class FixedWindowCounter(BaseRateLimitAlgorithm):
    """
    Fixed window counter.

    Counts admissions in a window of ``window_size_ms``. The window starts
    at time 0; once a request arrives at or after the window end, the
    window restarts at that request's timestamp and the count resets.
    Because the first boundary is anchored at 0 rather than the first
    request, admission timing depends on absolute virtual time.

    Two adjacent windows can together admit up to ``2 * limit`` requests
    when traffic clusters around the boundary. This is inherent to the
    algorithm.

    Args:
        limit: Maximum admissions per window.
        window_size_ms: Window duration in milliseconds.

    Raises:
        ConfigurationError: If either parameter is not positive.
    """

    kind = AlgorithmKind.FIXED_WINDOW

    def __init__(
        self,
        limit: int,
        window_size_ms: float,
        metrics_collector: "AdmissionMetricsCollector | None" = None,
    ):
        super().__init__(metrics_collector)
        self._limit = require_positive_int("limit", limit)
        self._window_size_ms = require_positive("window_size_ms", window_size_ms)
        self._window_start: float = 0
        self._count = 0
        self._last_timestamp: float | None = None

    @property
    def config(self) -> AlgorithmConfig:
        return AlgorithmConfig(limit=self._limit, window_size_ms=self._window_size_ms)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_size_ms(self) -> float:
        return self._window_size_ms

    def _decide(self, timestamp_ms: float) -> AdmissionResult:
        self._last_timestamp = timestamp_ms
        if timestamp_ms >= self._window_start + self._window_size_ms:
            self._window_start = timestamp_ms
            self._count = 0

        if self._count < self._limit:
            self._count += 1
            return AdmissionResult.accept()
        return AdmissionResult.reject(WINDOW_LIMIT_EXCEEDED)

    def get_state(self, timestamp_ms: float | None = None) -> FixedWindowSnapshot:
        """Snapshot at ``timestamp_ms`` (defaults to the last admission time)."""
        if timestamp_ms is None:
            timestamp_ms = (
                self._last_timestamp
                if self._last_timestamp is not None
                else self._window_start
            )
        window_end = self._window_start + self._window_size_ms
        return FixedWindowSnapshot(
            count=self._count,
            limit=self._limit,
            window_start=self._window_start,
            window_end=window_end,
            is_window_expired=timestamp_ms >= window_end,
        )

    def get_metrics(self) -> dict[str, Any]:
        return {
            "limit": self._limit,
            "window_size_ms": self._window_size_ms,
            "current_count": self._count,
        }


__all__ = ["FixedWindowCounter"]
