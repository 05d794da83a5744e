# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Sliding window counter (weighted approximation)."""

import math
from typing import TYPE_CHECKING, Any

from ..config import (
    AlgorithmConfig,
    AlgorithmKind,
    require_positive,
    require_positive_int,
)
from ..types.admission import SLIDING_WINDOW_LIMIT_EXCEEDED, AdmissionResult
from ..types.snapshots import SlidingCounterSnapshot
from .base import BaseRateLimitAlgorithm

if TYPE_CHECKING:
    from ..observability.collector import AdmissionMetricsCollector


class SlidingWindowCounter(BaseRateLimitAlgorithm):
    """
    Sliding window counter.

    Approximates the sliding window log with two counters: the current
    fixed window and the one before it. The previous window's count is
    weighted by how much of it still overlaps the rolling window::

        weight = (t - window_start) / window_size_ms
        estimate = current + previous * (1 - weight)

    Memory is O(1) instead of O(requests per window), at the cost of a
    small estimation error because requests are assumed to be spread
    evenly across the previous window.

    When the clock jumps forward by several windows, the shift still
    carries the current count into ``previous``, exactly as a one-window
    shift would.

    Args:
        limit: Maximum estimated admissions per rolling window.
        window_size_ms: Window duration in milliseconds.
        initial_timestamp_ms: Start of the first window.
    """

    kind = AlgorithmKind.SLIDING_COUNTER

    def __init__(
        self,
        limit: int,
        window_size_ms: float,
        initial_timestamp_ms: float = 0,
        metrics_collector: "AdmissionMetricsCollector | None" = None,
    ):
        super().__init__(metrics_collector)
        self._limit = require_positive_int("limit", limit)
        self._window_size_ms = require_positive("window_size_ms", window_size_ms)
        self._initial_timestamp_ms = initial_timestamp_ms
        self._window_start: float = initial_timestamp_ms
        self._previous_window_count = 0
        self._current_window_count = 0
        self._last_timestamp: float | None = None

    @property
    def config(self) -> AlgorithmConfig:
        return AlgorithmConfig(
            limit=self._limit,
            window_size_ms=self._window_size_ms,
            initial_timestamp_ms=self._initial_timestamp_ms,
        )

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_size_ms(self) -> float:
        return self._window_size_ms

    def _shifted(self, timestamp_ms: float) -> tuple[float, int, int]:
        """Return (window_start, previous, current) as of ``timestamp_ms``."""
        windows_passed = math.floor(
            (timestamp_ms - self._window_start) / self._window_size_ms
        )
        if windows_passed > 0:
            return (
                self._window_start + windows_passed * self._window_size_ms,
                self._current_window_count,
                0,
            )
        return self._window_start, self._previous_window_count, self._current_window_count

    def _estimate(
        self, timestamp_ms: float, window_start: float, previous: int, current: int
    ) -> float:
        weight = (timestamp_ms - window_start) / self._window_size_ms
        # Clamp for clocks that regress behind the window start.
        weight = min(max(weight, 0.0), 1.0)
        return current + previous * (1 - weight)

    def _decide(self, timestamp_ms: float) -> AdmissionResult:
        self._last_timestamp = timestamp_ms
        (
            self._window_start,
            self._previous_window_count,
            self._current_window_count,
        ) = self._shifted(timestamp_ms)

        estimate = self._estimate(
            timestamp_ms,
            self._window_start,
            self._previous_window_count,
            self._current_window_count,
        )
        if estimate < self._limit:
            self._current_window_count += 1
            return AdmissionResult.accept()
        return AdmissionResult.reject(SLIDING_WINDOW_LIMIT_EXCEEDED)

    def get_state(self, timestamp_ms: float | None = None) -> SlidingCounterSnapshot:
        """Counters as they would stand at ``timestamp_ms``.

        Any pending window shift is projected into the snapshot without
        being applied. Defaults to the last admission time.
        """
        if timestamp_ms is None:
            timestamp_ms = (
                self._last_timestamp
                if self._last_timestamp is not None
                else self._window_start
            )
        window_start, previous, current = self._shifted(timestamp_ms)
        estimate = self._estimate(timestamp_ms, window_start, previous, current)
        return SlidingCounterSnapshot(
            current_window_count=current,
            previous_window_count=previous,
            estimated_count=round(estimate, 2),
            limit=self._limit,
            window_start=window_start,
            window_end=window_start + self._window_size_ms,
        )

    def get_metrics(self) -> dict[str, Any]:
        return {"limit": self._limit, "window_size_ms": self._window_size_ms}


__all__ = ["SlidingWindowCounter"]
