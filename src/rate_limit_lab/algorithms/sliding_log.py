# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Sliding window log."""

from bisect import bisect_right, insort
from typing import TYPE_CHECKING, Any

from ..config import (
    AlgorithmConfig,
    AlgorithmKind,
    require_positive,
    require_positive_int,
)
from ..types.admission import WINDOW_LIMIT_EXCEEDED, AdmissionResult
from ..types.snapshots import SlidingLogSnapshot
from .base import BaseRateLimitAlgorithm

if TYPE_CHECKING:
    from ..observability.collector import AdmissionMetricsCollector


class SlidingWindowLog(BaseRateLimitAlgorithm):
    """
    Sliding window log rate limiter.

    Keeps the timestamp of every admitted request and limits how many fall
    within the rolling window ``(t - window_size_ms, t]``. Rejected
    requests are never logged.

    This is exact, with no boundary burst, but memory grows with the
    number of requests admitted inside one window.

    Args:
        limit: Maximum admissions inside any window.
        window_size_ms: Rolling window duration in milliseconds.
    """

    kind = AlgorithmKind.SLIDING_LOG

    def __init__(
        self,
        limit: int,
        window_size_ms: float,
        metrics_collector: "AdmissionMetricsCollector | None" = None,
    ):
        super().__init__(metrics_collector)
        self._limit = require_positive_int("limit", limit)
        self._window_size_ms = require_positive("window_size_ms", window_size_ms)
        # Sorted ascending
        self._timestamps: list[float] = []
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

    def _prune(self, timestamp_ms: float) -> None:
        cutoff = timestamp_ms - self._window_size_ms
        del self._timestamps[: bisect_right(self._timestamps, cutoff)]

    def _decide(self, timestamp_ms: float) -> AdmissionResult:
        self._last_timestamp = timestamp_ms
        self._prune(timestamp_ms)
        if len(self._timestamps) < self._limit:
            insort(self._timestamps, timestamp_ms)
            return AdmissionResult.accept()
        return AdmissionResult.reject(WINDOW_LIMIT_EXCEEDED)

    def get_state(self, timestamp_ms: float | None = None) -> SlidingLogSnapshot:
        """Entries inside the window ending at ``timestamp_ms``.

        Defaults to the last admission time. The stored log is filtered,
        not pruned.
        """
        if timestamp_ms is None:
            timestamp_ms = self._last_timestamp if self._last_timestamp is not None else 0
        window_start = timestamp_ms - self._window_size_ms
        recent = self._timestamps[bisect_right(self._timestamps, window_start) :]
        return SlidingLogSnapshot(
            limit=self._limit,
            window_start=window_start,
            window_end=timestamp_ms,
            timestamps=tuple(recent),
        )

    def get_metrics(self) -> dict[str, Any]:
        return {"limit": self._limit, "window_size_ms": self._window_size_ms}


__all__ = ["SlidingWindowLog"]
