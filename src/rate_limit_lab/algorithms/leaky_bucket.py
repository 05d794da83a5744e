# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Leaky bucket."""

from typing import TYPE_CHECKING, Any

from ..config import AlgorithmConfig, AlgorithmKind, require_positive
from ..types.admission import BUCKET_OVERFLOW, AdmissionResult
from ..types.snapshots import LeakyBucketSnapshot
from .base import BaseRateLimitAlgorithm

if TYPE_CHECKING:
    from ..observability.collector import AdmissionMetricsCollector


class LeakyBucket(BaseRateLimitAlgorithm):
    """
    Leaky bucket rate limiter (meter variant).

    Each admitted request adds one unit of water; the bucket drains at
    ``rate_per_second``. A request that finds the bucket full overflows
    and is rejected. The bucket starts empty.

    Args:
        capacity: Water level at which requests overflow.
        rate_per_second: Units drained per second.
        initial_timestamp_ms: Clock value the first leak is measured from.
    """

    kind = AlgorithmKind.LEAKY_BUCKET

    def __init__(
        self,
        capacity: float,
        rate_per_second: float,
        initial_timestamp_ms: float = 0,
        metrics_collector: "AdmissionMetricsCollector | None" = None,
    ):
        super().__init__(metrics_collector)
        self._capacity = require_positive("capacity", capacity)
        self._rate_per_second = require_positive("rate_per_second", rate_per_second)
        self._initial_timestamp_ms = initial_timestamp_ms
        self._water_level = 0.0
        self._last_leak_timestamp = initial_timestamp_ms

    @property
    def config(self) -> AlgorithmConfig:
        return AlgorithmConfig(
            capacity=self._capacity,
            rate_per_second=self._rate_per_second,
            initial_timestamp_ms=self._initial_timestamp_ms,
        )

    @property
    def capacity(self) -> float:
        return self._capacity

    @property
    def rate_per_second(self) -> float:
        return self._rate_per_second

    @property
    def water_level(self) -> float:
        return self._water_level

    def _leak(self, timestamp_ms: float) -> None:
        elapsed_ms = max(0.0, timestamp_ms - self._last_leak_timestamp)
        self._water_level = max(
            0.0, self._water_level - elapsed_ms / 1000 * self._rate_per_second
        )
        self._last_leak_timestamp = timestamp_ms

    def _decide(self, timestamp_ms: float) -> AdmissionResult:
        self._leak(timestamp_ms)
        if self._water_level < self._capacity:
            self._water_level += 1.0
            return AdmissionResult.accept()
        return AdmissionResult.reject(BUCKET_OVERFLOW)

    def get_state(self, timestamp_ms: float | None = None) -> LeakyBucketSnapshot:
        """Snapshot as of the last admission; ``timestamp_ms`` is ignored."""
        return LeakyBucketSnapshot(
            water_level=self._water_level,
            capacity=self._capacity,
            rate_per_second=self._rate_per_second,
            last_leak_timestamp=self._last_leak_timestamp,
        )

    def get_metrics(self) -> dict[str, Any]:
        return {"capacity": self._capacity, "rate_per_second": self._rate_per_second}


__all__ = ["LeakyBucket"]
