# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Token bucket."""

from typing import TYPE_CHECKING, Any

from ..config import AlgorithmConfig, AlgorithmKind, require_positive
from ..types.admission import NO_TOKENS_AVAILABLE, AdmissionResult
from ..types.snapshots import TokenBucketSnapshot
from .base import BaseRateLimitAlgorithm

if TYPE_CHECKING:
    from ..observability.collector import AdmissionMetricsCollector


class TokenBucket(BaseRateLimitAlgorithm):
    """
    Token bucket rate limiter.

    Tokens refill at a constant rate up to ``capacity``. Each request
    consumes one token, so bursts up to the bucket size pass immediately.
    The bucket starts full.

    The token count keeps its fractional part between calls; only display
    code rounds it down (see ``TokenBucketSnapshot.whole_tokens``).

    Args:
        capacity: Maximum tokens the bucket can hold.
        rate_per_second: Tokens added per second.
        initial_timestamp_ms: Clock value the first refill is measured from.
    """

    kind = AlgorithmKind.TOKEN_BUCKET

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
        self._tokens = float(self._capacity)
        self._last_refill_timestamp = initial_timestamp_ms

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
    def tokens(self) -> float:
        return self._tokens

    def _refill(self, timestamp_ms: float) -> None:
        # A regressing clock adds nothing but still moves the marker.
        elapsed_ms = max(0.0, timestamp_ms - self._last_refill_timestamp)
        self._tokens = min(
            self._capacity, self._tokens + elapsed_ms / 1000 * self._rate_per_second
        )
        self._last_refill_timestamp = timestamp_ms

    def _decide(self, timestamp_ms: float) -> AdmissionResult:
        self._refill(timestamp_ms)
        if self._tokens >= 1.0:
            self._tokens -= 1.0
            return AdmissionResult.accept()
        return AdmissionResult.reject(NO_TOKENS_AVAILABLE)

    def get_state(self, timestamp_ms: float | None = None) -> TokenBucketSnapshot:
        """Snapshot as of the last admission; ``timestamp_ms`` is ignored."""
        return TokenBucketSnapshot(
            tokens=self._tokens,
            capacity=self._capacity,
            rate_per_second=self._rate_per_second,
            last_refill_timestamp=self._last_refill_timestamp,
        )

    def get_metrics(self) -> dict[str, Any]:
        return {"capacity": self._capacity, "rate_per_second": self._rate_per_second}


__all__ = ["TokenBucket"]
