# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
HTTP rate limit header projection.

Maps any algorithm snapshot onto the conventional response headers a
rate limited API would return::

    X-RateLimit-Limit: 10
    X-RateLimit-Remaining: 0
    X-RateLimit-Reset: 3
    Retry-After: 3

Nothing here performs I/O; the headers are computed for display.
"""

import math
from dataclasses import dataclass

from .protocols.algorithm import RateLimitAlgorithm
from .types.admission import AdmissionResult
from .types.snapshots import (
    AlgorithmSnapshot,
    FixedWindowSnapshot,
    LeakyBucketSnapshot,
    SlidingCounterSnapshot,
    SlidingLogSnapshot,
    TokenBucketSnapshot,
)

HTTP_OK = 200
HTTP_TOO_MANY_REQUESTS = 429


def _remaining_and_reset(
    snapshot: AlgorithmSnapshot, timestamp_ms: float
) -> tuple[int, float]:
    """Return (requests remaining, ms until one more request fits)."""
    if isinstance(snapshot, TokenBucketSnapshot):
        elapsed = max(0.0, timestamp_ms - snapshot.last_refill_timestamp)
        tokens = min(
            snapshot.capacity, snapshot.tokens + elapsed / 1000 * snapshot.rate_per_second
        )
        reset = 0.0 if tokens >= 1 else (1 - tokens) / snapshot.rate_per_second * 1000
        return math.floor(tokens), reset

    if isinstance(snapshot, LeakyBucketSnapshot):
        elapsed = max(0.0, timestamp_ms - snapshot.last_leak_timestamp)
        level = max(0.0, snapshot.water_level - elapsed / 1000 * snapshot.rate_per_second)
        # Admission only needs level < capacity, so a partial unit of
        # headroom still fits one request.
        remaining = max(0, math.ceil(snapshot.capacity - level))
        if remaining:
            return remaining, 0.0
        return 0, (level - snapshot.capacity) / snapshot.rate_per_second * 1000

    if isinstance(snapshot, FixedWindowSnapshot):
        if snapshot.is_window_expired:
            return snapshot.limit, 0.0
        remaining = max(0, snapshot.limit - snapshot.count)
        reset = 0.0 if remaining else max(0.0, snapshot.window_end - timestamp_ms)
        return remaining, reset

    if isinstance(snapshot, SlidingLogSnapshot):
        remaining = max(0, snapshot.limit - snapshot.count)
        if remaining:
            return remaining, 0.0
        window_size = snapshot.window_end - snapshot.window_start
        # The entry that must expire before the count drops below the limit.
        blocking = snapshot.timestamps[snapshot.count - snapshot.limit]
        return 0, max(0.0, blocking + window_size - timestamp_ms)

    if isinstance(snapshot, SlidingCounterSnapshot):
        # Recompute from the counts; estimated_count is rounded for display.
        window_size = snapshot.window_end - snapshot.window_start
        weight = min(max((timestamp_ms - snapshot.window_start) / window_size, 0.0), 1.0)
        estimate = (
            snapshot.current_window_count
            + snapshot.previous_window_count * (1 - weight)
        )
        remaining = max(0, math.ceil(snapshot.limit - estimate))
        if remaining:
            return remaining, 0.0
        return 0, max(0.0, snapshot.window_end - timestamp_ms)

    # Concurrency: slots free up on release, not with time.
    remaining = max(0, math.floor(snapshot.maximum - snapshot.current_count))
    return remaining, 0.0


def _display_number(value: float) -> float:
    """Whole values as int so they render as "10", not "10.0"."""
    return int(value) if float(value).is_integer() else value


@dataclass(frozen=True)
class RateLimitHeaders:
    """
    Rate limit headers for a response at a point in time.

    Attributes:
        limit: Total capacity of the limiter (fractional for
            fractional bucket capacities)
        remaining: Whole requests that would still be admitted
        reset_after_ms: Milliseconds until at least one more request fits
        status_code: 429 if the last decision was a rejection, else 200
    """

    limit: float
    remaining: int
    reset_after_ms: float
    status_code: int = HTTP_OK

    @classmethod
    def from_algorithm(
        cls,
        algorithm: RateLimitAlgorithm,
        timestamp_ms: float,
        last_result: AdmissionResult | None = None,
    ) -> "RateLimitHeaders":
        """Project the algorithm's state at ``timestamp_ms`` onto headers."""
        snapshot = algorithm.get_state(timestamp_ms)
        remaining, reset_after_ms = _remaining_and_reset(snapshot, timestamp_ms)
        rejected = last_result is not None and not last_result.allowed
        return cls(
            limit=_display_number(snapshot.maximum),
            remaining=remaining,
            reset_after_ms=reset_after_ms,
            status_code=HTTP_TOO_MANY_REQUESTS if rejected else HTTP_OK,
        )

    @property
    def reset_after_seconds(self) -> int:
        return math.ceil(self.reset_after_ms / 1000)

    def to_dict(self) -> dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_after_seconds),
        }
        if self.status_code == HTTP_TOO_MANY_REQUESTS:
            headers["Retry-After"] = str(self.reset_after_seconds)
        return headers


__all__ = [
    "HTTP_OK",
    "HTTP_TOO_MANY_REQUESTS",
    "RateLimitHeaders",
]
