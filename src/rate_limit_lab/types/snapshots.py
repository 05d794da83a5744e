# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
State snapshot models for the rate limiting algorithms.

Each algorithm projects its internal counters onto one of these frozen
Pydantic models for display. All snapshots share the ``current_count``
and ``percent_full`` accessors so generic gauges need no pattern match;
algorithm-specific detail lives in the concrete fields.
"""

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AlgorithmSnapshot(BaseModel):
    """Base class for all read-only algorithm snapshots."""

    model_config = ConfigDict(frozen=True)

    @property
    def current_count(self) -> float:
        """Amount of capacity currently in use."""
        raise NotImplementedError

    @property
    def maximum(self) -> float:
        """Amount of capacity available in total."""
        raise NotImplementedError

    @property
    def percent_full(self) -> float:
        """Share of capacity in use, 0 to 100."""
        return min(100.0, max(0.0, self.current_count / self.maximum * 100))


class FixedWindowSnapshot(AlgorithmSnapshot):
    """State of a fixed window counter."""

    count: int = Field(ge=0)
    limit: int
    window_start: float
    window_end: float
    is_window_expired: bool

    @property
    def current_count(self) -> float:
        return self.count

    @property
    def maximum(self) -> float:
        return self.limit


class TokenBucketSnapshot(AlgorithmSnapshot):
    """State of a token bucket as of the last admission."""

    tokens: float = Field(ge=0)
    capacity: float
    rate_per_second: float
    last_refill_timestamp: float

    @property
    def fill_percentage(self) -> float:
        return self.tokens / self.capacity * 100

    @property
    def whole_tokens(self) -> int:
        """Tokens rounded down for whole-unit display."""
        return math.floor(self.tokens)

    @property
    def current_count(self) -> float:
        return self.tokens

    @property
    def maximum(self) -> float:
        return self.capacity


class LeakyBucketSnapshot(AlgorithmSnapshot):
    """State of a leaky bucket as of the last admission."""

    water_level: float = Field(ge=0)
    capacity: float
    rate_per_second: float
    last_leak_timestamp: float

    @property
    def overflow(self) -> bool:
        return self.water_level >= self.capacity

    @property
    def current_count(self) -> float:
        return self.water_level

    @property
    def maximum(self) -> float:
        return self.capacity


class SlidingLogSnapshot(AlgorithmSnapshot):
    """Pruned view of a sliding window log at a given timestamp."""

    limit: int
    window_start: float
    window_end: float
    timestamps: tuple[float, ...]

    @model_validator(mode="after")
    def _validate_order(self) -> "SlidingLogSnapshot":
        if any(a > b for a, b in zip(self.timestamps, self.timestamps[1:])):
            raise ValueError("timestamps must be in ascending order")
        return self

    @property
    def count(self) -> int:
        return len(self.timestamps)

    @property
    def current_count(self) -> float:
        return self.count

    @property
    def maximum(self) -> float:
        return self.limit


class SlidingCounterSnapshot(AlgorithmSnapshot):
    """State of a sliding window counter at a given timestamp."""

    current_window_count: int = Field(ge=0)
    previous_window_count: int = Field(ge=0)
    estimated_count: float = Field(ge=0)
    limit: int
    window_start: float
    window_end: float

    @property
    def current_count(self) -> float:
        return self.estimated_count

    @property
    def maximum(self) -> float:
        return self.limit


class ConcurrencySnapshot(AlgorithmSnapshot):
    """In-flight request count of a concurrency limiter."""

    active_count: int = Field(ge=0)
    max_concurrency: int

    @property
    def current_count(self) -> float:
        return self.active_count

    @property
    def maximum(self) -> float:
        return self.max_concurrency


__all__ = [
    "AlgorithmSnapshot",
    "ConcurrencySnapshot",
    "FixedWindowSnapshot",
    "LeakyBucketSnapshot",
    "SlidingCounterSnapshot",
    "SlidingLogSnapshot",
    "TokenBucketSnapshot",
]
