# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Algorithm Configuration for Rate Limit Lab

This module provides the algorithm kind discriminator, the immutable
per-instance configuration shared by every algorithm, and the playground
presets used by the visualizer.
"""

import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from .exceptions import ConfigurationError

DEFAULT_WINDOW_SIZE_MS = 1000
"""Window size used by the factory when a windowed algorithm gets none."""


class AlgorithmKind(Enum):
    """Discriminator for the six rate limiting algorithms.

    - FIXED_WINDOW: Counter reset at discrete window boundaries.
    - TOKEN_BUCKET: Bucket refilled at a steady rate, allows bursts.
    - LEAKY_BUCKET: Bucket drained at a steady rate, smooths bursts.
    - SLIDING_LOG: Exact per-request timestamp log over a rolling window.
    - SLIDING_COUNTER: Weighted two-window approximation of the log.
    - CONCURRENCY: Caps in-flight requests, not time based.
    """

    FIXED_WINDOW = "fixed-window"
    TOKEN_BUCKET = "token-bucket"
    LEAKY_BUCKET = "leaky-bucket"
    SLIDING_LOG = "sliding-log"
    SLIDING_COUNTER = "sliding-counter"
    CONCURRENCY = "concurrency"

    @classmethod
    def parse(cls, value: "AlgorithmKind | str") -> "AlgorithmKind":
        """Resolve a kind from an enum member or its (case-insensitive) value.

        Raises:
            ValueError: If the value names no algorithm.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        return cls(normalized)


def require_positive(name: str, value: Any) -> float:
    """Validate that a configuration value is a finite positive number.

    Raises:
        ConfigurationError: If the value is missing, non-numeric or not > 0.
    """
    if value is None:
        raise ConfigurationError(f"{name} is required", field=name, value=value)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(
            f"{name} must be a number, got {type(value).__name__}",
            field=name,
            value=value,
        )
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(
            f"{name} must be positive, got {value}", field=name, value=value
        )
    # Normalize numpy scalars and Fraction to builtin numbers.
    return int(value) if isinstance(value, numbers.Integral) else float(value)


def require_positive_int(name: str, value: Any) -> int:
    """Validate that a configuration value is a positive whole number.

    Integral values of any real type, such as ``10.0``, are accepted and
    converted to ``int``.

    Raises:
        ConfigurationError: If the value is missing, fractional or not > 0.
    """
    value = require_positive(name, value)
    if int(value) != value:
        raise ConfigurationError(
            f"{name} must be a whole number, got {value}", field=name, value=value
        )
    return int(value)


# Keys accepted by AlgorithmConfig.from_mapping, including the camelCase
# spellings used by the visualizer front end.
_KEY_ALIASES: dict[str, str] = {
    "limit": "limit",
    "window_size_ms": "window_size_ms",
    "windowSizeMs": "window_size_ms",
    "window": "window_size_ms",
    "capacity": "capacity",
    "rate_per_second": "rate_per_second",
    "ratePerSecond": "rate_per_second",
    "rate": "rate_per_second",
    "refillRate": "rate_per_second",
    "leakRate": "rate_per_second",
    "max_concurrency": "max_concurrency",
    "maxConcurrency": "max_concurrency",
    "initial_timestamp_ms": "initial_timestamp_ms",
    "initialTimestampMs": "initial_timestamp_ms",
}


@dataclass(frozen=True)
class AlgorithmConfig:
    """
    Immutable configuration for a single algorithm instance.

    Fields are optional because each algorithm reads a different subset;
    the factory applies fallbacks and the algorithm constructors reject
    anything still missing.
    """

    limit: int | None = None
    """Maximum admissions per window (windowed algorithms)."""

    window_size_ms: int | None = None
    """Window duration in milliseconds."""

    capacity: float | None = None
    """Bucket size (token and leaky bucket)."""

    rate_per_second: float | None = None
    """Refill or leak rate in units per second."""

    max_concurrency: int | None = None
    """Maximum in-flight requests (concurrency limiter)."""

    initial_timestamp_ms: float = 0
    """Virtual clock value the time-based state starts from."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for name in ("limit", "max_concurrency"):
            value = getattr(self, name)
            if value is not None:
                require_positive_int(name, value)
        for name in ("window_size_ms", "capacity", "rate_per_second"):
            value = getattr(self, name)
            if value is not None:
                require_positive(name, value)
        if isinstance(self.initial_timestamp_ms, bool) or not isinstance(
            self.initial_timestamp_ms, numbers.Real
        ):
            raise ConfigurationError(
                "initial_timestamp_ms must be a number",
                field="initial_timestamp_ms",
                value=self.initial_timestamp_ms,
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AlgorithmConfig":
        """Build a config from a plain mapping.

        Unknown keys raise ConfigurationError so that typos surface at
        construction instead of silently falling back to defaults.
        """
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            target = _KEY_ALIASES.get(key)
            if target is None:
                raise ConfigurationError(f"Unknown configuration key: {key!r}", field=key)
            if value is None:
                continue
            if target in kwargs and kwargs[target] != value:
                raise ConfigurationError(
                    f"Conflicting values for {target}: {kwargs[target]} and {value}",
                    field=target,
                    value=value,
                )
            kwargs[target] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the set fields as a plain dict."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


PLAYGROUND_PRESETS: dict[AlgorithmKind, AlgorithmConfig] = {
    AlgorithmKind.FIXED_WINDOW: AlgorithmConfig(limit=10, window_size_ms=5000),
    AlgorithmKind.TOKEN_BUCKET: AlgorithmConfig(capacity=10, rate_per_second=2),
    AlgorithmKind.LEAKY_BUCKET: AlgorithmConfig(capacity=10, rate_per_second=2),
    AlgorithmKind.SLIDING_LOG: AlgorithmConfig(limit=5, window_size_ms=10000),
    AlgorithmKind.SLIDING_COUNTER: AlgorithmConfig(limit=10, window_size_ms=5000),
    AlgorithmKind.CONCURRENCY: AlgorithmConfig(max_concurrency=3),
}
"""Default settings the playground starts each algorithm with."""


__all__ = [
    "DEFAULT_WINDOW_SIZE_MS",
    "PLAYGROUND_PRESETS",
    "AlgorithmConfig",
    "AlgorithmKind",
    "require_positive",
    "require_positive_int",
]
