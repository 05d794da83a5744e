# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Rate Limit Lab - Deterministic rate limiting algorithms for visualization.

This library provides six classic admission algorithms driven by an
external virtual clock, each exposing a read-only snapshot of its
internal state so that a front end can animate how it works.

Key Features:
    - Fixed window, sliding log, sliding counter, token bucket, leaky
      bucket and concurrency limiting
    - Fully deterministic: no wall-clock reads, no background timers
    - Frozen snapshot models with generic gauges for display
    - Rate limit header projection (X-RateLimit-*)
    - Virtual clock simulation driver with per-request event log
    - Optional Prometheus counters for admission decisions

Quick Start:
    >>> from rate_limit_lab import create_algorithm
    >>> limiter = create_algorithm("fixed-window", {"limit": 2, "window": 1000})
    >>> limiter.admit(0).allowed, limiter.admit(0).allowed, limiter.admit(0).allowed
    (True, True, False)
    >>> limiter.admit(0).reason
    'window limit exceeded'

Main Exports:
    - create_algorithm: Factory for all six algorithms
    - AlgorithmConfig, AlgorithmKind: Configuration
    - AdmissionResult: Decision value object
    - Simulation: Virtual clock driver
    - RateLimitHeaders: Header projection

Note: Prometheus counters require the 'full' extra. Install with:
    pip install rate-limit-lab[full]

Version: 1.0.0
"""

__version__ = "1.0.0"

from .algorithms import (
    BaseRateLimitAlgorithm,
    ConcurrencyLimiter,
    FixedWindowCounter,
    LeakyBucket,
    SlidingWindowCounter,
    SlidingWindowLog,
    TokenBucket,
    create_algorithm,
)
from .config import PLAYGROUND_PRESETS, AlgorithmConfig, AlgorithmKind
from .exceptions import (
    ConfigurationError,
    RateLimiterError,
    UnknownAlgorithmError,
)
from .headers import RateLimitHeaders
from .observability import AdmissionMetricsCollector
from .protocols import RateLimitAlgorithm, ReleasableAlgorithm
from .simulation import RequestEvent, Simulation, SimulationStats
from .types import (
    AdmissionResult,
    AlgorithmSnapshot,
    ConcurrencySnapshot,
    FixedWindowSnapshot,
    LeakyBucketSnapshot,
    SlidingCounterSnapshot,
    SlidingLogSnapshot,
    TokenBucketSnapshot,
)

__all__ = [
    "PLAYGROUND_PRESETS",
    "AdmissionMetricsCollector",
    # Types
    "AdmissionResult",
    # Configuration
    "AlgorithmConfig",
    "AlgorithmKind",
    "AlgorithmSnapshot",
    # Algorithms
    "BaseRateLimitAlgorithm",
    "ConcurrencyLimiter",
    "ConcurrencySnapshot",
    "ConfigurationError",
    "FixedWindowCounter",
    "FixedWindowSnapshot",
    "LeakyBucket",
    "LeakyBucketSnapshot",
    # Protocols
    "RateLimitAlgorithm",
    "RateLimitHeaders",
    # Exceptions
    "RateLimiterError",
    "ReleasableAlgorithm",
    # Simulation
    "RequestEvent",
    "Simulation",
    "SimulationStats",
    "SlidingCounterSnapshot",
    "SlidingLogSnapshot",
    "SlidingWindowCounter",
    "SlidingWindowLog",
    "TokenBucket",
    "TokenBucketSnapshot",
    "UnknownAlgorithmError",
    "create_algorithm",
]
