# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Rate limiting algorithms.

This package contains the six admission algorithms and the factory that
builds them from a kind discriminator. Each algorithm trades accuracy,
memory and burst tolerance differently.

Available Algorithms:
    - FIXED_WINDOW: Count per discrete window, allows boundary bursts
    - TOKEN_BUCKET: Steady refill with burst capacity
    - LEAKY_BUCKET: Steady drain, smooths bursts
    - SLIDING_LOG: Exact rolling window, memory grows with traffic
    - SLIDING_COUNTER: Weighted two-window approximation, O(1) memory
    - CONCURRENCY: Caps in-flight requests, released explicitly

The base class `BaseRateLimitAlgorithm` defines the interface that all
algorithms implement.
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..config import (
    DEFAULT_WINDOW_SIZE_MS,
    AlgorithmConfig,
    AlgorithmKind,
)
from ..exceptions import ConfigurationError, UnknownAlgorithmError
from .base import BaseRateLimitAlgorithm
from .concurrency import ConcurrencyLimiter
from .fixed_window import FixedWindowCounter
from .leaky_bucket import LeakyBucket
from .sliding_counter import SlidingWindowCounter
from .sliding_log import SlidingWindowLog
from .token_bucket import TokenBucket

if TYPE_CHECKING:
    from ..observability.collector import AdmissionMetricsCollector

logger = logging.getLogger(__name__)


def _require(config: AlgorithmConfig, kind: AlgorithmKind, name: str) -> Any:
    value = getattr(config, name)
    if value is None:
        raise ConfigurationError(f"{name} is required for {kind.value}", field=name)
    return value


def create_algorithm(
    kind: AlgorithmKind | str,
    config: AlgorithmConfig | Mapping[str, Any],
    metrics_collector: "AdmissionMetricsCollector | None" = None,
) -> BaseRateLimitAlgorithm:
    """
    Factory function to create an algorithm by kind.

    Fallbacks when a field is absent:
        - window_size_ms defaults to 1000
        - bucket capacity and rate_per_second fall back to limit
        - max_concurrency falls back to limit

    Args:
        kind: Algorithm kind or its value ("fixed-window", "token-bucket",
            "leaky-bucket", "sliding-log", "sliding-counter", "concurrency"),
            case insensitive
        config: AlgorithmConfig, or a mapping accepted by
            ``AlgorithmConfig.from_mapping``
        metrics_collector: Optional collector notified of every decision

    Returns:
        A fresh algorithm instance

    Raises:
        UnknownAlgorithmError: If kind names no algorithm
        ConfigurationError: If a required value is missing or invalid
    """
    try:
        kind = AlgorithmKind.parse(kind)
    except ValueError:
        raise UnknownAlgorithmError(str(kind)) from None

    if not isinstance(config, AlgorithmConfig):
        config = AlgorithmConfig.from_mapping(config)

    window_size_ms = config.window_size_ms or DEFAULT_WINDOW_SIZE_MS

    if kind is AlgorithmKind.FIXED_WINDOW:
        algorithm: BaseRateLimitAlgorithm = FixedWindowCounter(
            _require(config, kind, "limit"), window_size_ms, metrics_collector
        )

    elif kind is AlgorithmKind.TOKEN_BUCKET:
        algorithm = TokenBucket(
            config.capacity or _require(config, kind, "limit"),
            config.rate_per_second or _require(config, kind, "limit"),
            config.initial_timestamp_ms,
            metrics_collector,
        )

    elif kind is AlgorithmKind.LEAKY_BUCKET:
        algorithm = LeakyBucket(
            config.capacity or _require(config, kind, "limit"),
            config.rate_per_second or _require(config, kind, "limit"),
            config.initial_timestamp_ms,
            metrics_collector,
        )

    elif kind is AlgorithmKind.SLIDING_LOG:
        algorithm = SlidingWindowLog(
            _require(config, kind, "limit"), window_size_ms, metrics_collector
        )

    elif kind is AlgorithmKind.SLIDING_COUNTER:
        algorithm = SlidingWindowCounter(
            _require(config, kind, "limit"),
            window_size_ms,
            config.initial_timestamp_ms,
            metrics_collector,
        )

    else:
        algorithm = ConcurrencyLimiter(
            config.max_concurrency or _require(config, kind, "limit"),
            metrics_collector,
        )

    logger.debug(f"Created {algorithm!r}")
    return algorithm


__all__ = [
    "BaseRateLimitAlgorithm",
    "ConcurrencyLimiter",
    "FixedWindowCounter",
    "LeakyBucket",
    "SlidingWindowCounter",
    "SlidingWindowLog",
    "TokenBucket",
    "create_algorithm",
]
