# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions and constants."""

from .admission import (
    BUCKET_OVERFLOW,
    MAX_CONCURRENCY_REACHED,
    NO_TOKENS_AVAILABLE,
    REJECTION_REASONS,
    SLIDING_WINDOW_LIMIT_EXCEEDED,
    WINDOW_LIMIT_EXCEEDED,
    AdmissionResult,
)
from .snapshots import (
    AlgorithmSnapshot,
    ConcurrencySnapshot,
    FixedWindowSnapshot,
    LeakyBucketSnapshot,
    SlidingCounterSnapshot,
    SlidingLogSnapshot,
    TokenBucketSnapshot,
)

__all__ = [
    # Rejection reasons
    "BUCKET_OVERFLOW",
    "MAX_CONCURRENCY_REACHED",
    "NO_TOKENS_AVAILABLE",
    "REJECTION_REASONS",
    "SLIDING_WINDOW_LIMIT_EXCEEDED",
    "WINDOW_LIMIT_EXCEEDED",
    # Admission
    "AdmissionResult",
    # Snapshots
    "AlgorithmSnapshot",
    "ConcurrencySnapshot",
    "FixedWindowSnapshot",
    "LeakyBucketSnapshot",
    "SlidingCounterSnapshot",
    "SlidingLogSnapshot",
    "TokenBucketSnapshot",
]
