# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Admission result types.

This module defines the value object returned by every admission call
and the diagnostic reasons attached to rejections.
"""

from dataclasses import dataclass

WINDOW_LIMIT_EXCEEDED = "window limit exceeded"
NO_TOKENS_AVAILABLE = "no tokens available"
BUCKET_OVERFLOW = "bucket overflow"
SLIDING_WINDOW_LIMIT_EXCEEDED = "sliding window limit exceeded"
MAX_CONCURRENCY_REACHED = "max concurrency reached"

REJECTION_REASONS = (
    WINDOW_LIMIT_EXCEEDED,
    NO_TOKENS_AVAILABLE,
    BUCKET_OVERFLOW,
    SLIDING_WINDOW_LIMIT_EXCEEDED,
    MAX_CONCURRENCY_REACHED,
)


@dataclass(frozen=True)
class AdmissionResult:
    """
    Outcome of a single admission decision.

    A rejection is an expected business outcome, not an error, so it is
    reported here rather than raised.

    Attributes:
        allowed: Whether the request was admitted
        reason: Why the request was rejected; None when admitted
    """

    allowed: bool
    reason: str | None = None

    def __post_init__(self) -> None:
        if self.allowed and self.reason is not None:
            raise ValueError("An admitted result carries no reason")
        if not self.allowed and not self.reason:
            raise ValueError("A rejected result requires a non-empty reason")

    @classmethod
    def accept(cls) -> "AdmissionResult":
        return _ACCEPTED

    @classmethod
    def reject(cls, reason: str) -> "AdmissionResult":
        return cls(allowed=False, reason=reason)

    def __bool__(self) -> bool:
        return self.allowed


_ACCEPTED = AdmissionResult(allowed=True)


__all__ = [
    "BUCKET_OVERFLOW",
    "MAX_CONCURRENCY_REACHED",
    "NO_TOKENS_AVAILABLE",
    "REJECTION_REASONS",
    "SLIDING_WINDOW_LIMIT_EXCEEDED",
    "WINDOW_LIMIT_EXCEEDED",
    "AdmissionResult",
]
