# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocols for rate limiting algorithms."""

from typing import Any, Protocol, runtime_checkable

from ..types.admission import AdmissionResult
from ..types.snapshots import AlgorithmSnapshot


@runtime_checkable
class RateLimitAlgorithm(Protocol):
    """
    Protocol for admission algorithms.

    Callers depend only on this shape: an admission decision per
    timestamp and a side-effect free state projection.
    """

    def admit(self, timestamp_ms: float) -> AdmissionResult:
        """
        Decide whether to admit a request arriving at ``timestamp_ms``.

        Args:
            timestamp_ms: Virtual clock value, non-decreasing per instance

        Returns:
            AdmissionResult with ``allowed`` and, on rejection, a reason
        """
        ...

    def get_state(self, timestamp_ms: float | None = None) -> AlgorithmSnapshot:
        """Return a read-only snapshot without mutating state."""
        ...

    def get_metrics(self) -> dict[str, Any]:
        """Return the configuration figures shown beside the snapshot."""
        ...


@runtime_checkable
class ReleasableAlgorithm(RateLimitAlgorithm, Protocol):
    """An algorithm whose admissions hold a slot until released."""

    def release(self) -> None:
        """Free one slot; never drops below zero."""
        ...
