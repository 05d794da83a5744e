# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Concurrency limiter."""

import logging
from typing import TYPE_CHECKING, Any

from ..config import AlgorithmConfig, AlgorithmKind, require_positive_int
from ..types.admission import MAX_CONCURRENCY_REACHED, AdmissionResult
from ..types.snapshots import ConcurrencySnapshot
from .base import BaseRateLimitAlgorithm

if TYPE_CHECKING:
    from ..observability.collector import AdmissionMetricsCollector

logger = logging.getLogger(__name__)


class ConcurrencyLimiter(BaseRateLimitAlgorithm):
    """
    Caps the number of requests in flight at once.

    Not time based: each admission takes a slot until ``release()`` frees
    it. Releasing more often than admitting is tolerated and leaves the
    count at zero.

    Args:
        max_concurrency: Maximum simultaneous in-flight requests.
    """

    kind = AlgorithmKind.CONCURRENCY

    def __init__(
        self,
        max_concurrency: int,
        metrics_collector: "AdmissionMetricsCollector | None" = None,
    ):
        super().__init__(metrics_collector)
        self._max_concurrency = require_positive_int("max_concurrency", max_concurrency)
        self._active_count = 0

    @property
    def config(self) -> AlgorithmConfig:
        return AlgorithmConfig(max_concurrency=self._max_concurrency)

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    @property
    def active_count(self) -> int:
        return self._active_count

    def admit(self, timestamp_ms: float | None = None) -> AdmissionResult:
        """Take a slot if one is free. ``timestamp_ms`` is accepted but unused."""
        return super().admit(timestamp_ms)  # type: ignore[arg-type]

    def _decide(self, timestamp_ms: float) -> AdmissionResult:
        if self._active_count < self._max_concurrency:
            self._active_count += 1
            return AdmissionResult.accept()
        return AdmissionResult.reject(MAX_CONCURRENCY_REACHED)

    def release(self) -> None:
        """Free one slot."""
        if self._active_count == 0:
            logger.debug("release() called with no active requests, ignoring")
            return
        self._active_count -= 1

    def get_state(self, timestamp_ms: float | None = None) -> ConcurrencySnapshot:
        return ConcurrencySnapshot(
            active_count=self._active_count,
            max_concurrency=self._max_concurrency,
        )

    def get_metrics(self) -> dict[str, Any]:
        return {
            "max_concurrency": self._max_concurrency,
            "active_count": self._active_count,
        }


__all__ = ["ConcurrencyLimiter"]
