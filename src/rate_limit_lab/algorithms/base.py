# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Base rate limiting algorithm.

This module defines the abstract base class that all six admission
algorithms implement. Subclasses provide the decision procedure and the
state projection; the base class handles logging and metrics so every
algorithm reports decisions the same way.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from ..config import AlgorithmConfig, AlgorithmKind
from ..types.admission import AdmissionResult
from ..types.snapshots import AlgorithmSnapshot

if TYPE_CHECKING:
    from ..observability.collector import AdmissionMetricsCollector

logger = logging.getLogger(__name__)


class BaseRateLimitAlgorithm(ABC):
    """
    Abstract base class for admission algorithms.

    Each instance is an independent state machine driven by an external
    virtual clock. It never reads the wall clock, shares no state with
    other instances and is not thread-safe; callers that share an
    instance across threads must synchronize externally.

    Attributes:
        kind: Discriminator identifying the algorithm
        metrics_collector: Optional collector notified of every decision

    Example:
        >>> class AlwaysAllow(BaseRateLimitAlgorithm):
        ...     kind = AlgorithmKind.CONCURRENCY
        ...     def _decide(self, timestamp_ms):
        ...         return AdmissionResult.accept()
        ...     def get_state(self, timestamp_ms=None):
        ...         ...
        ...     def get_metrics(self):
        ...         return {}
        ...     @property
        ...     def config(self):
        ...         return AlgorithmConfig()
    """

    kind: ClassVar[AlgorithmKind]

    def __init__(
        self, metrics_collector: "AdmissionMetricsCollector | None" = None
    ) -> None:
        self.metrics_collector = metrics_collector

    def admit(self, timestamp_ms: float) -> AdmissionResult:
        """
        Decide whether to admit a request arriving at ``timestamp_ms``.

        Rejections are returned, never raised.

        Args:
            timestamp_ms: Virtual clock value in milliseconds. Must be
                non-decreasing across calls on the same instance.

        Returns:
            AdmissionResult describing the decision
        """
        result = self._decide(timestamp_ms)
        if not result.allowed:
            at = "" if timestamp_ms is None else f" at {timestamp_ms}ms"
            logger.debug(f"{self.kind.value} rejected request{at}: {result.reason}")
        if self.metrics_collector is not None:
            self.metrics_collector.record(self.kind, result)
        return result

    @abstractmethod
    def _decide(self, timestamp_ms: float) -> AdmissionResult:
        """Advance state to ``timestamp_ms`` and make the decision."""
        pass

    @abstractmethod
    def get_state(self, timestamp_ms: float | None = None) -> AlgorithmSnapshot:
        """
        Return a read-only snapshot of the internal counters.

        Reading state never mutates it: two calls without an intervening
        ``admit()`` return equal snapshots.

        Args:
            timestamp_ms: Clock value used for window-relative figures.
                Algorithms whose snapshot reflects the last admission
                ignore it.
        """
        pass

    @abstractmethod
    def get_metrics(self) -> dict[str, Any]:
        """Return the configuration figures shown beside the snapshot."""
        pass

    @property
    @abstractmethod
    def config(self) -> AlgorithmConfig:
        """The immutable configuration this instance was built with."""
        pass

    def __repr__(self) -> str:
        settings = ", ".join(f"{k}={v}" for k, v in self.config.to_dict().items())
        return f"{type(self).__name__}({settings})"


__all__ = ["BaseRateLimitAlgorithm"]
