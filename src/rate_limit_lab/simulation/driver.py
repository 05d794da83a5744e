# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Virtual clock simulation driver.

Drives an algorithm the way the playground does: a virtual clock advances
in fixed ticks and a request is issued whenever the configured request
interval has elapsed since the previous one. Everything is synchronous
and deterministic; no timers or wall-clock reads are involved.
"""

import heapq
import logging
from collections.abc import Mapping
from typing import Any

from ..algorithms import BaseRateLimitAlgorithm, create_algorithm
from ..config import AlgorithmConfig, AlgorithmKind, require_positive
from ..exceptions import ConfigurationError
from ..headers import RateLimitHeaders
from ..observability.collector import AdmissionMetricsCollector
from ..protocols.algorithm import ReleasableAlgorithm
from ..types.admission import AdmissionResult
from ..types.snapshots import AlgorithmSnapshot
from .models import RequestEvent, SimulationStats

logger = logging.getLogger(__name__)


class Simulation:
    """
    A single simulation session around one algorithm instance.

    The algorithm is rebuilt from the same kind and configuration on
    ``reset()``; nothing carries over between sessions.

    Args:
        kind: Algorithm kind passed to the factory
        config: Algorithm configuration passed to the factory
        request_interval_ms: Virtual time between generated requests
        tick_ms: Virtual time the clock advances per ``tick()``
        hold_ms: For releasable algorithms, how long an admitted request
            stays in flight before it is released. None keeps requests
            in flight until ``release()`` is called.
        metrics_collector: Optional collector passed to the algorithm

    Raises:
        ConfigurationError: If an interval is not positive, or hold_ms is
            given for an algorithm that cannot release

    Example:
        >>> sim = Simulation("token-bucket", {"capacity": 10, "rate": 2})
        >>> sim.run(5000)
        >>> sim.stats.accepted
        16
    """

    def __init__(
        self,
        kind: AlgorithmKind | str,
        config: AlgorithmConfig | Mapping[str, Any],
        request_interval_ms: float = 300,
        tick_ms: float = 100,
        hold_ms: float | None = None,
        metrics_collector: AdmissionMetricsCollector | None = None,
    ):
        self._kind = kind
        self._config = config
        self._request_interval_ms = require_positive(
            "request_interval_ms", request_interval_ms
        )
        self._tick_ms = require_positive("tick_ms", tick_ms)
        self._hold_ms = None if hold_ms is None else require_positive("hold_ms", hold_ms)
        self._metrics_collector = metrics_collector

        self.algorithm: BaseRateLimitAlgorithm = self._build()
        if self._hold_ms is not None and not isinstance(
            self.algorithm, ReleasableAlgorithm
        ):
            raise ConfigurationError(
                f"hold_ms requires a releasable algorithm, got {self.algorithm.kind.value}",
                field="hold_ms",
                value=hold_ms,
            )

        self._now: float = 0
        self._last_request_ms: float = 0
        self._events: list[RequestEvent] = []
        self._pending_releases: list[float] = []
        self._last_result: AdmissionResult | None = None

    def _build(self) -> BaseRateLimitAlgorithm:
        return create_algorithm(self._kind, self._config, self._metrics_collector)

    @property
    def now(self) -> float:
        """Current virtual time in milliseconds."""
        return self._now

    @property
    def events(self) -> tuple[RequestEvent, ...]:
        return tuple(self._events)

    @property
    def stats(self) -> SimulationStats:
        accepted = sum(1 for event in self._events if event.accepted)
        return SimulationStats(
            total=len(self._events),
            accepted=accepted,
            rejected=len(self._events) - accepted,
        )

    def _release_due(self) -> None:
        while self._pending_releases and self._pending_releases[0] <= self._now:
            heapq.heappop(self._pending_releases)
            self.algorithm.release()  # type: ignore[attr-defined]

    def send_request(self, timestamp_ms: float | None = None) -> RequestEvent:
        """
        Issue one request now, or at ``timestamp_ms`` if given.

        Raises:
            ValueError: If ``timestamp_ms`` is earlier than the clock
        """
        if timestamp_ms is not None:
            if timestamp_ms < self._now:
                raise ValueError(
                    f"timestamp_ms {timestamp_ms} is before the clock ({self._now})"
                )
            self._now = timestamp_ms
            self._release_due()

        result = self.algorithm.admit(self._now)
        self._last_result = result
        event = RequestEvent(
            id=len(self._events),
            timestamp_ms=self._now,
            accepted=result.allowed,
            reason=result.reason,
        )
        self._events.append(event)

        if result.allowed and self._hold_ms is not None:
            heapq.heappush(self._pending_releases, self._now + self._hold_ms)
        return event

    def release(self) -> None:
        """Release one in-flight request on a releasable algorithm."""
        if not isinstance(self.algorithm, ReleasableAlgorithm):
            raise TypeError(f"{self.algorithm.kind.value} does not support release()")
        self.algorithm.release()

    def tick(self) -> RequestEvent | None:
        """Advance the clock one tick, issuing a request if one is due."""
        self._now += self._tick_ms
        self._release_due()
        if self._now - self._last_request_ms >= self._request_interval_ms:
            self._last_request_ms = self._now
            return self.send_request()
        return None

    def run(self, duration_ms: float) -> list[RequestEvent]:
        """
        Tick until the clock has advanced by ``duration_ms``.

        Returns:
            The events issued during this run
        """
        start = len(self._events)
        deadline = self._now + duration_ms
        while self._now + self._tick_ms <= deadline:
            self.tick()
        issued = self._events[start:]
        logger.info(
            f"Simulated {duration_ms}ms of {self.algorithm.kind.value}: "
            f"{sum(1 for e in issued if e.accepted)}/{len(issued)} accepted"
        )
        return issued

    def get_state(self) -> AlgorithmSnapshot:
        """Algorithm snapshot at the current virtual time."""
        return self.algorithm.get_state(self._now)

    def headers(self) -> RateLimitHeaders:
        """Rate limit headers for the most recent response."""
        return RateLimitHeaders.from_algorithm(
            self.algorithm, self._now, self._last_result
        )

    def reset(self) -> None:
        """Start a new session with a fresh algorithm and a zeroed clock."""
        self.algorithm = self._build()
        self._now = 0
        self._last_request_ms = 0
        self._events.clear()
        self._pending_releases.clear()
        self._last_result = None
        logger.info(f"Simulation reset for {self.algorithm.kind.value}")


__all__ = ["Simulation"]
