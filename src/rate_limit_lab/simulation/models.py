# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Records produced by a simulation run."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestEvent:
    """
    One simulated request and its admission outcome.

    Attributes:
        id: Sequence number within the run, starting at 0
        timestamp_ms: Virtual time the request arrived
        accepted: Whether the algorithm admitted it
        reason: Rejection reason, None when accepted
    """

    id: int
    timestamp_ms: float
    accepted: bool
    reason: str | None = None


@dataclass(frozen=True)
class SimulationStats:
    """Totals over every request of a run."""

    total: int = 0
    accepted: int = 0
    rejected: int = 0

    @property
    def acceptance_rate(self) -> float:
        return self.accepted / self.total if self.total > 0 else 0.0


__all__ = ["RequestEvent", "SimulationStats"]
