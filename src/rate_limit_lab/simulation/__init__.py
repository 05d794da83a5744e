# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Deterministic virtual clock simulation of request traffic."""

from .driver import Simulation
from .models import RequestEvent, SimulationStats

__all__ = [
    "RequestEvent",
    "Simulation",
    "SimulationStats",
]
