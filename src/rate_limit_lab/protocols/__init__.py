# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for rate limit lab components.

Available protocols:
- RateLimitAlgorithm: Interface shared by all admission algorithms
- ReleasableAlgorithm: Algorithms that also expose ``release()``
"""

from .algorithm import RateLimitAlgorithm, ReleasableAlgorithm

__all__ = [
    "RateLimitAlgorithm",
    "ReleasableAlgorithm",
]
