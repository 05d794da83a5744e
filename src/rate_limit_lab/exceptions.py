# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the rate limit lab library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from RateLimiterError, making it easy to catch
all library errors with a single except clause.

Note that a rejected request is never an exception: algorithms report
rejections through ``AdmissionResult(allowed=False, reason=...)``.
"""


class RateLimiterError(Exception):
    """Base exception for all rate limit lab errors.

    Example:
        try:
            algorithm = create_algorithm(kind, config)
        except RateLimiterError as e:
            logger.error(f"Cannot build algorithm: {e}")
    """

    pass


class ConfigurationError(RateLimiterError, ValueError):
    """Raised when algorithm configuration is invalid.

    This exception is raised at construction time, before any state is
    created, when a configuration value is missing or out of range.

    Common causes include:
    - A zero or negative limit, capacity, rate or window size
    - A zero or negative max_concurrency
    - A required value missing for the requested algorithm kind

    Attributes:
        field: Name of the offending configuration field, if known.
        value: The rejected value, if known.

    Example:
        try:
            FixedWindowCounter(limit=0, window_size_ms=1000)
        except ConfigurationError as e:
            print(e.field)  # "limit"
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: object = None,
    ):
        super().__init__(message)
        self.field = field
        self.value = value


class UnknownAlgorithmError(RateLimiterError, ValueError):
    """Raised by the factory for an unrecognized algorithm kind.

    Attributes:
        kind: The discriminator that did not match any algorithm.
    """

    def __init__(self, kind: str):
        super().__init__(f"Unknown algorithm kind: {kind!r}")
        self.kind = kind


__all__ = [
    "ConfigurationError",
    "RateLimiterError",
    "UnknownAlgorithmError",
]
