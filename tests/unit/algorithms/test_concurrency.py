"""Unit tests for ConcurrencyLimiter."""

import logging

import pytest

from rate_limit_lab.algorithms import ConcurrencyLimiter
from rate_limit_lab.exceptions import ConfigurationError
from rate_limit_lab.types import MAX_CONCURRENCY_REACHED


class TestConcurrencyLimiter:
    @pytest.fixture
    def limiter(self):
        return ConcurrencyLimiter(max_concurrency=3)

    def test_admits_up_to_max(self, limiter):
        assert all(limiter.admit().allowed for _ in range(3))
        result = limiter.admit()
        assert result.allowed is False
        assert result.reason == MAX_CONCURRENCY_REACHED

    def test_rejection_log_omits_missing_timestamp(self, limiter, caplog):
        for _ in range(3):
            limiter.admit()
        with caplog.at_level(logging.DEBUG, logger="rate_limit_lab.algorithms"):
            limiter.admit()
        assert "concurrency rejected request: max concurrency reached" in caplog.text
        assert "None" not in caplog.text

    def test_release_frees_exactly_one_slot(self, limiter):
        for _ in range(3):
            limiter.admit()
        limiter.release()
        assert limiter.admit().allowed is True
        assert limiter.admit().allowed is False

    def test_release_without_admit_stays_at_zero(self, limiter):
        """Extra releases are a no-op, never an underflow."""
        limiter.release()
        limiter.release()
        assert limiter.get_state().active_count == 0
        assert all(limiter.admit().allowed for _ in range(3))
        assert limiter.admit().allowed is False

    def test_timestamp_ignored(self, limiter):
        assert limiter.admit(0).allowed is True
        assert limiter.admit(10**9).allowed is True
        assert limiter.admit(5).allowed is True
        assert limiter.admit(10**12).allowed is False

    def test_state_and_metrics(self, limiter):
        limiter.admit()
        state = limiter.get_state()
        assert state.active_count == 1
        assert state.max_concurrency == 3
        assert state.percent_full == pytest.approx(100 / 3)
        assert limiter.get_metrics() == {"max_concurrency": 3, "active_count": 1}

    @pytest.mark.parametrize("value", [0, -2, 1.5])
    def test_invalid_max_concurrency(self, value):
        with pytest.raises(ConfigurationError, match="max_concurrency"):
            ConcurrencyLimiter(max_concurrency=value)
