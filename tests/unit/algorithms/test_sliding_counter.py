"""
Unit tests for SlidingWindowCounter.

Tests cover:
- Weighted estimate across the previous and current windows
- Window shifts, including jumps over several windows
- Projection of pending shifts in snapshots without mutation
- Estimate bounds
"""

import pytest

from rate_limit_lab.algorithms import SlidingWindowCounter
from rate_limit_lab.exceptions import ConfigurationError
from rate_limit_lab.types import SLIDING_WINDOW_LIMIT_EXCEEDED


@pytest.fixture
def counter():
    return SlidingWindowCounter(limit=10, window_size_ms=1000)


class TestSlidingCounterAdmission:
    """Tests for admit()."""

    def test_admits_up_to_limit_in_first_window(self, counter):
        assert all(counter.admit(0).allowed for _ in range(10))
        result = counter.admit(0)
        assert result.allowed is False
        assert result.reason == SLIDING_WINDOW_LIMIT_EXCEEDED

    def test_previous_window_fully_weighted_at_boundary(self, counter):
        """Right after a shift, the previous window counts in full."""
        for _ in range(10):
            counter.admit(0)
        assert counter.admit(1000).allowed is False
        state = counter.get_state(1000)
        assert state.previous_window_count == 10
        assert state.current_window_count == 0
        assert state.estimated_count == 10

    def test_half_weight_mid_window(self, counter):
        """Halfway through, half the previous window still counts."""
        for _ in range(10):
            counter.admit(0)
        admitted = sum(counter.admit(1500).allowed for _ in range(10))
        assert admitted == 5

    def test_shift_advances_by_whole_windows(self, counter):
        counter.admit(0)
        counter.admit(2750)
        state = counter.get_state(2750)
        assert state.window_start == 2000
        assert state.window_end == 3000

    def test_multi_window_jump_carries_current_count(self, counter):
        """A jump over several windows still moves current into previous."""
        for _ in range(10):
            counter.admit(0)
        assert counter.admit(3000).allowed is False
        assert counter.get_state(3000).previous_window_count == 10

    def test_initial_timestamp_sets_first_window(self):
        counter = SlidingWindowCounter(
            limit=2, window_size_ms=1000, initial_timestamp_ms=500
        )
        counter.admit(500)
        counter.admit(1400)
        assert counter.get_state(1400).window_start == 500
        assert counter.admit(1499).allowed is False
        counter.admit(1500)
        assert counter.get_state(1500).window_start == 1500

    def test_regressing_timestamp_keeps_estimate_non_negative(self, counter):
        for _ in range(4):
            counter.admit(0)
        counter.admit(1200)
        # Behind the window start: no shift, weight clamped to zero
        assert counter.admit(900).allowed is True
        state = counter.get_state(900)
        assert state.estimated_count >= 0
        assert state.window_start == 1000


class TestSlidingCounterState:
    """Tests for get_state()."""

    def test_estimate_equals_current_without_history(self, counter):
        counter.admit(0)
        counter.admit(0)
        state = counter.get_state(0)
        assert state.estimated_count == state.current_window_count == 2

    def test_snapshot_projects_shift_without_mutating(self, counter):
        for _ in range(3):
            counter.admit(0)
        projected = counter.get_state(1500)
        assert projected.window_start == 1000
        assert projected.previous_window_count == 3
        assert projected.current_window_count == 0
        assert projected.estimated_count == 1.5

        unchanged = counter.get_state(0)
        assert unchanged.window_start == 0
        assert unchanged.current_window_count == 3

    def test_estimate_rounded_to_two_decimals(self, counter):
        for _ in range(3):
            counter.admit(0)
        state = counter.get_state(1333)
        assert state.estimated_count == round(3 * (1 - 0.333), 2)

    def test_generic_accessors(self, counter):
        for _ in range(5):
            counter.admit(0)
        state = counter.get_state(0)
        assert state.current_count == 5
        assert state.percent_full == 50.0

    def test_default_timestamp_is_last_admission(self, counter):
        counter.admit(250)
        assert counter.get_state() == counter.get_state(250)

    def test_metrics(self, counter):
        assert counter.get_metrics() == {"limit": 10, "window_size_ms": 1000}


class TestSlidingCounterValidation:
    def test_zero_window_rejected(self):
        with pytest.raises(ConfigurationError, match="window_size_ms"):
            SlidingWindowCounter(limit=10, window_size_ms=0)
