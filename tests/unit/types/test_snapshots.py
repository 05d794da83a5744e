"""Unit tests for the snapshot models."""

import pytest
from pydantic import ValidationError

from rate_limit_lab.types import (
    ConcurrencySnapshot,
    FixedWindowSnapshot,
    LeakyBucketSnapshot,
    SlidingCounterSnapshot,
    SlidingLogSnapshot,
    TokenBucketSnapshot,
)


class TestSnapshotValidation:
    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            FixedWindowSnapshot(
                count=-1,
                limit=5,
                window_start=0,
                window_end=1000,
                is_window_expired=False,
            )

    def test_log_must_be_ascending(self):
        with pytest.raises(ValidationError, match="ascending"):
            SlidingLogSnapshot(
                limit=5, window_start=0, window_end=1000, timestamps=(10, 5)
            )

    def test_negative_estimate_rejected(self):
        with pytest.raises(ValidationError):
            SlidingCounterSnapshot(
                current_window_count=0,
                previous_window_count=0,
                estimated_count=-0.5,
                limit=5,
                window_start=0,
                window_end=1000,
            )

    def test_frozen(self):
        snapshot = ConcurrencySnapshot(active_count=1, max_concurrency=2)
        with pytest.raises(ValidationError):
            snapshot.active_count = 2


class TestGenericAccessors:
    @pytest.mark.parametrize(
        ("snapshot", "current", "maximum"),
        [
            (
                TokenBucketSnapshot(
                    tokens=2.5, capacity=10, rate_per_second=1, last_refill_timestamp=0
                ),
                2.5,
                10,
            ),
            (
                LeakyBucketSnapshot(
                    water_level=4, capacity=8, rate_per_second=1, last_leak_timestamp=0
                ),
                4,
                8,
            ),
            (
                SlidingLogSnapshot(
                    limit=4, window_start=0, window_end=10, timestamps=(1, 2, 3)
                ),
                3,
                4,
            ),
            (ConcurrencySnapshot(active_count=0, max_concurrency=3), 0, 3),
        ],
    )
    def test_current_count_and_maximum(self, snapshot, current, maximum):
        assert snapshot.current_count == current
        assert snapshot.maximum == maximum
        assert snapshot.percent_full == pytest.approx(current / maximum * 100)

    def test_percent_full_clamped(self):
        snapshot = SlidingCounterSnapshot(
            current_window_count=6,
            previous_window_count=10,
            estimated_count=12.0,
            limit=10,
            window_start=0,
            window_end=1000,
        )
        assert snapshot.percent_full == 100.0

    def test_token_display_helpers(self):
        snapshot = TokenBucketSnapshot(
            tokens=3.99, capacity=4, rate_per_second=1, last_refill_timestamp=0
        )
        assert snapshot.whole_tokens == 3
        assert snapshot.fill_percentage == pytest.approx(99.75)

    def test_serializes_to_dict(self):
        snapshot = ConcurrencySnapshot(active_count=1, max_concurrency=2)
        assert snapshot.model_dump() == {"active_count": 1, "max_concurrency": 2}
