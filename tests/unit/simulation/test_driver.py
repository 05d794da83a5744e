"""Unit tests for the virtual clock simulation driver."""

import logging

import pytest

from rate_limit_lab.config import AlgorithmConfig
from rate_limit_lab.exceptions import ConfigurationError
from rate_limit_lab.headers import HTTP_TOO_MANY_REQUESTS
from rate_limit_lab.observability import AdmissionMetricsCollector
from rate_limit_lab.simulation import RequestEvent, Simulation, SimulationStats
from rate_limit_lab.types import WINDOW_LIMIT_EXCEEDED


class TestSimulationRun:
    def test_token_bucket_playground_defaults(self):
        sim = Simulation("token-bucket", {"capacity": 10, "rate": 2})
        events = sim.run(5000)
        assert len(events) == 16
        assert sim.stats == SimulationStats(total=16, accepted=16, rejected=0)
        assert sim.now == 5000

    def test_fixed_window_rejections(self):
        sim = Simulation(
            "fixed-window",
            AlgorithmConfig(limit=3, window_size_ms=1000),
            request_interval_ms=100,
        )
        events = sim.run(1000)
        assert [event.timestamp_ms for event in events] == list(range(100, 1001, 100))
        assert [event.accepted for event in events] == [True] * 3 + [False] * 6 + [True]
        assert events[3].reason == WINDOW_LIMIT_EXCEEDED
        assert sim.stats.acceptance_rate == pytest.approx(0.4)

    def test_event_ids_are_sequential(self):
        sim = Simulation("sliding-log", {"limit": 5, "window": 10000})
        sim.run(3000)
        assert [event.id for event in sim.events] == list(range(len(sim.events)))

    def test_successive_runs_continue_the_clock(self):
        sim = Simulation("leaky-bucket", {"capacity": 10, "rate": 2})
        first = sim.run(1000)
        second = sim.run(1000)
        assert sim.now == 2000
        assert len(sim.events) == len(first) + len(second)
        assert second[0].timestamp_ms > first[-1].timestamp_ms

    def test_run_logs_summary(self, caplog):
        sim = Simulation("fixed-window", {"limit": 1, "window": 5000})
        with caplog.at_level(logging.INFO, logger="rate_limit_lab.simulation.driver"):
            sim.run(600)
        assert "1/2 accepted" in caplog.text

    def test_metrics_collector_passed_through(self):
        collector = AdmissionMetricsCollector(enable_prometheus=False)
        sim = Simulation(
            "fixed-window", {"limit": 1, "window": 5000}, metrics_collector=collector
        )
        sim.run(900)
        assert collector.allowed_count("fixed-window") == 1
        assert collector.rejected_count("fixed-window") == 2


class TestManualRequests:
    def test_send_request_at_explicit_time(self):
        sim = Simulation("fixed-window", {"limit": 1, "window": 1000})
        event = sim.send_request(250)
        assert event == RequestEvent(id=0, timestamp_ms=250, accepted=True)
        assert sim.now == 250

    def test_clock_cannot_move_backward(self):
        sim = Simulation("fixed-window", {"limit": 1, "window": 1000})
        sim.send_request(500)
        with pytest.raises(ValueError, match="before the clock"):
            sim.send_request(400)

    def test_headers_after_rejection(self):
        sim = Simulation("fixed-window", {"limit": 1, "window": 1000})
        sim.send_request(0)
        sim.send_request(100)
        headers = sim.headers()
        assert headers.status_code == HTTP_TOO_MANY_REQUESTS
        assert headers.remaining == 0
        assert headers.reset_after_ms == 900

    def test_get_state_uses_current_time(self):
        sim = Simulation("fixed-window", {"limit": 1, "window": 1000})
        sim.send_request(0)
        assert sim.get_state().is_window_expired is False
        sim.run(1000)
        assert sim.now == 1000
        assert sim.get_state().is_window_expired is True


class TestConcurrencySimulation:
    def test_hold_releases_requests(self):
        sim = Simulation(
            "concurrency",
            {"maxConcurrency": 2},
            request_interval_ms=100,
            hold_ms=250,
        )
        events = sim.run(500)
        assert [event.accepted for event in events] == [True, True, False, True, True]
        assert sim.get_state().active_count == 2

    def test_without_hold_requests_stay_in_flight(self):
        sim = Simulation("concurrency", {"maxConcurrency": 1}, request_interval_ms=100)
        events = sim.run(300)
        assert [event.accepted for event in events] == [True, False, False]

        sim.release()
        assert sim.send_request().accepted is True

    def test_hold_requires_releasable_algorithm(self):
        with pytest.raises(ConfigurationError, match="releasable"):
            Simulation("token-bucket", {"capacity": 1, "rate": 1}, hold_ms=100)

    def test_release_requires_releasable_algorithm(self):
        sim = Simulation("token-bucket", {"capacity": 1, "rate": 1})
        with pytest.raises(TypeError, match="does not support release"):
            sim.release()


class TestSimulationConfig:
    @pytest.mark.parametrize("field", ["request_interval_ms", "tick_ms", "hold_ms"])
    def test_non_positive_intervals_rejected(self, field):
        with pytest.raises(ConfigurationError, match=field):
            Simulation("concurrency", {"maxConcurrency": 1}, **{field: 0})

    def test_algorithm_config_errors_propagate(self):
        with pytest.raises(ConfigurationError):
            Simulation("fixed-window", {"limit": -1})


class TestReset:
    def test_reset_starts_fresh_session(self):
        sim = Simulation("fixed-window", {"limit": 1, "window": 5000})
        sim.run(1000)
        old_algorithm = sim.algorithm
        sim.reset()

        assert sim.now == 0
        assert sim.events == ()
        assert sim.stats == SimulationStats()
        assert sim.algorithm is not old_algorithm
        assert sim.send_request().accepted is True

    def test_stats_of_empty_session(self):
        assert SimulationStats().acceptance_rate == 0.0
