"""Tests for the headless pile benchmark helpers."""
import pytest

from composting import CompostConfig
from composting.moisture import MOISTURE_CURVE
from performance.benchmarks.simulation import (
    PerformanceMetrics,
    build_yard,
    curve_rows,
    environment_modifiers,
    pile_arrays,
    run_benchmark,
    simulate_tick_profiled,
    summarize,
    timed,
)


def test_summarize():
    stats = summarize([1.0, 2.0, 3.0, 10.0])
    assert stats["mean"] == pytest.approx(4.0)
    assert stats["median"] == pytest.approx(2.5)
    assert stats["min"] == 1.0
    assert stats["max"] == 10.0
    assert stats["stdev"] > 0


def test_summarize_degenerate_inputs():
    assert summarize([]) == dict.fromkeys(("mean", "median", "stdev", "min", "max"), 0.0)
    assert summarize([5.0])["stdev"] == 0.0


def test_timed_appends_one_sample():
    samples = []
    with timed(samples):
        pass
    assert len(samples) == 1
    assert samples[0] >= 0.0


def test_build_yard_is_seeded():
    a = build_yard(12, seed=5, config=CompostConfig())
    b = build_yard(12, seed=5, config=CompostConfig())
    assert [p.inventory.to_state() for p in a.piles.values()] == [p.inventory.to_state() for p in b.piles.values()]
    assert all(p.is_active() for p in a.piles.values())
    assert not a.weather.is_rain_exposed((0, 0))
    assert a.weather.is_rain_exposed((1, 0))


def test_profiled_tick_records_every_system():
    state = build_yard(4, seed=1, config=CompostConfig())
    metrics = PerformanceMetrics()
    for _ in range(3):
        simulate_tick_profiled(state, metrics, 1.0)
    assert len(metrics.tick_times) == 3
    assert all(len(times) == 3 for times in metrics.system_times.values())
    assert all(p.decomposition_progress > 0 for p in state.piles.values())


def test_environment_modifiers_match_single_pile_lookup():
    state = build_yard(6, seed=2, config=CompostConfig())
    readings = pile_arrays(state)
    combined = environment_modifiers(readings)
    assert combined.shape == (6,)
    pile = state.piles[(0, 0)]
    expected = (pile.moisture.decomposition_modifier() * pile.aeration.decomposition_modifier()
                * pile.temperature.decomposition_modifier())
    assert combined[0] == pytest.approx(expected)


def test_curve_rows_cover_every_band():
    rows = curve_rows(MOISTURE_CURVE)
    assert len(rows) == len(MOISTURE_CURVE.values)
    assert rows[3].endswith("Optimal")


def test_quiet_run():
    metrics = run_benchmark(num_piles=3, hours=5.0, seed=0, quiet=True)
    assert len(metrics.tick_times) == 10
    assert metrics.total_time > 0
