#!/usr/bin/env python3
"""
Performance benchmark for the compost simulation.

Runs many independent piles headless for a span of game hours and reports
tick timing, memory, and how far the piles got. Pile contents are drawn
from a seeded generator so runs are comparable.
"""
from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import argparse
import time
import tracemalloc
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Sequence

import numpy as np

from composting import CompostConfig, MaterialType
from composting.aeration import AERATION_CURVE
from composting.curves import ModifierCurve
from composting.moisture import MOISTURE_CURVE
from composting.temperature import TEMPERATURE_CURVE
from config import TICK_HOURS
from game_state import GameState
from world.weather import WeatherSystem

REPORT_WIDTH = 72
SUMMARY_FIELDS = ("mean", "median", "stdev", "min", "max")


@contextmanager
def timed(samples: List[float]) -> Iterator[None]:
    """Append the wall time of the block (seconds) to `samples`."""
    start = time.perf_counter()
    try:
        yield
    finally:
        samples.append(time.perf_counter() - start)


def summarize(values: Sequence[float]) -> Dict[str, float]:
    """Mean, median, sample stdev and range of a set of samples (zeros if empty)."""
    data = np.asarray(values, dtype=np.float64)
    if data.size == 0:
        return dict.fromkeys(SUMMARY_FIELDS, 0.0)
    return {
        "mean": float(data.mean()),
        "median": float(np.median(data)),
        "stdev": float(data.std(ddof=1)) if data.size > 1 else 0.0,
        "min": float(data.min()),
        "max": float(data.max()),
    }


def ms(seconds: float) -> str:
    return f"{seconds * 1000:.3f}ms"


def report(label: str, values: Sequence[float], fmt: Callable[[float], str] = ms) -> None:
    """One report row: label, then every summary field through `fmt`."""
    cells = " / ".join(fmt(v) for v in summarize(values).values())
    print(f"  {label:<18} {cells}")


def heading(title: str) -> None:
    print(f"\n{title}\n{'-' * REPORT_WIDTH}")


class PerformanceMetrics:
    """Timing and memory samples collected over a benchmark run."""

    def __init__(self):
        self.tick_times: List[float] = []
        self.system_times: Dict[str, List[float]] = {
            'weather': [],
            'piles': [],
        }
        self.memory_snapshots: List[int] = []  # Bytes
        self.total_time: float = 0.0

    def record_memory(self):
        current, _peak = tracemalloc.get_traced_memory()
        self.memory_snapshots.append(current)

    def print_report(self, state: GameState):
        ticks = len(self.tick_times)
        rate = f"{ticks / self.total_time:.1f} ticks/s" if self.total_time > 0 else "n/a"
        print("=" * REPORT_WIDTH)
        print(f"COMPOST BENCHMARK: {len(state.piles)} piles, {state.hour:.1f} game hours, "
              f"{ticks} ticks in {self.total_time:.2f}s ({rate})")
        print("=" * REPORT_WIDTH)

        heading("TICK TIMING  " + " / ".join(SUMMARY_FIELDS))
        report("Total tick", self.tick_times)
        for system, times in self.system_times.items():
            report(system.capitalize(), times)
        if state.piles:
            per_pile = [t / len(state.piles) for t in self.system_times['piles']]
            report("Per pile", per_pile)

        if self.memory_snapshots:
            heading("MEMORY  " + " / ".join(SUMMARY_FIELDS))
            report("Traced", self.memory_snapshots, lambda b: f"{b / (1024 * 1024):.1f}MB")

        print_pile_outcomes(state)


def pile_arrays(state: GameState) -> Dict[str, np.ndarray]:
    """Per-pile readings gathered into arrays, one entry per pile."""
    piles = list(state.piles.values())
    return {
        "progress": np.array([p.decomposition_progress for p in piles]),
        "moisture": np.array([p.moisture_level for p in piles]),
        "aeration": np.array([p.aeration_level for p in piles]),
        "temperature": np.array([p.internal_temperature for p in piles]),
        "finished": np.array([p.is_finished() for p in piles], dtype=bool),
    }


def environment_modifiers(readings: Dict[str, np.ndarray]) -> np.ndarray:
    """Combined moisture x aeration x temperature rate modifier for every pile."""
    return (
        MOISTURE_CURVE.evaluate(readings["moisture"])
        * AERATION_CURVE.evaluate(readings["aeration"])
        * TEMPERATURE_CURVE.evaluate(readings["temperature"])
    )


def print_pile_outcomes(state: GameState):
    readings = pile_arrays(state)
    heading("PILE OUTCOMES  " + " / ".join(SUMMARY_FIELDS))
    report("Progress", readings["progress"], lambda v: f"{v:.0%}")
    report("Moisture", readings["moisture"], lambda v: f"{v:.2f}")
    report("Aeration", readings["aeration"], lambda v: f"{v:.2f}")
    report("Temperature", readings["temperature"], lambda v: f"{v:.1f}C")
    report("Env. modifier", environment_modifiers(readings), lambda v: f"x{v:.2f}")
    print(f"  {'Finished':<18} {int(readings['finished'].sum())}/{readings['finished'].size}")


def build_yard(num_piles: int, seed: int, config: CompostConfig) -> GameState:
    """A yard of piles with random green/brown mixes and fill levels."""
    rng = np.random.default_rng(seed)
    state = GameState(weather=WeatherSystem(seed=seed), config=config)

    for i in range(num_piles):
        pile = state.add_pile((i, 0))
        total = int(rng.integers(1, config.max_capacity + 1))
        greens = int(rng.binomial(total, 0.5))
        pile.add_material(greens, MaterialType.GREEN)
        pile.add_material(total - greens, MaterialType.BROWN)
        pile.start()

    # Shelter every fourth pile from rain
    for i in range(0, num_piles, 4):
        state.weather.shelter((i, 0))
    return state


def simulate_tick_profiled(state: GameState, metrics: PerformanceMetrics, hours: float) -> None:
    """Run one tick with per-system timing."""
    with timed(metrics.tick_times):
        with timed(metrics.system_times['weather']):
            state.weather.tick(hours)
        with timed(metrics.system_times['piles']):
            now = state.weather.now()
            for pile in state.piles.values():
                pile.update(now)


def run_benchmark(num_piles: int = 200, hours: float = 240.0, seed: int = 0, quiet: bool = False) -> PerformanceMetrics:
    """Run the headless benchmark and print its report."""
    config = CompostConfig()
    num_ticks = int(hours / TICK_HOURS)
    if not quiet:
        print(f"\nStarting benchmark: {num_piles} piles for {hours:g} game hours ({num_ticks} ticks)...")

    tracemalloc.start()
    state = build_yard(num_piles, seed, config)
    metrics = PerformanceMetrics()

    started = time.perf_counter()
    for i in range(num_ticks):
        simulate_tick_profiled(state, metrics, TICK_HOURS)
        if i % 100 == 0:
            metrics.record_memory()
            if not quiet:
                print(f"    Ticks: {i}/{num_ticks}", end='\r')
    metrics.total_time = time.perf_counter() - started
    tracemalloc.stop()

    if not quiet:
        print(f"    Ticks: {num_ticks}/{num_ticks}")
        metrics.print_report(state)
    return metrics


def curve_rows(curve: ModifierCurve) -> List[str]:
    """Modifier table lines: range, multiplier, state name."""
    return [f"  {span:<20} x{value:<8.1f} {label}".rstrip() for span, value, label in curve.table()]


def print_curves():
    """Dump the modifier tables the piles are scored with."""
    for title, curve in (
        ("MOISTURE", MOISTURE_CURVE),
        ("AERATION", AERATION_CURVE),
        ("TEMPERATURE (C)", TEMPERATURE_CURVE),
    ):
        heading(title)
        print("\n".join(curve_rows(curve)))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Headless compost simulation benchmark")
    parser.add_argument("--piles", type=int, default=200, help="Number of independent piles")
    parser.add_argument("--hours", type=float, default=240.0, help="Game hours to simulate")
    parser.add_argument("--seed", type=int, default=0, help="Seed for pile contents and weather")
    parser.add_argument("--curves", action="store_true", help="Print the modifier tables and exit")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    if args.curves:
        print_curves()
    else:
        run_benchmark(num_piles=args.piles, hours=args.hours, seed=args.seed)
