"""Shared fixtures for the compost simulation tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Set

import pytest

from composting import ClimateProvider, ClimateSample, CompostConfig, CompostProcessor, MaterialType, PileInventory
from composting.environment import Point


@dataclass
class FakeEnvironment(ClimateProvider):
    """Scripted climate: tests set the clock and weather directly."""
    clock: float = 0.0
    temperature: float = 20.0
    rainfall: float = 0.0
    sheltered: Set[Point] = field(default_factory=set)

    def now(self) -> float:
        return self.clock

    def ambient_climate(self, position: Point) -> ClimateSample:
        return ClimateSample(temperature=self.temperature, rainfall=self.rainfall)

    def is_rain_exposed(self, position: Point) -> bool:
        return position not in self.sheltered

    def advance(self, hours: float) -> float:
        self.clock += hours
        return self.clock


@pytest.fixture
def env():
    return FakeEnvironment()


@pytest.fixture
def config():
    return CompostConfig()


@pytest.fixture
def engine(env, config):
    """An empty pile at the origin."""
    return CompostProcessor(env, config, PileInventory(max_capacity=config.max_capacity))


@pytest.fixture
def active_engine(engine):
    """A started pile: 7 greens, 3 browns (near-optimal C:N), 10/64 full."""
    engine.add_material(7, MaterialType.GREEN)
    engine.add_material(3, MaterialType.BROWN)
    engine.start()
    return engine


@pytest.fixture
def full_engine(engine, config):
    """A started pile filled to capacity with an optimal-ish mix."""
    greens = int(config.max_capacity * 0.7)
    engine.add_material(greens, MaterialType.GREEN)
    engine.add_material(config.max_capacity - greens, MaterialType.BROWN)
    engine.start()
    return engine
