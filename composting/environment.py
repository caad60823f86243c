# composting/environment.py
"""
Environment collaborator for the composting core.

The core never reaches into the world directly. Each pile is handed an
object implementing ClimateProvider and queries it synchronously during an
update; world.weather.WeatherSystem is the game's implementation.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

Point = Tuple[int, int]


@dataclass(frozen=True)
class ClimateSample:
    """Weather at a position right now."""
    temperature: float   # °C
    rainfall: float      # 0-1 rain intensity


class ClimateProvider(ABC):
    """Game clock and climate queries supplied by the caller."""

    @abstractmethod
    def now(self) -> float:
        """Monotonic game clock in hours."""

    @abstractmethod
    def ambient_climate(self, position: Point) -> ClimateSample:
        """Temperature and rainfall at a position."""

    @abstractmethod
    def is_rain_exposed(self, position: Point) -> bool:
        """True if rain can reach the position (nothing overhead)."""
