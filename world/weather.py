# weather.py
"""
Weather and time-of-day system for the compost yard.

Owns the game clock and supplies piles with climate: a day/night
temperature swing and showers that come and go on a random timer.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from composting.environment import ClimateProvider, ClimateSample, Point
from config import (
    AMBIENT_TEMP_MAX,
    AMBIENT_TEMP_MIN,
    HOURS_PER_DAY,
    PEAK_TEMP_HOUR,
    RAIN_DURATION_MAX,
    RAIN_DURATION_MIN,
    RAIN_INTERVAL_MAX,
    RAIN_INTERVAL_MIN,
    RAINFALL_MAX,
    RAINFALL_MIN,
)


@dataclass
class WeatherSystem(ClimateProvider):
    """
    Manages the clock, ambient temperature, and precipitation.

    Climate is uniform across the yard; only `sheltered` positions differ,
    and only in that rain can't reach them.
    """
    hour: float = 0.0
    day: int = 1
    raining: bool = False
    rainfall: float = 0.0
    rain_timer: float = float(RAIN_INTERVAL_MIN)
    sheltered: Set[Point] = field(default_factory=set)
    seed: Optional[int] = None
    _rng: random.Random = field(default_factory=random.Random, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    # === ClimateProvider ===
    def now(self) -> float:
        return self.hour

    def ambient_climate(self, position: Point) -> ClimateSample:
        return ClimateSample(temperature=self.temperature, rainfall=self.rainfall if self.raining else 0.0)

    def is_rain_exposed(self, position: Point) -> bool:
        return position not in self.sheltered

    # === Time of day ===
    @property
    def hour_of_day(self) -> float:
        return self.hour % HOURS_PER_DAY

    @property
    def is_night(self) -> bool:
        return self.hour_of_day < 6 or self.hour_of_day >= 20

    @property
    def temperature(self) -> float:
        """Ambient temperature; a cosine swing peaking at PEAK_TEMP_HOUR."""
        mid = (AMBIENT_TEMP_MAX + AMBIENT_TEMP_MIN) / 2
        amplitude = (AMBIENT_TEMP_MAX - AMBIENT_TEMP_MIN) / 2
        phase = 2 * math.pi * (self.hour_of_day - PEAK_TEMP_HOUR) / HOURS_PER_DAY
        return mid + amplitude * math.cos(phase)

    def shelter(self, position: Point) -> None:
        self.sheltered.add(position)

    def tick(self, hours: float) -> List[str]:
        """
        Advance the clock by `hours`.

        Returns a list of event messages to display to the player.
        """
        messages: List[str] = []
        remaining = hours
        while remaining > 0:
            # Step to the next rain change so showers keep their length
            step = min(remaining, max(0.0, self.rain_timer))
            self.hour += step
            self.rain_timer -= step
            remaining -= step

            if self.rain_timer <= 0:
                messages.extend(self._toggle_rain())

            new_day = int(self.hour // HOURS_PER_DAY) + 1
            while self.day < new_day:
                self.day += 1
                messages.append(f"Day {self.day} begins.")

        return messages

    def _toggle_rain(self) -> List[str]:
        if self.raining:
            self.raining = False
            self.rainfall = 0.0
            self.rain_timer = float(self._rng.randint(RAIN_INTERVAL_MIN, RAIN_INTERVAL_MAX))
            return ["Rain fades."]

        self.raining = True
        self.rainfall = self._rng.uniform(RAINFALL_MIN, RAINFALL_MAX)
        self.rain_timer = float(self._rng.randint(RAIN_DURATION_MIN, RAIN_DURATION_MAX))
        return ["Rain arrives."]

    # === Persistence ===
    def to_state(self) -> Dict[str, Any]:
        return {
            "hour": self.hour,
            "day": self.day,
            "raining": self.raining,
            "rainfall": self.rainfall,
            "rain_timer": self.rain_timer,
            "sheltered": [list(p) for p in sorted(self.sheltered)],
            "rng_state": self._rng_record(),
        }

    def _rng_record(self) -> List[Any]:
        version, internal, gauss_next = self._rng.getstate()
        return [version, list(internal), gauss_next]

    @classmethod
    def from_state(cls, record: Dict[str, Any], seed: Optional[int] = None) -> "WeatherSystem":
        """Rebuild from a state record.

        A saved generator state resumes the rain sequence where it left off;
        `seed` only applies to records without one.
        """
        weather = cls(
            hour=float(record.get("hour", 0.0)),
            day=int(record.get("day", 1)),
            raining=bool(record.get("raining", False)),
            rainfall=float(record.get("rainfall", 0.0)),
            rain_timer=float(record.get("rain_timer", RAIN_INTERVAL_MIN)),
            sheltered={(int(p[0]), int(p[1])) for p in record.get("sheltered", [])},
            seed=seed,
        )
        rng_state = record.get("rng_state")
        if rng_state:
            version, internal, gauss_next = rng_state
            weather._rng.setstate((int(version), tuple(int(n) for n in internal), gauss_next))
        return weather
