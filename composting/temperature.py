# composting/temperature.py
"""
Internal temperature model for a compost pile.

Decomposition releases heat; the pile leaks it back to the ambient air and
loses more through evaporation when wet. Temperature feeds back into the
rest of the simulation in two ways:

- decomposition_modifier(): microbes are sluggish when cold, peak in the
  thermophilic range and die off when the pile overheats.
- evaporation_multiplier(): a hot pile dries faster. The processor reads it
  *before* updating temperature, so moisture always sees the previous hour's
  heat.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from composting.config import (
    BASE_HEAT_GENERATION,
    BELOW_AMBIENT_LIMIT,
    CRITICALLY_HOT_THRESHOLD,
    EVAPORATION_REFERENCE_DELTA,
    EVAPORATIVE_COOLING,
    HEAT_LOSS_COEFFICIENT,
    MAX_HEAT_GENERATION,
    MAX_PILE_TEMPERATURE,
    PILE_INSULATION_FACTOR,
    THERMOPHILIC_MAX,
    THERMOPHILIC_MIN,
    THERMOPHILIC_PEAK_MAX,
    TOO_COLD_THRESHOLD,
    TOO_HOT_THRESHOLD,
    TURNING_HEAT_LOSS_FRACTION,
)
from composting.curves import ModifierCurve
from composting.environment import ClimateSample
from config import DEFAULT_AMBIENT_TEMP, ENVIRONMENT_UPDATE_INTERVAL
from utils import clamp, get_float, get_optional_float

TEMPERATURE_CURVE = ModifierCurve.from_bands(
    [
        (5.0, False, 0.1, ""),                       # Near freezing
        (10.0, False, 0.3, ""),
        (TOO_COLD_THRESHOLD, False, 0.6, ""),
        (30.0, False, 0.9, ""),
        (THERMOPHILIC_MIN, False, 1.1, ""),
        (THERMOPHILIC_PEAK_MAX, True, 1.5, ""),      # Peak thermophilic activity
        (THERMOPHILIC_MAX, True, 1.3, ""),
        (CRITICALLY_HOT_THRESHOLD, True, 0.7, ""),   # Killing beneficial organisms
    ],
    top_value=0.3,
)

TEMPERATURE_STATES = ModifierCurve.from_bands(
    [
        (10.0, False, 0.0, "Cold"),
        (TOO_COLD_THRESHOLD, False, 0.0, "Cool"),
        (30.0, False, 0.0, "Warm"),
        (THERMOPHILIC_MIN, False, 0.0, "Getting Hot"),
        (THERMOPHILIC_MAX, True, 0.0, "Thermophilic"),
        (CRITICALLY_HOT_THRESHOLD, True, 0.0, "Too Hot"),
    ],
    top_value=0.0,
    top_label="Critically Hot",
)


def heat_generation(activity_level: float, aeration_level: float, cn_modifier: float, pile_size: float) -> float:
    """Heat released by decomposition in °C per hour.

    Aerobic piles run hotter (up to 1.5x), a good C:N mix burns more
    efficiently, and bigger piles can reach higher temperatures.
    """
    base_heat = BASE_HEAT_GENERATION * activity_level
    aeration_bonus = 1.0 + aeration_level * 0.5
    size_bonus = 0.5 + pile_size * 0.5
    return clamp(base_heat * aeration_bonus * cn_modifier * size_bonus, 0.0, MAX_HEAT_GENERATION)


@dataclass
class TemperatureModel:
    internal_temp: float = DEFAULT_AMBIENT_TEMP
    ambient_temp: float = DEFAULT_AMBIENT_TEMP
    last_update_time: Optional[float] = None

    def reset(self) -> None:
        # Keep the last ambient sample; a fresh pile starts at air temperature
        self.internal_temp = self.ambient_temp
        self.last_update_time = None

    def begin(self, now: float, climate: Optional[ClimateSample] = None) -> None:
        if climate is not None:
            self.ambient_temp = climate.temperature
        self.internal_temp = self.ambient_temp
        self.last_update_time = now

    def update(
        self,
        now: float,
        activity_level: float,
        moisture_level: float,
        aeration_level: float,
        cn_modifier: float,
        pile_size: float,
        climate: ClimateSample,
    ) -> bool:
        """Advance internal temperature once per game hour.

        Returns True if the update fired.
        """
        if self.last_update_time is None:
            self.begin(now, climate)
            return False

        elapsed = now - self.last_update_time
        if elapsed < ENVIRONMENT_UPDATE_INTERVAL:
            return False

        self.last_update_time = now
        self.ambient_temp = climate.temperature

        generated = heat_generation(activity_level, aeration_level, cn_modifier, pile_size)
        lost = self.heat_loss(moisture_level, pile_size)

        self.internal_temp = clamp(
            self.internal_temp + (generated - lost) * elapsed,
            self.ambient_temp - BELOW_AMBIENT_LIMIT,
            MAX_PILE_TEMPERATURE,
        )
        return True

    def heat_loss(self, moisture_level: float, pile_size: float) -> float:
        """Heat lost to the surroundings in °C per hour."""
        difference = self.internal_temp - self.ambient_temp
        # Small piles have less insulation
        ambient_loss = difference * HEAT_LOSS_COEFFICIENT * (1.0 - pile_size * PILE_INSULATION_FACTOR)

        evaporative_loss = 0.0
        if moisture_level > 0.5 and difference > 0:
            excess_moisture = moisture_level - 0.5
            evaporative_loss = excess_moisture * (difference / EVAPORATION_REFERENCE_DELTA) * EVAPORATIVE_COOLING

        return ambient_loss + evaporative_loss

    # === Manual control ===
    def apply_turning_cooling(self) -> None:
        """Turning releases part of the heat built up above ambient."""
        if self.internal_temp <= self.ambient_temp:
            return
        released = (self.internal_temp - self.ambient_temp) * TURNING_HEAT_LOSS_FRACTION
        self.internal_temp -= released

    def set_temperature(self, temperature: float) -> None:
        self.internal_temp = clamp(temperature, -10.0, MAX_PILE_TEMPERATURE)

    # === Queries ===
    def decomposition_modifier(self) -> float:
        return TEMPERATURE_CURVE.value(self.internal_temp)

    def evaporation_multiplier(self) -> float:
        if self.internal_temp <= self.ambient_temp:
            return 1.0
        return 1.0 + (self.internal_temp - self.ambient_temp) / EVAPORATION_REFERENCE_DELTA

    @property
    def temperature_above_ambient(self) -> float:
        return max(0.0, self.internal_temp - self.ambient_temp)

    @property
    def state(self) -> str:
        return TEMPERATURE_STATES.label(self.internal_temp)

    @property
    def is_thermophilic(self) -> bool:
        return THERMOPHILIC_MIN <= self.internal_temp <= THERMOPHILIC_MAX

    @property
    def is_too_cold(self) -> bool:
        return self.internal_temp < TOO_COLD_THRESHOLD

    @property
    def is_too_hot(self) -> bool:
        return self.internal_temp > TOO_HOT_THRESHOLD

    # === Persistence ===
    def to_state(self) -> Dict[str, Any]:
        return {
            "internal_temperature": self.internal_temp,
            "ambient_temperature": self.ambient_temp,
            "temperature_last_update": self.last_update_time,
        }

    def from_state(self, record: Dict[str, Any]) -> None:
        self.ambient_temp = get_float(record, "ambient_temperature", DEFAULT_AMBIENT_TEMP)
        # A missing pile temperature means the pile sits at ambient
        self.internal_temp = get_float(record, "internal_temperature", self.ambient_temp)
        self.last_update_time = get_optional_float(record, "temperature_last_update")
