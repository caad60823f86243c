# composting/moisture.py
"""
Moisture model for a compost pile.

Tracks wetness on a 0-1 scale (0 = bone dry, 0.5 = optimal,
1 = waterlogged). Rain and evaporation are applied at most once per game
hour; watering and dry material are applied immediately.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from composting.config import (
    BASE_EVAPORATION_RATE,
    DEFAULT_MOISTURE,
    MAX_RAIN_GAIN_PER_HOUR,
    MOISTURE_BONE_DRY,
    MOISTURE_OPTIMAL_MAX,
    MOISTURE_OPTIMAL_MIN,
    MOISTURE_TOO_DRY,
    MOISTURE_TOO_WET,
    MOISTURE_WATERLOGGED,
    RAIN_EVAPORATION_REDUCTION,
    TEMPERATURE_EVAPORATION_FACTOR,
)
from composting.curves import ModifierCurve
from composting.environment import ClimateSample
from config import ENVIRONMENT_UPDATE_INTERVAL
from utils import clamp01, get_float, get_optional_float

MOISTURE_CURVE = ModifierCurve.from_bands(
    [
        (MOISTURE_BONE_DRY, False, 0.1, "Bone Dry"),        # Microbes can't function
        (MOISTURE_TOO_DRY, False, 0.5, "Too Dry"),
        (MOISTURE_OPTIMAL_MIN, False, 0.8, "Slightly Dry"),
        (MOISTURE_OPTIMAL_MAX, True, 1.0, "Optimal"),
        (MOISTURE_TOO_WET, True, 0.8, "Slightly Wet"),
        (MOISTURE_WATERLOGGED, True, 0.4, "Too Wet"),        # Turning anaerobic
    ],
    top_value=0.2,
    top_label="Waterlogged",
)


def evaporation_rate(temperature: float, rain_exposed: bool, temperature_multiplier: float = 1.0) -> float:
    """Moisture lost in one hourly update.

    Warm weather and a hot pile both speed evaporation; a pile open to the
    sky loses only a tenth as much, rain or not.
    """
    rate = BASE_EVAPORATION_RATE
    if temperature > 0:
        rate += temperature * TEMPERATURE_EVAPORATION_FACTOR
    rate *= temperature_multiplier
    if rain_exposed:
        rate *= RAIN_EVAPORATION_REDUCTION
    return rate


@dataclass
class MoistureModel:
    level: float = DEFAULT_MOISTURE
    last_check_time: Optional[float] = None  # None: clock starts on next update

    def reset(self) -> None:
        self.level = DEFAULT_MOISTURE
        self.last_check_time = None

    def begin(self, now: float) -> None:
        """Start the hourly clock (called when the pile starts)."""
        self.last_check_time = now

    # === Environmental updates ===
    def update_environmental(
        self,
        now: float,
        temperature_evaporation_multiplier: float,
        climate: ClimateSample,
        rain_exposed: bool,
    ) -> bool:
        """Apply rain and evaporation if an hour has passed since the last check.

        Returns True if the update fired.
        """
        if self.last_check_time is None:
            self.last_check_time = now
            return False
        if now - self.last_check_time < ENVIRONMENT_UPDATE_INTERVAL:
            return False

        self.last_check_time = now

        if rain_exposed and climate.rainfall > 0:
            self.level = clamp01(self.level + climate.rainfall * MAX_RAIN_GAIN_PER_HOUR)

        # Exposure alone sets the reduced rate, dry hours included
        loss = evaporation_rate(climate.temperature, rain_exposed, temperature_evaporation_multiplier)
        self.level = clamp01(self.level - loss)
        return True

    # === Manual control ===
    def add_water(self, amount: float) -> None:
        if amount <= 0:
            return
        self.level = clamp01(self.level + amount)

    def add_dry_material(self, amount: float) -> None:
        if amount <= 0:
            return
        self.level = clamp01(self.level - amount)

    def set_level(self, level: float) -> None:
        self.level = clamp01(level)

    # === Queries ===
    def decomposition_modifier(self) -> float:
        return MOISTURE_CURVE.value(self.level)

    @property
    def state(self) -> str:
        return MOISTURE_CURVE.label(self.level)

    @property
    def is_optimal(self) -> bool:
        return MOISTURE_OPTIMAL_MIN <= self.level <= MOISTURE_OPTIMAL_MAX

    @property
    def is_too_dry(self) -> bool:
        return self.level < MOISTURE_TOO_DRY

    @property
    def is_too_wet(self) -> bool:
        return self.level > MOISTURE_TOO_WET

    @property
    def is_bone_dry(self) -> bool:
        return self.level < MOISTURE_BONE_DRY

    @property
    def is_waterlogged(self) -> bool:
        return self.level > MOISTURE_WATERLOGGED

    # === Persistence ===
    def to_state(self) -> Dict[str, Any]:
        return {
            "moisture_level": self.level,
            "moisture_last_check": self.last_check_time,
        }

    def from_state(self, record: Dict[str, Any]) -> None:
        self.level = clamp01(get_float(record, "moisture_level", DEFAULT_MOISTURE))
        self.last_check_time = get_optional_float(record, "moisture_last_check")
