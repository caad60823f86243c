# composting/aeration.py
"""
Aeration model for a compost pile.

Tracks oxygen availability on a 0-1 scale. The pile slowly settles and
loses air (fast right after a turn, slower once compacted), and excess water
fills pore space. Turning the pile restores aeration.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from composting.config import (
    AERATION_ANAEROBIC,
    AERATION_COMPLETELY_ANAEROBIC,
    AERATION_OPTIMAL_MAX,
    AERATION_OPTIMAL_MIN,
    AERATION_OVER_AERATED,
    BASE_COMPACTION_RATE,
    COMPACTION_FRESH_HOURS,
    COMPACTION_FRESH_MULTIPLIER,
    COMPACTION_SETTLED_MULTIPLIER,
    COMPACTION_SETTLING_HOURS,
    COMPACTION_SETTLING_MULTIPLIER,
    DEFAULT_AERATION,
    MOISTURE_AERATION_FACTOR,
    MOISTURE_AERATION_THRESHOLD,
    TURN_AERATION_BOOST,
)
from composting.curves import ModifierCurve
from config import ENVIRONMENT_UPDATE_INTERVAL
from utils import clamp01, get_float, get_optional_float, hours_since

AERATION_CURVE = ModifierCurve.from_bands(
    [
        (AERATION_COMPLETELY_ANAEROBIC, False, 0.1, "Completely Anaerobic"),  # May putrefy
        (AERATION_ANAEROBIC, False, 0.3, "Anaerobic"),
        (AERATION_OPTIMAL_MIN, False, 0.7, "Low Oxygen"),
        (AERATION_OPTIMAL_MAX, True, 1.0, "Well Aerated"),
        (AERATION_OVER_AERATED, True, 0.9, "Highly Aerated"),  # Dries out, loses heat
    ],
    top_value=0.9,
    top_label="Over Aerated",
)


def compaction_multiplier(hours_since_turn: float) -> float:
    """Settling speed by time since the pile was last turned."""
    if hours_since_turn < COMPACTION_FRESH_HOURS:
        return COMPACTION_FRESH_MULTIPLIER
    if hours_since_turn < COMPACTION_SETTLING_HOURS:
        return COMPACTION_SETTLING_MULTIPLIER
    return COMPACTION_SETTLED_MULTIPLIER


def moisture_loss(moisture_level: float) -> float:
    """Aeration lost per update as water fills air pockets."""
    if moisture_level <= MOISTURE_AERATION_THRESHOLD:
        return 0.0
    excess = moisture_level - MOISTURE_AERATION_THRESHOLD
    return excess * MOISTURE_AERATION_FACTOR * 0.01


@dataclass
class AerationModel:
    level: float = DEFAULT_AERATION
    last_update_time: Optional[float] = None
    last_turn_time: Optional[float] = None

    def reset(self) -> None:
        self.level = DEFAULT_AERATION
        self.last_update_time = None
        self.last_turn_time = None

    def begin(self, now: float) -> None:
        self.last_update_time = now
        self.last_turn_time = now

    def update(self, now: float, moisture_level: float) -> bool:
        """Apply compaction and moisture losses once per game hour.

        Returns True if the update fired.
        """
        if self.last_update_time is None:
            self.last_update_time = now
            if self.last_turn_time is None:
                self.last_turn_time = now
            return False

        elapsed = now - self.last_update_time
        if elapsed < ENVIRONMENT_UPDATE_INTERVAL:
            return False

        self.last_update_time = now

        compaction = BASE_COMPACTION_RATE * elapsed * compaction_multiplier(self.hours_since_turn(now))
        self.level = clamp01(self.level - compaction - moisture_loss(moisture_level))
        return True

    def hours_since_turn(self, now: float) -> float:
        return hours_since(now, self.last_turn_time)

    # === Manual control ===
    def aerate(self, amount: float, now: Optional[float] = None) -> None:
        """Increase aeration. Passing `now` records it as a turn."""
        if amount > 0:
            self.level = clamp01(self.level + amount)
        if now is not None:
            self.last_turn_time = now

    def turn(self, now: Optional[float] = None) -> None:
        self.aerate(TURN_AERATION_BOOST, now)

    def set_level(self, level: float) -> None:
        self.level = clamp01(level)

    # === Queries ===
    def decomposition_modifier(self) -> float:
        return AERATION_CURVE.value(self.level)

    @property
    def state(self) -> str:
        return AERATION_CURVE.label(self.level)

    @property
    def is_optimal(self) -> bool:
        return AERATION_OPTIMAL_MIN <= self.level <= AERATION_OPTIMAL_MAX

    @property
    def is_anaerobic(self) -> bool:
        return self.level < AERATION_ANAEROBIC

    @property
    def is_over_aerated(self) -> bool:
        return self.level > AERATION_OVER_AERATED

    # === Persistence ===
    def to_state(self) -> Dict[str, Any]:
        return {
            "aeration_level": self.level,
            "aeration_last_update": self.last_update_time,
            "aeration_last_turn": self.last_turn_time,
        }

    def from_state(self, record: Dict[str, Any]) -> None:
        self.level = clamp01(get_float(record, "aeration_level", DEFAULT_AERATION))
        self.last_update_time = get_optional_float(record, "aeration_last_update")
        self.last_turn_time = get_optional_float(record, "aeration_last_turn")
