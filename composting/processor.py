# composting/processor.py
"""
Compost processor: the decomposition engine for one pile.

Each update pulls the moisture, aeration and temperature models forward
(each gated to once per game hour), multiplies their decomposition modifiers
with the C:N ratio modifier, and integrates the resulting rate into
decomposition progress. Progress runs from 0.0 to 1.0; at 1.0 the pile is
finished and further updates are inert until it is harvested or reset.

Update order matters and is fixed:
    1. read the temperature model's evaporation multiplier (last hour's heat)
    2. moisture  (rain, evaporation scaled by that multiplier)
    3. aeration  (compaction, waterlogging from the new moisture level)
    4. temperature (heat from activity, aeration, C:N and pile size)
    5. progress  (base rate x all four modifiers x elapsed hours)

The processor is not thread-safe. One caller owns a pile and serializes
update/turn/water/harvest calls on it; separate piles share nothing.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from composting.aeration import AerationModel
from composting.config import (
    COMPLETION_EPSILON,
    CRITICAL_MASS_FILL,
    REMAINING_HOURS_SENTINEL,
    TURN_DRYING_DAMP,
    TURN_DRYING_TOO_WET,
    CompostConfig,
    MaterialType,
)
from composting.environment import ClimateProvider, Point
from composting.materials import PileInventory
from composting.moisture import MoistureModel
from composting.ratio import MaterialRatioModel
from composting.temperature import TemperatureModel
from config import DRY_MATERIAL_AMOUNT, WATER_BUCKET_AMOUNT
from utils import clamp, get_float, get_optional_float, hours_since

logger = logging.getLogger(__name__)

STATE_VERSION = 2
LEGACY_RESET_MESSAGE = "The compost pile was reset: its saved contents could not be recovered."


class PileState(Enum):
    INACTIVE = "inactive"   # Empty, or holding material that hasn't started
    ACTIVE = "active"
    FINISHED = "finished"


def is_legacy_state(record: Dict[str, Any]) -> bool:
    """True for saves written before the environmental models existed.

    Those saves tracked a start time and a composting flag only; the
    material that was in the bin can't be reconstructed from them.
    """
    if "is_composting" in record:
        return True
    version = record.get("state_version")
    if version is not None and version < STATE_VERSION:
        return True
    return "start_time" in record and "decomposition_progress" not in record


class CompostProcessor:
    """Decomposition engine for a single compost pile."""

    def __init__(
        self,
        environment: ClimateProvider,
        config: Optional[CompostConfig] = None,
        inventory: Optional[PileInventory] = None,
        position: Point = (0, 0),
    ):
        self.environment = environment
        self.config = config or CompostConfig()
        self.inventory = inventory or PileInventory(max_capacity=self.config.max_capacity)
        self.position = position

        self.moisture = MoistureModel()
        self.aeration = AerationModel()
        self.temperature = TemperatureModel()
        self.ratio_model = MaterialRatioModel(self.config)

        self.start_time: Optional[float] = None
        self.last_update_time: float = 0.0
        self.last_turn_time: float = 0.0
        self.decomposition_progress: float = 0.0
        self.finished: bool = False

    def _now(self, now: Optional[float] = None) -> float:
        return self.environment.now() if now is None else now

    # === Lifecycle ===
    @property
    def state(self) -> PileState:
        if self.finished:
            return PileState.FINISHED
        if self.start_time is None:
            return PileState.INACTIVE
        return PileState.ACTIVE

    def is_active(self) -> bool:
        return self.state is PileState.ACTIVE

    def reset(self) -> None:
        """Return every state block to its defaults (pile becomes inactive)."""
        self.start_time = None
        self.last_update_time = 0.0
        self.last_turn_time = 0.0
        self.decomposition_progress = 0.0
        self.finished = False
        self.moisture.reset()
        self.aeration.reset()
        self.temperature.reset()

    def add_material(self, count: int, material_type: MaterialType = MaterialType.GREEN) -> int:
        """Put material in the bin. Returns how many items fit."""
        return self.inventory.add(material_type, count)

    def start(self, now: Optional[float] = None) -> bool:
        """Start composting once the bin holds something.

        Only the first call on a non-empty, inactive pile has any effect.
        Returns True if the pile started.
        """
        if self.start_time is not None or self.finished or self.inventory.is_empty:
            return False

        now = self._now(now)
        self.start_time = now
        self.last_update_time = now
        self.last_turn_time = now

        self.moisture.begin(now)
        self.aeration.begin(now)
        self.temperature.begin(now, self.environment.ambient_climate(self.position))
        logger.debug("Pile at %s started at hour %.2f", self.position, now)
        return True

    def harvest(self) -> int:
        """Empty the bin and reset the pile.

        Returns the amount of compost produced, which is zero unless the
        pile had finished.
        """
        output = 0
        if self.finished:
            output = int(self.inventory.total_count() * self.config.output_per_item)
        self.inventory.clear()
        self.reset()
        return output

    # === Simulation ===
    def update(self, now: Optional[float] = None) -> float:
        """Advance decomposition to `now` (defaults to the environment clock).

        Returns the progress gained, 0.0 when nothing was due.
        """
        if self.start_time is None or self.finished or self.inventory.is_empty:
            return 0.0

        now = self._now(now)
        elapsed = now - self.last_update_time
        if elapsed <= 0:
            return 0.0

        climate = self.environment.ambient_climate(self.position)
        rain_exposed = self.environment.is_rain_exposed(self.position)

        # Last hour's heat drives this hour's evaporation
        evaporation_multiplier = self.temperature.evaporation_multiplier()
        self.moisture.update_environmental(now, evaporation_multiplier, climate, rain_exposed)
        self.aeration.update(now, self.moisture.level)

        pile_size = self.pile_size()
        self.temperature.update(
            now,
            self.activity_level(pile_size),
            self.moisture.level,
            self.aeration.level,
            self.cn_modifier(),
            pile_size,
            climate,
        )

        gained = self.decomposition_rate() * elapsed
        self.decomposition_progress += gained
        self.last_update_time = now
        self._check_finished()
        return gained

    def pile_size(self) -> float:
        return clamp(self.inventory.fill_ratio, 0.0, 1.0)

    @staticmethod
    def activity_level(pile_size: float) -> float:
        """Microbial activity; small piles lack the critical mass to heat up."""
        if pile_size < CRITICAL_MASS_FILL:
            return pile_size / CRITICAL_MASS_FILL
        return 1.0

    def decomposition_rate(self) -> float:
        """Progress per hour under current conditions."""
        return (
            self.config.base_rate
            * self.cn_modifier()
            * self.moisture.decomposition_modifier()
            * self.aeration.decomposition_modifier()
            * self.temperature.decomposition_modifier()
        )

    def _check_finished(self) -> None:
        if self.decomposition_progress >= 1.0 - COMPLETION_EPSILON:
            self.decomposition_progress = 1.0
            if not self.finished:
                logger.debug("Pile at %s finished composting", self.position)
            self.finished = True

    # === Turning ===
    def turn(self, speedup_hours: Optional[float] = None, now: Optional[float] = None) -> bool:
        """Turn the pile with a shovel.

        Jumps progress forward by `speedup_hours` worth of base-rate
        decomposition, then aerates, dries and cools the pile. The cooldown
        is NOT enforced here: callers check can_turn() first.
        Returns False if there was nothing to turn.
        """
        if self.start_time is None or self.finished or self.inventory.is_empty:
            return False

        now = self._now(now)
        if speedup_hours is None:
            speedup_hours = self.config.turn_speedup_hours

        self.decomposition_progress += max(0.0, speedup_hours) / self.config.hours_to_complete
        self._check_finished()
        self.last_turn_time = now

        self.aeration.turn(now)
        if self.moisture.is_too_wet:
            self.moisture.add_dry_material(TURN_DRYING_TOO_WET)
        elif self.moisture.level > 0.5:
            self.moisture.add_dry_material(TURN_DRYING_DAMP)
        self.temperature.apply_turning_cooling()

        logger.debug("Pile at %s turned at hour %.2f (+%.1fh)", self.position, now, speedup_hours)
        return True

    def can_turn(self, now: Optional[float] = None) -> bool:
        if self.state is not PileState.ACTIVE or self.inventory.is_empty:
            return False
        return hours_since(self._now(now), self.last_turn_time) >= self.config.turn_cooldown_hours

    def turn_cooldown_remaining(self, now: Optional[float] = None) -> float:
        if self.start_time is None:
            return 0.0
        since = hours_since(self._now(now), self.last_turn_time)
        return max(0.0, self.config.turn_cooldown_hours - since)

    # === Moisture control ===
    def add_water(self, amount: float = WATER_BUCKET_AMOUNT) -> bool:
        if self.state is not PileState.ACTIVE:
            return False
        self.moisture.add_water(amount)
        return True

    def add_dry_material(self, amount: float = DRY_MATERIAL_AMOUNT) -> bool:
        if self.state is not PileState.ACTIVE:
            return False
        self.moisture.add_dry_material(amount)
        return True

    # === Telemetry ===
    def progress_percent(self) -> int:
        return int(clamp(self.decomposition_progress * 100.0, 0.0, 100.0))

    def is_finished(self) -> bool:
        return self.finished

    def elapsed_hours(self, now: Optional[float] = None) -> int:
        if self.start_time is None:
            return 0
        return int(hours_since(self._now(now), self.start_time))

    def remaining_hours(self) -> int:
        """Estimated hours to completion at the current rate."""
        if self.inventory.is_empty or self.finished:
            return 0
        rate = self.decomposition_rate()
        if rate <= 0:
            return REMAINING_HOURS_SENTINEL
        hours = (1.0 - self.decomposition_progress) / rate
        return int(min(max(0.0, hours), REMAINING_HOURS_SENTINEL))

    def cn_ratio(self) -> float:
        return self.ratio_model.ratio(self.inventory.green_count(), self.inventory.brown_count())

    def cn_modifier(self) -> float:
        return self.ratio_model.modifier(self.cn_ratio())

    def cn_ratio_quality_text(self) -> str:
        return self.ratio_model.quality_text(self.cn_ratio())

    def speed_multiplier(self) -> float:
        """Displayed speed bonus from the material mix."""
        return self.cn_modifier()

    @property
    def moisture_level(self) -> float:
        return self.moisture.level

    @property
    def moisture_state(self) -> str:
        return self.moisture.state

    @property
    def aeration_level(self) -> float:
        return self.aeration.level

    @property
    def aeration_state(self) -> str:
        return self.aeration.state

    @property
    def internal_temperature(self) -> float:
        return self.temperature.internal_temp

    @property
    def ambient_temperature(self) -> float:
        return self.temperature.ambient_temp

    @property
    def temperature_state(self) -> str:
        return self.temperature.state

    # === Persistence ===
    def to_state(self) -> Dict[str, Any]:
        """Flat record of every scalar the pile needs to resume."""
        record: Dict[str, Any] = {
            "state_version": STATE_VERSION,
            "start_time": self.start_time,
            "last_update_time": self.last_update_time,
            "last_turn_time": self.last_turn_time,
            "decomposition_progress": self.decomposition_progress,
            "is_finished": self.finished,
        }
        record.update(self.moisture.to_state())
        record.update(self.aeration.to_state())
        record.update(self.temperature.to_state())
        return record

    def from_state(self, record: Dict[str, Any]) -> List[str]:
        """Restore from a record written by to_state().

        Missing fields take their defaults. A legacy record resets the whole
        pile, contents included, and returns a message for the player.
        """
        if is_legacy_state(record):
            logger.warning("Legacy compost state at %s; resetting pile", self.position)
            self.inventory.clear()
            self.reset()
            return [LEGACY_RESET_MESSAGE]

        self.start_time = get_optional_float(record, "start_time")
        # An active pile missing its clocks resumes from its start time
        fallback_time = self.start_time if self.start_time is not None else 0.0
        self.last_update_time = get_float(record, "last_update_time", fallback_time)
        self.last_turn_time = get_float(record, "last_turn_time", fallback_time)
        self.decomposition_progress = clamp(get_float(record, "decomposition_progress", 0.0), 0.0, 1.0)
        self.finished = bool(record.get("is_finished", False))
        if self.decomposition_progress >= 1.0:
            self.finished = True

        self.moisture.from_state(record)
        self.aeration.from_state(record)
        self.temperature.from_state(record)
        return []
