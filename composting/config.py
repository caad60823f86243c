# composting/config.py
"""
Configuration for the composting domain.

Module constants hold the fixed physics of the pile (band breakpoints,
evaporation, compaction and heat coefficients). CompostConfig bundles the
per-pile tunables and is passed explicitly into every CompostProcessor, so
two piles (or two tests) can run with different settings side by side.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import config as game_config

# =============================================================================
# MOISTURE
# =============================================================================
DEFAULT_MOISTURE = 0.5             # Optimal midpoint, used on creation and reset
MOISTURE_BONE_DRY = 0.2
MOISTURE_TOO_DRY = 0.3
MOISTURE_OPTIMAL_MIN = 0.4
MOISTURE_OPTIMAL_MAX = 0.6
MOISTURE_TOO_WET = 0.7
MOISTURE_WATERLOGGED = 0.85

BASE_EVAPORATION_RATE = 0.02       # Moisture lost per hourly update
TEMPERATURE_EVAPORATION_FACTOR = 0.001  # Extra loss per °C of ambient warmth
MAX_RAIN_GAIN_PER_HOUR = 0.1       # Moisture gained per update at rainfall 1.0
RAIN_EVAPORATION_REDUCTION = 0.1   # Evaporation multiplier while raining

# Turning dries the pile a little (moisture removed)
TURN_DRYING_TOO_WET = 0.1
TURN_DRYING_DAMP = 0.05

# =============================================================================
# AERATION
# =============================================================================
DEFAULT_AERATION = 0.7             # Freshly loaded material is well aerated
AERATION_COMPLETELY_ANAEROBIC = 0.2
AERATION_ANAEROBIC = 0.3
AERATION_OPTIMAL_MIN = 0.5
AERATION_OPTIMAL_MAX = 0.9
AERATION_OVER_AERATED = 0.95

BASE_COMPACTION_RATE = 0.01        # Aeration lost per hour from settling
TURN_AERATION_BOOST = 0.4
MOISTURE_AERATION_THRESHOLD = 0.6  # Water starts filling pore space above this
MOISTURE_AERATION_FACTOR = 0.5

# Settling slows as the pile compacts: (hours since turn, multiplier)
COMPACTION_FRESH_HOURS = 24
COMPACTION_FRESH_MULTIPLIER = 1.5
COMPACTION_SETTLING_HOURS = 72
COMPACTION_SETTLING_MULTIPLIER = 1.0
COMPACTION_SETTLED_MULTIPLIER = 0.5

# =============================================================================
# TEMPERATURE
# =============================================================================
THERMOPHILIC_MIN = 40.0
THERMOPHILIC_PEAK_MAX = 55.0
THERMOPHILIC_MAX = 65.0
TOO_COLD_THRESHOLD = 20.0
TOO_HOT_THRESHOLD = 65.0
CRITICALLY_HOT_THRESHOLD = 70.0
MAX_PILE_TEMPERATURE = 80.0
BELOW_AMBIENT_LIMIT = 5.0          # Pile can drop at most this far below ambient

BASE_HEAT_GENERATION = 2.0         # °C per hour from active decomposition
MAX_HEAT_GENERATION = 10.0
HEAT_LOSS_COEFFICIENT = 0.5        # Fraction of the ambient gap lost per hour
PILE_INSULATION_FACTOR = 0.3       # Full piles lose 30% less heat
EVAPORATIVE_COOLING = 1.5
EVAPORATION_REFERENCE_DELTA = 50.0  # °C above ambient that doubles evaporation
TURNING_HEAT_LOSS_FRACTION = 0.4

# =============================================================================
# DECOMPOSITION
# =============================================================================
CRITICAL_MASS_FILL = 0.3           # Below this fill ratio activity ramps down
REMAINING_HOURS_SENTINEL = 9999    # Reported when the pile has stalled
COMPLETION_EPSILON = 1e-9          # Float tolerance for reaching progress 1.0


class MaterialType(Enum):
    """Compostable material categories used for the C:N ratio."""
    GREEN = "green"   # Nitrogen-rich
    BROWN = "brown"   # Carbon-rich


@dataclass
class CompostConfig:
    """Per-pile tunables.

    Defaults mirror the game-wide constants in config.py. Instances are plain
    values: copy one with dataclasses.replace() to vary a single setting.
    """
    max_capacity: int = game_config.MAX_CAPACITY
    hours_to_complete: float = game_config.HOURS_TO_COMPLETE
    turn_speedup_hours: float = game_config.TURN_SPEEDUP_HOURS
    turn_cooldown_hours: float = game_config.TURN_COOLDOWN_HOURS
    output_per_item: float = game_config.OUTPUT_PER_ITEM

    green_cn_ratio: float = game_config.GREEN_CN_RATIO
    brown_cn_ratio: float = game_config.BROWN_CN_RATIO
    optimal_cn_ratio: float = game_config.OPTIMAL_CN_RATIO
    optimal_ratio_bonus: float = game_config.OPTIMAL_RATIO_BONUS
    poor_ratio_penalty: float = game_config.POOR_RATIO_PENALTY

    green_item_codes: Tuple[str, ...] = game_config.GREEN_ITEM_CODES
    green_item_prefixes: Tuple[str, ...] = game_config.GREEN_ITEM_PREFIXES
    brown_item_codes: Tuple[str, ...] = game_config.BROWN_ITEM_CODES
    brown_item_prefixes: Tuple[str, ...] = game_config.BROWN_ITEM_PREFIXES

    def __post_init__(self) -> None:
        if self.hours_to_complete <= 0:
            raise ValueError(f"hours_to_complete must be positive, got {self.hours_to_complete}")
        if self.max_capacity <= 0:
            raise ValueError(f"max_capacity must be positive, got {self.max_capacity}")

    @property
    def base_rate(self) -> float:
        """Progress per hour at neutral conditions."""
        return 1.0 / self.hours_to_complete

    def material_type(self, item_code: str) -> Optional[MaterialType]:
        """Classify an item code, or return None if it is not compostable.

        Exact codes win over prefixes so that a code listed as brown is never
        caught by a broader green prefix.
        """
        if item_code in self.green_item_codes:
            return MaterialType.GREEN
        if item_code in self.brown_item_codes:
            return MaterialType.BROWN
        if item_code.startswith(self.green_item_prefixes):
            return MaterialType.GREEN
        if item_code.startswith(self.brown_item_prefixes):
            return MaterialType.BROWN
        return None

    def is_compostable(self, item_code: str) -> bool:
        return self.material_type(item_code) is not None

    # === Persistence ===
    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, tuple):
                data[key] = list(value)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompostConfig":
        """Build a config from a (possibly partial) dict.

        Unknown keys are ignored and missing keys keep their defaults.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                continue
            kwargs[key] = tuple(value) if isinstance(value, list) else value
        return cls(**kwargs)

    @classmethod
    def load(cls, path: str | Path) -> "CompostConfig":
        """Load overrides from a JSON file, or defaults if it doesn't exist."""
        path = Path(path)
        if not path.exists():
            return cls()
        with path.open("r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def save(self, path: str | Path) -> None:
        with Path(path).open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=4)
