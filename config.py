# config.py
"""
Centralized game configuration for the compost bin simulation.

This file contains high-level, cross-cutting constants.
Domain-specific constants are in:
- composting/config.py (moisture, aeration, temperature physics)

Per-pile tunables are bundled into composting.config.CompostConfig, whose
defaults are read from here.
"""
from __future__ import annotations

from typing import Dict, Tuple

# =============================================================================
# TIME & SIMULATION
# =============================================================================
# All simulation timestamps are in-game hours (float).
HOURS_PER_DAY = 24
TICK_HOURS = 0.5          # Game hours advanced per front-end tick
ENVIRONMENT_UPDATE_INTERVAL = 1.0  # Hourly gate for moisture/aeration/temperature
MAX_WAIT_HOURS = 24 * 30  # Longest single wait command

# =============================================================================
# WEATHER & ENVIRONMENT
# =============================================================================
AMBIENT_TEMP_MIN = 8.0     # Night low (°C)
AMBIENT_TEMP_MAX = 24.0    # Afternoon high (°C)
PEAK_TEMP_HOUR = 14        # Hour of day with the highest ambient temperature
DEFAULT_AMBIENT_TEMP = 20.0  # Fallback before the first climate sample

# Rain timing (in game hours)
RAIN_INTERVAL_MIN = 18     # Min dry spell between showers
RAIN_INTERVAL_MAX = 60     # Max dry spell between showers
RAIN_DURATION_MIN = 2      # Min shower length
RAIN_DURATION_MAX = 8      # Max shower length
RAINFALL_MIN = 0.2         # Weakest shower intensity (0-1)
RAINFALL_MAX = 1.0         # Strongest shower intensity (0-1)

# =============================================================================
# COMPOST BIN
# =============================================================================
MAX_CAPACITY = 64              # Items per bin
BULK_ADD_AMOUNT = 4            # Items moved per bulk add
HOURS_TO_COMPLETE = 240        # Hours to finish at neutral conditions (10 days)
TURN_SPEEDUP_HOURS = 5         # Progress granted by one shovel turn, in hours
TURN_COOLDOWN_HOURS = 5        # Hours the pile must settle between turns
OUTPUT_PER_ITEM = 0.5          # Compost produced per input item

# Manual moisture control amounts (0-1 moisture scale)
WATER_BUCKET_AMOUNT = 0.2
DRY_MATERIAL_AMOUNT = 0.15

# =============================================================================
# MATERIALS & C:N RATIO
# =============================================================================
GREEN_CN_RATIO = 15.0          # Nitrogen-rich materials (food scraps, rot)
BROWN_CN_RATIO = 60.0          # Carbon-rich materials (straw, grain husks)
OPTIMAL_CN_RATIO = 27.5        # Middle of the 25-30:1 sweet spot
OPTIMAL_RATIO_BONUS = 1.5      # Rate multiplier within 5 of optimal
POOR_RATIO_PENALTY = 0.5       # Rate multiplier beyond 25 of optimal

# Item codes are classified by exact match first, then by prefix.
GREEN_ITEM_CODES: Tuple[str, ...] = ("rot",)
GREEN_ITEM_PREFIXES: Tuple[str, ...] = ("vegetable-", "fruit-")
BROWN_ITEM_CODES: Tuple[str, ...] = ("drygrass", "stick", "straw")
BROWN_ITEM_PREFIXES: Tuple[str, ...] = ("grain-",)

# =============================================================================
# PLAYER & INPUT
# =============================================================================
STARTING_WATER_BUCKETS = 5
STARTING_ITEMS: Dict[str, int] = {
    "rot": 16,
    "vegetable-carrot": 12,
    "straw": 24,
    "drygrass": 12,
    "grain-spelt": 8,
}
MAX_MESSAGES = 100
