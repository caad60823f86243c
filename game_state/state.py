# game_state/state.py
"""Core game state data structures."""
from __future__ import annotations

import collections
from dataclasses import dataclass, field
from typing import Deque, Dict, Optional, Tuple

from composting import CompostConfig, CompostProcessor, PileInventory
from config import MAX_MESSAGES, STARTING_ITEMS, STARTING_WATER_BUCKETS
from world.weather import WeatherSystem

Point = Tuple[int, int]


@dataclass
class Inventory:
    """What the player carries, in whole units."""
    compost: int = 0
    water_buckets: int = STARTING_WATER_BUCKETS
    items: Dict[str, int] = field(default_factory=lambda: dict(STARTING_ITEMS))

    def count(self, item_code: str) -> int:
        return self.items.get(item_code, 0)

    def take(self, item_code: str, amount: int) -> None:
        remaining = self.count(item_code) - amount
        if remaining > 0:
            self.items[item_code] = remaining
        else:
            self.items.pop(item_code, None)


@dataclass
class GameState:
    """Main game state container.

    Piles are keyed by yard position; every pile shares the weather as its
    climate provider and the same per-pile config.
    """
    weather: WeatherSystem = field(default_factory=WeatherSystem)
    config: CompostConfig = field(default_factory=CompostConfig)
    piles: Dict[Point, CompostProcessor] = field(default_factory=dict)
    inventory: Inventory = field(default_factory=Inventory)
    messages: Deque[str] = field(default_factory=lambda: collections.deque(maxlen=MAX_MESSAGES))

    # Pile that pile actions apply to
    target_cell: Point = (0, 0)

    def add_pile(self, position: Point) -> CompostProcessor:
        """Place an empty compost bin at a position (or return the existing one)."""
        pile = self.piles.get(position)
        if pile is None:
            pile = CompostProcessor(
                self.weather,
                self.config,
                PileInventory(max_capacity=self.config.max_capacity),
                position,
            )
            self.piles[position] = pile
        return pile

    def set_target(self, cell: Point) -> None:
        self.target_cell = cell

    def get_target_pile(self) -> Optional[CompostProcessor]:
        return self.piles.get(self.target_cell)

    # === Weather convenience properties ===
    @property
    def day(self) -> int:
        return self.weather.day

    @property
    def hour(self) -> float:
        return self.weather.hour

    @property
    def raining(self) -> bool:
        return self.weather.raining
