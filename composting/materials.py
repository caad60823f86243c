# composting/materials.py
"""Aggregate material counts held by a compost bin."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from composting.config import MaterialType
from config import MAX_CAPACITY


@dataclass
class PileInventory:
    """Green and brown item counts with a shared capacity.

    Individual items are not tracked: the simulation only ever needs the
    aggregate mix.
    """
    max_capacity: int = MAX_CAPACITY
    green: int = 0
    brown: int = 0

    def green_count(self) -> int:
        return self.green

    def brown_count(self) -> int:
        return self.brown

    def total_count(self) -> int:
        return self.green + self.brown

    @property
    def remaining_capacity(self) -> int:
        return max(0, self.max_capacity - self.total_count())

    @property
    def is_full(self) -> bool:
        return self.total_count() >= self.max_capacity

    @property
    def is_empty(self) -> bool:
        return self.total_count() == 0

    @property
    def fill_ratio(self) -> float:
        if self.max_capacity <= 0:
            return 0.0
        return self.total_count() / self.max_capacity

    def add(self, material_type: MaterialType, count: int) -> int:
        """Add up to `count` items, limited by free space.

        Returns the number actually added.
        """
        accepted = min(max(0, count), self.remaining_capacity)
        if accepted == 0:
            return 0
        if material_type is MaterialType.GREEN:
            self.green += accepted
        else:
            self.brown += accepted
        return accepted

    def clear(self) -> None:
        self.green = 0
        self.brown = 0

    def to_state(self) -> Dict[str, Any]:
        return {"green_count": self.green, "brown_count": self.brown}

    def from_state(self, record: Dict[str, Any]) -> None:
        self.green = max(0, int(record.get("green_count") or 0))
        self.brown = max(0, int(record.get("brown_count") or 0))
