# game_state/initialization.py
"""Game state initialization."""
from __future__ import annotations

from typing import Optional

from composting import CompostConfig
from game_state.state import GameState
from world.weather import WeatherSystem

START_CELL = (0, 0)


def build_initial_state(seed: Optional[int] = None, config: Optional[CompostConfig] = None) -> GameState:
    """Create a new game with one empty compost bin at the origin.

    `seed` makes the weather reproducible; `config` overrides the per-pile
    tunables for every bin in the yard.
    """
    state = GameState(
        weather=WeatherSystem(seed=seed),
        config=config or CompostConfig(),
    )
    state.add_pile(START_CELL)
    state.set_target(START_CELL)
    state.messages.append("A compost bin stands empty in the yard.")
    return state
