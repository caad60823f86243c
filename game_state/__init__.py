# game_state/__init__.py
"""Game state management module."""

from game_state.state import GameState, Inventory
from game_state.initialization import build_initial_state
from game_state.pile_actions import (
    add_dry,
    add_item,
    harvest_pile,
    survey_pile,
    turn_pile,
    water_pile,
)
from game_state.persistence import load_game, save_game

__all__ = [
    'GameState',
    'Inventory',
    'build_initial_state',
    'add_dry',
    'add_item',
    'harvest_pile',
    'survey_pile',
    'turn_pile',
    'water_pile',
    'load_game',
    'save_game',
]
