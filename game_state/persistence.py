# game_state/persistence.py
"""Save and load the yard as JSON."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from composting import CompostConfig
from game_state.state import GameState, Inventory
from world.weather import WeatherSystem

logger = logging.getLogger(__name__)

SAVE_VERSION = 1


def pile_records(state: GameState) -> list[Dict[str, Any]]:
    """One flat record per pile: engine state, bin contents and position."""
    records = []
    for (x, y), pile in sorted(state.piles.items()):
        record = pile.to_state()
        record.update(pile.inventory.to_state())
        record["position"] = [x, y]
        records.append(record)
    return records


def save_game(state: GameState, path: str | Path) -> None:
    data = {
        "version": SAVE_VERSION,
        "config": state.config.to_dict(),
        "weather": state.weather.to_state(),
        "inventory": asdict(state.inventory),
        "target_cell": list(state.target_cell),
        "piles": pile_records(state),
    }
    with Path(path).open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    logger.debug("Saved %d pile(s) to %s", len(state.piles), path)


def load_game(path: str | Path, seed: Optional[int] = None, config: Optional[CompostConfig] = None) -> GameState:
    """Rebuild a game from a save file.

    Raises OSError for an unreadable file and ValueError for one that isn't
    a JSON object. Piles saved in a retired format come back empty, with a
    note in the message log.
    """
    with Path(path).open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} is not a save file")

    if config is None:
        config = CompostConfig.from_dict(data.get("config", {}))

    inventory_data = data.get("inventory", {})
    state = GameState(
        weather=WeatherSystem.from_state(data.get("weather", {}), seed=seed),
        config=config,
        inventory=Inventory(
            compost=int(inventory_data.get("compost", 0)),
            water_buckets=int(inventory_data.get("water_buckets", 0)),
            items={str(k): int(v) for k, v in inventory_data.get("items", {}).items()},
        ),
    )

    for record in data.get("piles", []):
        position = tuple(record.get("position", (0, 0)))
        pile = state.add_pile((int(position[0]), int(position[1])))
        pile.inventory.from_state(record)
        state.messages.extend(pile.from_state(record))

    target = data.get("target_cell", (0, 0))
    state.set_target((int(target[0]), int(target[1])))
    logger.debug("Loaded %d pile(s) from %s", len(state.piles), path)
    return state
