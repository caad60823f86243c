# game_state/pile_actions.py
"""Player actions on the targeted compost pile."""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from composting import CompostProcessor
from config import BULK_ADD_AMOUNT, DRY_MATERIAL_AMOUNT, WATER_BUCKET_AMOUNT
from utils import format_hours

if TYPE_CHECKING:
    from game_state.state import GameState


def _target_pile(state: GameState) -> Optional[CompostProcessor]:
    pile = state.get_target_pile()
    if pile is None:
        state.messages.append("No compost bin here.")
    return pile


def add_item(state: GameState, item_code: str, count: int = BULK_ADD_AMOUNT) -> None:
    """Move carried items into the bin and start it composting."""
    pile = _target_pile(state)
    if pile is None:
        return

    material = state.config.material_type(item_code)
    if material is None:
        state.messages.append(f"{item_code} can't be composted.")
        return
    if pile.is_finished():
        state.messages.append("Harvest the finished compost first.")
        return
    if pile.inventory.is_full:
        state.messages.append("The bin is full.")
        return
    if count <= 0:
        state.messages.append("Add at least one item.")
        return

    carried = state.inventory.count(item_code)
    if carried <= 0:
        state.messages.append(f"You have no {item_code}.")
        return

    wanted = min(count, carried)
    accepted = pile.add_material(wanted, material)
    state.inventory.take(item_code, accepted)
    if accepted < wanted:
        state.messages.append(f"Only {accepted} {item_code} fit in the bin.")
    else:
        state.messages.append(f"Added {accepted} {item_code} ({material.value}).")

    if pile.start():
        state.messages.append("The pile starts composting.")


def turn_pile(state: GameState) -> None:
    """Turn the pile with a shovel, respecting the settle time between turns."""
    pile = _target_pile(state)
    if pile is None:
        return
    if not pile.is_active():
        state.messages.append("Nothing to turn.")
        return
    if not pile.can_turn():
        hours = math.ceil(pile.turn_cooldown_remaining())
        state.messages.append(f"Pile needs to settle for {hours} more hours.")
        return

    pile.turn(state.config.turn_speedup_hours)
    state.messages.append(f"You turn the pile. Progress {pile.progress_percent()}%.")
    if pile.is_finished():
        state.messages.append("The compost is ready to harvest.")


def water_pile(state: GameState) -> None:
    """Empty one carried water bucket onto the pile."""
    pile = _target_pile(state)
    if pile is None:
        return
    if state.inventory.water_buckets <= 0:
        state.messages.append("No water buckets left.")
        return
    if not pile.add_water(WATER_BUCKET_AMOUNT):
        state.messages.append("Only an active pile can be watered.")
        return

    state.inventory.water_buckets -= 1
    state.messages.append(f"You water the pile. Moisture: {pile.moisture_state} ({pile.moisture_level:.0%}).")


def add_dry(state: GameState) -> None:
    """Mix in dry material to soak up excess water."""
    pile = _target_pile(state)
    if pile is None:
        return
    if not pile.add_dry_material(DRY_MATERIAL_AMOUNT):
        state.messages.append("Only an active pile needs drying.")
        return
    state.messages.append(f"You mix in dry material. Moisture: {pile.moisture_state} ({pile.moisture_level:.0%}).")


def harvest_pile(state: GameState) -> None:
    """Collect finished compost and empty the bin."""
    pile = _target_pile(state)
    if pile is None:
        return
    if not pile.is_finished():
        if pile.inventory.is_empty:
            state.messages.append("The bin is empty.")
        else:
            state.messages.append(f"The compost isn't ready yet ({pile.progress_percent()}%).")
        return

    output = pile.harvest()
    state.inventory.compost += output
    state.messages.append(f"Harvested {output} compost.")


def survey_pile(state: GameState) -> None:
    """Report everything a player can read off the pile in one line."""
    pile = _target_pile(state)
    if pile is None:
        return

    inv = pile.inventory
    desc = [
        f"Bin {inv.total_count()}/{inv.max_capacity} ({inv.green_count()} green, {inv.brown_count()} brown)",
        f"{pile.state.value}",
    ]
    if not inv.is_empty:
        desc.append(f"progress={pile.progress_percent()}%")
        if not pile.is_finished():
            remaining = pile.remaining_hours()
            desc.append(f"remaining={format_hours(remaining)}")
        desc.append(f"moisture={pile.moisture_state} ({pile.moisture_level:.0%})")
        desc.append(f"aeration={pile.aeration_state} ({pile.aeration_level:.0%})")
        desc.append(
            f"temp={pile.temperature_state} ({pile.internal_temperature:.1f}°C, air {pile.ambient_temperature:.1f}°C)")
        desc.append(f"C:N={pile.cn_ratio():.0f}:1 {pile.cn_ratio_quality_text()}".rstrip())
        desc.append(f"speed=x{pile.speed_multiplier():.1f}")
    state.messages.append("Survey: " + " | ".join(desc))
