# main.py
"""
Compost Yard - text front end for the compost pile simulation.

Load a bin with greens and browns, keep it damp and aerated, and wait for
the microbes to do the rest.
"""
from __future__ import annotations

import argparse
import logging
import math
from typing import List, Optional

from composting import CompostConfig
from config import BULK_ADD_AMOUNT, MAX_WAIT_HOURS, TICK_HOURS
from game_state import (
    GameState,
    add_dry,
    add_item,
    build_initial_state,
    harvest_pile,
    load_game,
    save_game,
    survey_pile,
    turn_pile,
    water_pile,
)


def simulate_tick(state: GameState, hours: float = TICK_HOURS) -> None:
    """Advance the weather and every pile by one tick."""
    weather_messages = state.weather.tick(hours)
    state.messages.extend(weather_messages)

    now = state.weather.now()
    for position, pile in state.piles.items():
        was_finished = pile.is_finished()
        pile.update(now)
        if pile.is_finished() and not was_finished:
            state.messages.append(f"The compost pile at {position} is ready to harvest.")


def wait(state: GameState, hours: float) -> None:
    """Let time pass in tick-sized steps, at most MAX_WAIT_HOURS at once."""
    if not math.isfinite(hours) or hours <= 0:
        state.messages.append("Wait a positive number of hours.")
        return
    if hours > MAX_WAIT_HOURS:
        state.messages.append(f"You can wait at most {MAX_WAIT_HOURS} hours at a time.")
        hours = MAX_WAIT_HOURS
    remaining = hours
    while remaining > 0:
        step = min(TICK_HOURS, remaining)
        simulate_tick(state, step)
        remaining -= step


def show_status(state: GameState) -> None:
    weather = state.weather
    sky = "raining" if weather.raining else "dry"
    hour = int(weather.hour_of_day)
    state.messages.append(f"Day {weather.day}, {hour:02d}:00, {weather.temperature:.1f}°C, {sky}")

    inv = state.inventory
    carried = ", ".join(f"{code} x{n}" for code, n in sorted(inv.items.items())) or "nothing"
    state.messages.append(f"Inv: compost {inv.compost}, water buckets {inv.water_buckets}, carrying {carried}")


def save_command(state: GameState, path: str) -> None:
    try:
        save_game(state, path)
    except OSError as exc:
        state.messages.append(f"Could not save: {exc.strerror or exc}")
        return
    state.messages.append(f"Saved to {path}.")


def load_command(state: GameState, path: str) -> None:
    """Replace the running game with a save, keeping it if the file can't be read."""
    try:
        loaded = load_game(path, config=state.config)
    except OSError as exc:
        state.messages.append(f"Could not load: {exc.strerror or exc}")
        return
    except ValueError as exc:
        state.messages.append(f"Could not load: {exc}")
        return

    state.weather = loaded.weather
    state.piles = loaded.piles
    state.inventory = loaded.inventory
    state.target_cell = loaded.target_cell
    state.messages.extend(loaded.messages)
    state.messages.append(f"Loaded {path}.")


def handle_command(state: GameState, cmd: str, args: List[str]) -> bool:
    """Process a player command. Returns True if the game should quit."""
    command_map = {
        "add": lambda s, a: add_item(s, a[0], int(a[1]) if len(a) > 1 else BULK_ADD_AMOUNT)
        if a else s.messages.append("Usage: add <item> [count]"),
        "turn": lambda s, a: turn_pile(s),
        "water": lambda s, a: water_pile(s),
        "dry": lambda s, a: add_dry(s),
        "harvest": lambda s, a: harvest_pile(s),
        "survey": lambda s, a: survey_pile(s),
        "status": lambda s, a: show_status(s),
        "wait": lambda s, a: wait(s, float(a[0]) if a else 1.0),
        "save": lambda s, a: save_command(s, a[0]) if a else s.messages.append("Usage: save <path>"),
        "load": lambda s, a: load_command(s, a[0]) if a else s.messages.append("Usage: load <path>"),
    }
    if cmd == "quit":
        return True
    handler = command_map.get(cmd)
    if not handler:
        state.messages.append(f"Unknown command: {cmd}")
        return False
    try:
        handler(state, args)
    except (TypeError, ValueError, IndexError):
        state.messages.append(f"Invalid usage for '{cmd}'.")
    return False


def flush_messages(state: GameState) -> None:
    while state.messages:
        print(state.messages.popleft())


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compost pile simulation")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible weather")
    parser.add_argument("--config", type=str, default=None, help="JSON file of compost setting overrides")
    parser.add_argument("--verbose", action="store_true", help="Log simulation diagnostics")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = CompostConfig.load(args.config) if args.config else CompostConfig()
    state = build_initial_state(seed=args.seed, config=config)
    state.messages.append(
        "Commands: add <item> [n], turn, water, dry, harvest, survey, status, wait [hours], "
        "save <path>, load <path>, quit")

    while True:
        flush_messages(state)
        try:
            line = input("> ")
        except EOFError:
            break
        parts = line.split()
        if not parts:
            continue
        if handle_command(state, parts[0].lower(), parts[1:]):
            break


if __name__ == "__main__":
    main()
