"""Tests for the text front end."""
import pytest

from config import MAX_WAIT_HOURS, TICK_HOURS
from game_state import build_initial_state
from main import handle_command, parse_args, simulate_tick


@pytest.fixture
def state():
    s = build_initial_state(seed=2)
    s.messages.clear()
    return s


def test_quit():
    assert handle_command(build_initial_state(), "quit", []) is True


def test_unknown_command(state):
    assert handle_command(state, "dance", []) is False
    assert state.messages[-1] == "Unknown command: dance"


def test_bad_arguments_are_reported(state):
    handle_command(state, "add", ["rot", "lots"])
    assert state.messages[-1] == "Invalid usage for 'add'."
    handle_command(state, "wait", ["soon"])
    assert state.messages[-1] == "Invalid usage for 'wait'."


def test_add_and_wait(state):
    handle_command(state, "add", ["rot", "4"])
    handle_command(state, "wait", ["3"])
    assert state.hour == pytest.approx(3.0)
    assert state.get_target_pile().decomposition_progress > 0


def test_simulate_tick_advances_weather(state):
    simulate_tick(state)
    assert state.hour == pytest.approx(TICK_HOURS)


def test_simulate_tick_reports_finished_piles(state):
    handle_command(state, "add", ["rot", "4"])
    pile = state.get_target_pile()
    pile.decomposition_progress = 0.999999
    simulate_tick(state, 1.0)
    assert pile.is_finished()
    assert "The compost pile at (0, 0) is ready to harvest." in state.messages


def test_save_and_load_commands(state, tmp_path):
    path = str(tmp_path / "yard.json")
    handle_command(state, "add", ["straw", "5"])
    handle_command(state, "save", [path])
    assert state.messages[-1] == f"Saved to {path}."

    handle_command(state, "harvest", [])
    handle_command(state, "load", [path])
    assert state.messages[-1] == f"Loaded {path}."
    assert state.get_target_pile().inventory.brown_count() == 5


def test_load_missing_file_keeps_game(state, tmp_path):
    handle_command(state, "add", ["rot", "4"])
    handle_command(state, "load", [str(tmp_path / "nope.json")])
    assert state.messages[-1].startswith("Could not load")
    assert state.get_target_pile().inventory.green_count() == 4


def test_parse_args():
    args = parse_args(["--seed", "9", "--verbose"])
    assert args.seed == 9
    assert args.verbose is True
    assert args.config is None


@pytest.mark.parametrize("hours", ["inf", "-inf", "nan", "0", "-2"])
def test_wait_rejects_non_finite_and_non_positive_hours(state, hours):
    handle_command(state, "wait", [hours])
    assert state.messages[-1] == "Wait a positive number of hours."
    assert state.hour == 0.0


def test_wait_is_capped(state):
    handle_command(state, "wait", ["1e12"])
    assert f"You can wait at most {MAX_WAIT_HOURS} hours at a time." in state.messages
    assert state.hour == pytest.approx(MAX_WAIT_HOURS)


def test_load_corrupt_file_keeps_game(state, tmp_path):
    handle_command(state, "add", ["rot", "4"])
    for name, text in (("garbled.json", "{not json"), ("list.json", "[1, 2]")):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        handle_command(state, "load", [str(path)])
        assert state.messages[-1].startswith("Could not load: ")
        assert state.get_target_pile().inventory.green_count() == 4
