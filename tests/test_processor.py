"""Tests for the compost processor engine."""
import json

import pytest

from composting import CompostProcessor, MaterialType, PileInventory, PileState
from composting.config import REMAINING_HOURS_SENTINEL
from composting.processor import LEGACY_RESET_MESSAGE


def neutralize_modifiers(engine, monkeypatch):
    """Pin every rate modifier at 1.0 so progress runs at the base rate."""
    monkeypatch.setattr(engine.moisture, "decomposition_modifier", lambda: 1.0)
    monkeypatch.setattr(engine.aeration, "decomposition_modifier", lambda: 1.0)
    monkeypatch.setattr(engine.temperature, "decomposition_modifier", lambda: 1.0)
    monkeypatch.setattr(engine, "cn_modifier", lambda: 1.0)


# === Lifecycle ===

def test_empty_pile_is_inert(engine, env):
    assert engine.state is PileState.INACTIVE
    assert engine.start() is False
    env.advance(5)
    assert engine.update() == 0.0
    assert engine.decomposition_progress == 0.0
    assert engine.remaining_hours() == 0


def test_start_stamps_clocks(engine, env):
    env.clock = 12.0
    engine.add_material(4, MaterialType.GREEN)
    assert engine.start() is True
    assert engine.state is PileState.ACTIVE
    assert engine.start_time == engine.last_update_time == engine.last_turn_time == 12.0
    assert engine.moisture.last_check_time == 12.0
    assert engine.aeration.last_update_time == 12.0
    assert engine.temperature.last_update_time == 12.0


def test_start_is_idempotent(active_engine, env):
    env.advance(3)
    assert active_engine.start() is False
    assert active_engine.start_time == 0.0


def test_add_material_reports_accepted(engine, config):
    assert engine.add_material(config.max_capacity + 10, MaterialType.BROWN) == config.max_capacity


# === Updates ===

def test_one_hour_update(active_engine, env):
    env.advance(1)
    gained = active_engine.update()
    assert gained > 0
    assert gained == pytest.approx(active_engine.decomposition_rate())
    assert active_engine.decomposition_progress == pytest.approx(gained)
    assert active_engine.moisture_level < 0.5
    assert active_engine.aeration_level < 0.7
    assert active_engine.internal_temperature > 20.0


def test_repeated_update_at_same_time_is_a_no_op(active_engine, env):
    env.advance(1)
    active_engine.update()
    before = active_engine.to_state()
    assert active_engine.update() == 0.0
    assert active_engine.to_state() == before


def test_clock_going_backwards_is_ignored(active_engine, env):
    env.advance(2)
    active_engine.update()
    before = active_engine.to_state()
    assert active_engine.update(now=1.0) == 0.0
    assert active_engine.to_state() == before


def test_sub_hour_updates_still_integrate_progress(active_engine, env):
    env.advance(0.5)
    assert active_engine.update() > 0
    # Environmental models wait for the full hour
    assert active_engine.moisture_level == 0.5


def test_progress_is_monotonic_and_levels_stay_bounded(full_engine, env):
    env.rainfall = 1.0
    previous = 0.0
    for step in range(120):
        env.temperature = 5.0 + (step % 24)
        env.advance(0.5 if step % 3 else 2.0)
        full_engine.update()
        if step % 17 == 0:
            full_engine.turn()
        assert full_engine.decomposition_progress >= previous
        assert 0.0 <= full_engine.moisture_level <= 1.0
        assert 0.0 <= full_engine.aeration_level <= 1.0
        assert full_engine.ambient_temperature - 5.0 <= full_engine.internal_temperature <= 80.0
        assert 0.0 <= full_engine.decomposition_progress <= 1.0
        previous = full_engine.decomposition_progress


def test_activity_level_ramps_below_critical_mass():
    assert CompostProcessor.activity_level(0.15) == pytest.approx(0.5)
    assert CompostProcessor.activity_level(0.3) == 1.0
    assert CompostProcessor.activity_level(1.0) == 1.0


def test_idle_pile_finishes_in_hours_to_complete(active_engine, env, monkeypatch):
    neutralize_modifiers(active_engine, monkeypatch)
    for _ in range(239):
        env.advance(1)
        active_engine.update()
    assert not active_engine.is_finished()

    env.advance(1)
    active_engine.update()
    assert active_engine.is_finished()
    assert active_engine.decomposition_progress == 1.0
    assert active_engine.state is PileState.FINISHED
    assert active_engine.progress_percent() == 100


def test_finished_pile_is_stable(active_engine, env):
    active_engine.turn(speedup_hours=1000)
    assert active_engine.is_finished()
    before = active_engine.to_state()

    env.advance(10)
    assert active_engine.update() == 0.0
    assert active_engine.turn() is False
    assert active_engine.add_water() is False
    assert active_engine.add_dry_material() is False
    assert active_engine.to_state() == before
    assert active_engine.remaining_hours() == 0


# === Turning ===

def test_turn_grants_speedup(active_engine, config):
    assert active_engine.turn(5) is True
    assert active_engine.decomposition_progress == pytest.approx(5 / config.hours_to_complete)
    assert active_engine.aeration_level == 1.0


def test_turn_uses_configured_speedup_by_default(active_engine, config):
    active_engine.turn()
    assert active_engine.decomposition_progress == pytest.approx(
        config.turn_speedup_hours / config.hours_to_complete)


def test_turn_on_empty_pile_does_nothing(engine):
    assert engine.turn() is False
    assert engine.decomposition_progress == 0.0


@pytest.mark.parametrize("moisture, expected", [
    (0.8, 0.7),
    (0.55, 0.5),
    (0.5, 0.5),
])
def test_turning_dries_a_wet_pile(active_engine, moisture, expected):
    active_engine.moisture.set_level(moisture)
    active_engine.turn()
    assert active_engine.moisture_level == pytest.approx(expected)


def test_turning_releases_heat(active_engine):
    active_engine.temperature.set_temperature(60.0)
    active_engine.turn()
    assert active_engine.internal_temperature == pytest.approx(44.0)


def test_cooldown_is_a_query_only(active_engine, env):
    active_engine.turn(5)
    assert active_engine.can_turn() is False
    assert active_engine.turn_cooldown_remaining() == pytest.approx(5.0)

    env.advance(3)
    assert active_engine.turn_cooldown_remaining() == pytest.approx(2.0)

    # The engine itself does not refuse a second turn
    assert active_engine.turn(5) is True
    assert active_engine.decomposition_progress == pytest.approx(10 / 240)

    env.advance(5)
    assert active_engine.can_turn() is True
    assert active_engine.turn_cooldown_remaining() == 0.0


def test_inactive_pile_cannot_turn(engine):
    assert engine.can_turn() is False
    assert engine.turn_cooldown_remaining() == 0.0


# === Moisture control ===

def test_water_and_dry_only_while_active(engine):
    assert engine.add_water() is False
    engine.add_material(2, MaterialType.GREEN)
    engine.start()
    assert engine.add_water(0.2) is True
    assert engine.moisture_level == pytest.approx(0.7)
    assert engine.add_dry_material(0.15) is True
    assert engine.moisture_level == pytest.approx(0.55)


# === Harvest and reset ===

def test_harvest_finished_pile(full_engine, config):
    full_engine.turn(speedup_hours=config.hours_to_complete)
    assert full_engine.is_finished()
    assert full_engine.harvest() == int(config.max_capacity * config.output_per_item)
    assert full_engine.inventory.is_empty
    assert full_engine.state is PileState.INACTIVE
    assert full_engine.decomposition_progress == 0.0


def test_harvest_unfinished_pile_yields_nothing(active_engine):
    assert active_engine.harvest() == 0
    assert active_engine.inventory.is_empty
    assert active_engine.state is PileState.INACTIVE


def test_reset_restores_defaults(active_engine, env):
    env.advance(30)
    active_engine.update()
    active_engine.turn()
    active_engine.reset()
    assert active_engine.start_time is None
    assert active_engine.decomposition_progress == 0.0
    assert active_engine.moisture_level == 0.5
    assert active_engine.aeration_level == 0.7
    assert active_engine.internal_temperature == active_engine.ambient_temperature


# === Telemetry ===

def test_remaining_hours(active_engine, monkeypatch):
    neutralize_modifiers(active_engine, monkeypatch)
    active_engine.turn(24)
    assert active_engine.remaining_hours() == pytest.approx(216, abs=1)


def test_remaining_hours_sentinel_when_stalled(active_engine, monkeypatch):
    monkeypatch.setattr(active_engine, "decomposition_rate", lambda: 0.0)
    assert active_engine.remaining_hours() == REMAINING_HOURS_SENTINEL


def test_cn_telemetry(active_engine):
    assert active_engine.cn_ratio() == pytest.approx(28.5)
    assert active_engine.cn_modifier() == 1.5
    assert active_engine.cn_ratio_quality_text() == "(Excellent!)"
    assert active_engine.speed_multiplier() == 1.5


def test_all_brown_pile_is_slow(engine):
    engine.add_material(10, MaterialType.BROWN)
    assert engine.cn_modifier() == 0.5


def test_elapsed_hours_and_states(active_engine, env):
    env.advance(7.6)
    assert active_engine.elapsed_hours() == 7
    assert active_engine.moisture_state == "Optimal"
    assert active_engine.aeration_state == "Well Aerated"
    assert active_engine.temperature_state == "Warm"


# === Persistence ===

def test_state_round_trip_reproduces_behavior(active_engine, env):
    for _ in range(5):
        env.advance(1.5)
        active_engine.update()
    active_engine.turn()

    record = json.loads(json.dumps(active_engine.to_state()))
    inventory = PileInventory(
        max_capacity=active_engine.inventory.max_capacity,
        green=active_engine.inventory.green,
        brown=active_engine.inventory.brown,
    )
    restored = CompostProcessor(env, active_engine.config, inventory)
    assert restored.from_state(record) == []
    assert restored.to_state() == active_engine.to_state()

    for _ in range(10):
        env.advance(2)
        active_engine.update()
        restored.update()
    assert restored.to_state() == active_engine.to_state()


def test_missing_fields_take_defaults(engine):
    assert engine.from_state({}) == []
    assert engine.state is PileState.INACTIVE
    assert engine.moisture_level == 0.5
    assert engine.aeration_level == 0.7


def test_active_record_without_clocks_resumes_from_start(engine):
    engine.from_state({"start_time": 4.0, "decomposition_progress": 0.25})
    assert engine.last_update_time == 4.0
    assert engine.last_turn_time == 4.0


@pytest.mark.parametrize("record", [
    {"is_composting": True, "start_time": 5.0},
    {"start_time": 5.0},
    {"state_version": 1, "start_time": 5.0, "decomposition_progress": 0.5},
])
def test_legacy_record_resets_pile(active_engine, record):
    messages = active_engine.from_state(record)
    assert messages == [LEGACY_RESET_MESSAGE]
    assert active_engine.state is PileState.INACTIVE
    assert active_engine.inventory.is_empty
    assert active_engine.decomposition_progress == 0.0
