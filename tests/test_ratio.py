"""Tests for the C:N ratio model."""
import pytest

from composting import CompostConfig, MaterialRatioModel


@pytest.fixture
def ratio_model():
    return MaterialRatioModel(CompostConfig())


def test_weighted_ratio(ratio_model):
    assert ratio_model.ratio(7, 3) == pytest.approx(28.5)
    assert ratio_model.ratio(1, 1) == pytest.approx(37.5)


def test_single_material_piles(ratio_model):
    assert ratio_model.ratio(5, 0) == 15.0
    assert ratio_model.ratio(0, 5) == 60.0


def test_empty_pile_is_neutral(ratio_model):
    assert ratio_model.ratio(0, 0) == 0.0
    assert ratio_model.modifier(0.0) == 1.0
    assert ratio_model.quality_text(0.0) == ""


def test_near_optimal_mix_gets_bonus(ratio_model):
    ratio = ratio_model.ratio(7, 3)
    assert ratio_model.modifier(ratio) == 1.5
    assert ratio_model.quality_text(ratio) == "(Excellent!)"


def test_all_brown_is_penalized(ratio_model):
    ratio = ratio_model.ratio(0, 10)
    assert ratio_model.modifier(ratio) == 0.5
    assert ratio_model.quality_text(ratio) == "(Very Poor)"


@pytest.mark.parametrize("ratio, modifier", [
    (32.5, 1.5),   # distance 5: inclusive
    (37.5, 1.2),   # distance 10
    (15.0, 1.0),   # distance 12.5
    (50.0, 0.8),   # distance 22.5
    (52.5, 0.8),   # distance 25
    (60.0, 0.5),
])
def test_distance_bands(ratio_model, ratio, modifier):
    assert ratio_model.modifier(ratio) == modifier


def test_out_of_range_ratio_is_neutral(ratio_model):
    assert ratio_model.modifier(150.0) == 1.0
    assert ratio_model.quality_text(-1.0) == ""


def test_config_bonus_is_used():
    model = MaterialRatioModel(CompostConfig(optimal_ratio_bonus=2.0))
    assert model.modifier(27.5) == 2.0
