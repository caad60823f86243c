# composting/ratio.py
"""Carbon:nitrogen ratio of a pile and its effect on decomposition speed."""
from __future__ import annotations

from dataclasses import dataclass, field

from composting.config import CompostConfig
from composting.curves import ModifierCurve

MAX_VALID_RATIO = 100.0


def _distance_curve(config: CompostConfig) -> ModifierCurve:
    # Distance from the optimal ratio; every edge is inclusive
    return ModifierCurve.from_bands(
        [
            (5.0, True, config.optimal_ratio_bonus, "(Excellent!)"),
            (10.0, True, 1.2, "(Good)"),
            (15.0, True, 1.0, "(Ok)"),
            (25.0, True, 0.8, "(Poor)"),
        ],
        top_value=config.poor_ratio_penalty,
        top_label="(Very Poor)",
    )


@dataclass
class MaterialRatioModel:
    """Scores a green/brown mix against the configured optimum.

    Counts are not stored here: they belong to whatever holds the
    materials and are passed in on every query.
    """
    config: CompostConfig = field(default_factory=CompostConfig)

    def __post_init__(self) -> None:
        self._curve = _distance_curve(self.config)

    def ratio(self, green_count: int, brown_count: int) -> float:
        """Count-weighted average C:N ratio; 0.0 for an empty pile."""
        greens = max(0, green_count)
        browns = max(0, brown_count)
        total = greens + browns
        if total == 0:
            return 0.0
        if greens == 0:
            return self.config.brown_cn_ratio
        if browns == 0:
            return self.config.green_cn_ratio
        weighted = greens * self.config.green_cn_ratio + browns * self.config.brown_cn_ratio
        return weighted / total

    @staticmethod
    def is_valid(ratio: float) -> bool:
        return 0.0 < ratio <= MAX_VALID_RATIO

    def distance(self, ratio: float) -> float:
        return abs(ratio - self.config.optimal_cn_ratio)

    def modifier(self, ratio: float) -> float:
        """Decomposition multiplier; neutral (1.0) for an invalid ratio."""
        if not self.is_valid(ratio):
            return 1.0
        return self._curve.value(self.distance(ratio))

    def quality_text(self, ratio: float) -> str:
        if not self.is_valid(ratio):
            return ""
        return self._curve.label(self.distance(ratio))
