# composting/curves.py
"""
Piecewise-constant modifier curves.

Every environmental factor maps its level onto a decomposition-rate
multiplier (and usually a display label) through a small table of bands.
A curve stores the band edges as NumPy arrays so the same table scores a
single pile's level or a whole array of levels (benchmarks, curve reports).

Band edges differ in which side they belong to: moisture is "Too Dry" below
0.3 but "Optimal" up to and including 0.6. Each edge therefore carries an
`inclusive` flag: True means a level exactly on the edge stays in the band
below it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np

ArrayLike = Union[float, Sequence[float], np.ndarray]

# (upper edge, edge is inclusive, value, label)
Band = Tuple[float, bool, float, str]


@dataclass(frozen=True)
class ModifierCurve:
    """Lookup table of ascending bands plus an open-ended top band."""
    edges: np.ndarray       # Shape (n,), ascending
    inclusive: np.ndarray   # Shape (n,), bool
    values: np.ndarray      # Shape (n + 1,)
    labels: Tuple[str, ...]  # n + 1 labels, or empty

    @classmethod
    def from_bands(cls, bands: Sequence[Band], top_value: float, top_label: str = "") -> "ModifierCurve":
        edges = np.array([b[0] for b in bands], dtype=np.float64)
        if np.any(np.diff(edges) <= 0):
            raise ValueError("Band edges must be strictly ascending")
        labels = tuple(b[3] for b in bands) + (top_label,)
        return cls(
            edges=edges,
            inclusive=np.array([b[1] for b in bands], dtype=bool),
            values=np.array([b[2] for b in bands] + [top_value], dtype=np.float64),
            labels=labels if any(labels) else (),
        )

    def band_index(self, level: ArrayLike) -> Union[int, np.ndarray]:
        """Index of the band containing `level` (scalar or array)."""
        x = np.asarray(level, dtype=np.float64)
        # An edge is "passed" once the level is above it, or sits on an
        # exclusive edge.
        passed = np.where(self.inclusive, x[..., None] > self.edges, x[..., None] >= self.edges)
        idx = np.count_nonzero(passed, axis=-1)
        if idx.ndim == 0:
            return int(idx)
        return idx

    def value(self, level: float) -> float:
        return float(self.values[self.band_index(level)])

    def label(self, level: float) -> str:
        if not self.labels:
            return ""
        return self.labels[self.band_index(level)]

    def evaluate(self, levels: ArrayLike) -> np.ndarray:
        """Vectorized value lookup for an array of levels."""
        return self.values[self.band_index(np.atleast_1d(levels))]

    def table(self) -> list[Tuple[str, float, str]]:
        """Human-readable rows: (range, value, label)."""
        rows = []
        lower = "-inf"
        for i, edge in enumerate(self.edges):
            op = "<=" if self.inclusive[i] else "<"
            rows.append((f"{lower} .. {op}{edge:g}", float(self.values[i]),
                         self.labels[i] if self.labels else ""))
            lower = f"{edge:g}"
        rows.append((f"> {lower}", float(self.values[-1]), self.labels[-1] if self.labels else ""))
        return rows
