"""Accumulation of surface points and triangulation into a normalised mesh."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np
from scipy.spatial import Delaunay, QhullError

from volsurface.models import DeribitDataPoint


@dataclass
class Mesh:
    """Triangle mesh: vertex positions and index triples into them."""

    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float32))
    indices: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.uint16))

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0])


def _f32(value: float) -> float:
    with np.errstate(over="ignore"):
        return float(np.float32(value))


class State:
    """The latest implied volatility for each (strike, days to expiry) pair."""

    def __init__(self) -> None:
        self._points: dict[tuple[float, float], float] = {}

    def __len__(self) -> int:
        return len(self._points)

    def update_state(self, points: Iterable[DeribitDataPoint]) -> None:
        """Insert points, replacing any earlier value at the same coordinates."""
        for point in points:
            self._points[(_f32(point.x), _f32(point.y))] = _f32(point.z)

    def construct_mesh(self) -> Mesh:
        """Triangulate the points in the strike/expiry plane, scaling each axis by its maximum."""
        keys = list(self._points)
        if not keys:
            return Mesh()

        coords = np.array(
            [(x, y, self._points[(x, y)]) for x, y in keys], dtype=np.float32
        )
        maxima = np.fmax.reduce(
            np.vstack([np.zeros(3, dtype=np.float32), coords]), axis=0
        )
        with np.errstate(divide="ignore", invalid="ignore"):
            positions = (coords / maxima).astype(np.float32)

        indices = np.zeros((0, 3), dtype=np.uint16)
        if len(keys) >= 3:
            try:
                triangulation = Delaunay(coords[:, :2].astype(np.float64))
            except (QhullError, ValueError):
                pass
            else:
                indices = triangulation.simplices.astype(np.int64).astype(np.uint16)

        return Mesh(positions=positions, indices=indices)