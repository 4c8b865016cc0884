"""A 3D window that shows the call and put surfaces with coloured axes."""

from __future__ import annotations

from typing import Any

import matplotlib.pyplot as plt
import numpy as np

from volsurface.models import OptionSide
from volsurface.plot import Mesh

TITLE = "Volatility Surface Mesh"
WIDTH = 800
HEIGHT = 600

SURFACE_COLOURS = {
    OptionSide.CALL: (0.4, 0.7, 1.0),
    OptionSide.PUT: (1.0, 0.7, 0.4),
}

# Axis lines: x (strike) red, y (expiry) green, z (implied volatility) blue.
_AXES = (
    ((1.0, 0.0, 0.0), (1.0, 0.0, 0.0)),
    ((0.0, 1.0, 0.0), (0.0, 1.0, 0.0)),
    ((0.0, 0.0, 1.0), (0.0, 0.0, 1.0)),
)

# The camera looks from the front at the centre of the plot, in the x-z plane.
_EYE = np.array([0.0, -2.5, 0.0])
_TARGET = np.array([0.5, 0.0, 0.5])


def _shade(vertices: np.ndarray, colour: tuple[float, float, float]) -> np.ndarray:
    """Face colours lit by a light that sits at the camera."""
    edge_a = vertices[:, 1] - vertices[:, 0]
    edge_b = vertices[:, 2] - vertices[:, 0]
    normals = np.cross(edge_a, edge_b)
    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        normals = normals / lengths
    light = _EYE - _TARGET
    light = light / np.linalg.norm(light)
    intensity = np.nan_to_num(np.abs(normals @ light), nan=0.0)
    factor = 0.35 + 0.65 * intensity
    return np.clip(np.outer(factor, np.asarray(colour)), 0.0, 1.0)


class SurfaceView:
    """A figure holding one surface per option side."""

    def __init__(self) -> None:
        self.figure = plt.figure(figsize=(WIDTH / 100, HEIGHT / 100), dpi=100)
        manager = self.figure.canvas.manager
        if manager is not None:
            manager.set_window_title(TITLE)
        self.axes = self.figure.add_subplot(projection="3d")
        self.axes.set_xlabel("strike")
        self.axes.set_ylabel("expiry")
        self.axes.set_zlabel("IV")
        self._set_limits()
        self.axes.view_init(elev=0.0, azim=-90.0)
        self._axis_lines: list = []
        self._surfaces: dict[OptionSide, Any] = {}

    def _set_limits(self) -> None:
        self.axes.set_xlim(0.0, 1.0)
        self.axes.set_ylim(0.0, 1.0)
        self.axes.set_zlim(0.0, 1.0)

    @property
    def is_open(self) -> bool:
        """Whether the window is still open."""
        return plt.fignum_exists(self.figure.number)

    @property
    def sides_shown(self) -> set[OptionSide]:
        """The option sides that currently have a surface."""
        return set(self._surfaces)

    def refresh(self, interval: float = 0.05) -> None:
        """Redraw and process window events for ``interval`` seconds."""
        plt.pause(interval)

    def draw_axes(self) -> None:
        """Draw the three unit axes from the origin, replacing earlier ones."""
        for line in self._axis_lines:
            line.remove()
        self._axis_lines = []
        for end, colour in _AXES:
            (line,) = self.axes.plot(
                [0.0, end[0]], [0.0, end[1]], [0.0, end[2]], color=colour
            )
            self._axis_lines.append(line)

    def show_mesh(self, side: OptionSide, mesh: Mesh) -> Any | None:
        """Replace the surface for ``side`` with ``mesh``; None if it has no triangles."""
        self.remove_mesh(side)
        if mesh.triangle_count == 0:
            return None
        positions = np.asarray(mesh.positions, dtype=np.float64)
        indices = np.asarray(mesh.indices, dtype=np.int64)
        vertices = positions[indices]
        surface = self.axes.plot_trisurf(
            positions[:, 0],
            positions[:, 1],
            positions[:, 2],
            triangles=indices,
            color=SURFACE_COLOURS[side],
            shade=False,
        )
        surface.set_facecolor(_shade(vertices, SURFACE_COLOURS[side]))
        self._set_limits()
        self._surfaces[side] = surface
        return surface

    def remove_mesh(self, side: OptionSide) -> None:
        """Remove the surface for ``side`` if one is shown."""
        surface = self._surfaces.pop(side, None)
        if surface is not None:
            surface.remove()