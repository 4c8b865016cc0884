import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pytest  # noqa: E402
from matplotlib.colors import to_rgb  # noqa: E402

from volsurface.models import OptionSide  # noqa: E402
from volsurface.plot import Mesh  # noqa: E402
from volsurface.render import SURFACE_COLOURS, SurfaceView  # noqa: E402


@pytest.fixture
def view():
    surface_view = SurfaceView()
    yield surface_view
    plt.close(surface_view.figure)


def _square_mesh():
    positions = np.array(
        [[0, 0, 0.5], [1, 0, 0.2], [0, 1, 0.8], [1, 1, 1.0]], dtype=np.float32
    )
    indices = np.array([[0, 1, 2], [1, 3, 2]], dtype=np.uint16)
    return Mesh(positions=positions, indices=indices)


def test_window_size(view):
    width, height = view.figure.get_size_inches() * view.figure.dpi
    assert (round(width), round(height)) == (800, 600)


def test_window_is_open_until_closed(view):
    assert view.is_open
    plt.close(view.figure)
    assert not view.is_open


def test_draw_axes_colours(view):
    view.draw_axes()
    colours = [to_rgb(line.get_color()) for line in view.axes.lines]
    assert colours == [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]


def test_draw_axes_twice_replaces_lines(view):
    view.draw_axes()
    view.draw_axes()
    assert len(view.axes.lines) == 3


def test_show_mesh_replaces_surface_for_side(view):
    view.show_mesh(OptionSide.CALL, _square_mesh())
    view.show_mesh(OptionSide.CALL, _square_mesh())
    assert len(view.axes.collections) == 1
    view.show_mesh(OptionSide.PUT, _square_mesh())
    assert len(view.axes.collections) == 2
    assert view.sides_shown == {OptionSide.CALL, OptionSide.PUT}


def test_remove_mesh(view):
    view.show_mesh(OptionSide.CALL, _square_mesh())
    view.show_mesh(OptionSide.PUT, _square_mesh())
    view.remove_mesh(OptionSide.CALL)
    assert view.sides_shown == {OptionSide.PUT}
    assert len(view.axes.collections) == 1
    view.remove_mesh(OptionSide.CALL)
    assert len(view.axes.collections) == 1


def test_show_empty_mesh_draws_nothing(view):
    view.show_mesh(OptionSide.CALL, _square_mesh())
    assert view.show_mesh(OptionSide.CALL, Mesh()) is None
    assert len(view.axes.collections) == 0
    assert view.sides_shown == set()


@pytest.mark.parametrize("side", [OptionSide.CALL, OptionSide.PUT])
def test_surface_colour_is_shaded_base_colour(view, side):
    surface = view.show_mesh(side, _square_mesh())
    faces = surface.get_facecolor()[:, :3]
    base = np.array(SURFACE_COLOURS[side])
    assert faces.shape == (2, 3)
    assert np.all(faces <= base + 1e-6)
    assert np.all(faces >= 0.35 * base - 1e-6)