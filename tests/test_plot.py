import numpy as np

from volsurface.models import DeribitDataPoint
from volsurface.plot import Mesh, State


def _quad_points():
    return [
        DeribitDataPoint(x=10.0, y=10.0, z=0.2),
        DeribitDataPoint(x=20.0, y=10.0, z=0.4),
        DeribitDataPoint(x=10.0, y=30.0, z=0.3),
        DeribitDataPoint(x=25.0, y=35.0, z=0.8),
    ]


def test_update_replaces_same_coordinates():
    state = State()
    state.update_state([DeribitDataPoint(1.0, 2.0, 0.5)])
    state.update_state([DeribitDataPoint(1.0, 2.0, 0.9), DeribitDataPoint(3.0, 2.0, 0.1)])
    assert len(state) == 2
    mesh = state.construct_mesh()
    rows = {tuple(np.round(row, 5)) for row in mesh.positions}
    assert (round(1.0 / 3.0, 5), 1.0, 1.0) in {tuple(round(float(v), 5) for v in r) for r in rows}


def test_empty_state_gives_empty_mesh():
    mesh = State().construct_mesh()
    assert mesh.positions.shape == (0, 3)
    assert mesh.triangle_count == 0


def test_positions_normalised_to_unit_maximum():
    state = State()
    state.update_state(_quad_points())
    mesh = state.construct_mesh()
    assert mesh.positions.shape == (4, 3)
    assert np.allclose(mesh.positions.max(axis=0), [1.0, 1.0, 1.0])
    assert (mesh.positions > 0).all()


def test_convex_quadrilateral_gives_two_triangles():
    state = State()
    state.update_state(_quad_points())
    mesh = state.construct_mesh()
    assert mesh.triangle_count == 2
    assert mesh.indices.max() < len(mesh.positions)
    used = set(int(i) for i in mesh.indices.ravel())
    assert used == {0, 1, 2, 3}


def test_triangles_are_valid_and_distinct():
    rng = np.random.default_rng(7)
    state = State()
    state.update_state(
        DeribitDataPoint(float(x), float(y), float(z))
        for x, y, z in rng.uniform(1.0, 100.0, size=(30, 3))
    )
    mesh = state.construct_mesh()
    assert mesh.triangle_count > 0
    for tri in mesh.indices:
        assert len(set(int(i) for i in tri)) == 3
        assert all(int(i) < len(state) for i in tri)


def test_collinear_points_have_no_triangles():
    state = State()
    state.update_state(DeribitDataPoint(float(i), 5.0, 0.5) for i in range(1, 6))
    mesh = state.construct_mesh()
    assert mesh.triangle_count == 0
    assert mesh.positions.shape == (5, 3)


def test_two_points_have_no_triangles():
    state = State()
    state.update_state([DeribitDataPoint(1.0, 1.0, 0.1), DeribitDataPoint(2.0, 3.0, 0.2)])
    mesh = state.construct_mesh()
    assert isinstance(mesh, Mesh)
    assert mesh.triangle_count == 0
    assert len(mesh.positions) == 2