import numpy as np
import pytest

from mesh2schematic.errors import ContactTestError
from mesh2schematic.preprocess.contact import contact_mask, cube_touches

ORIGIN = np.zeros(3)


def tri(*points):
    return np.array([points], dtype=np.float64)


def test_far_triangle_misses():
    t = tri((5, 5, 5), (6, 5, 5), (5, 6, 5))
    assert not cube_touches(t, ORIGIN, 0.5)


def test_large_triangle_cutting_through_cube_hits():
    # no vertex is anywhere near the cube
    t = tri((-10, -10, 0.1), (10, -10, 0.1), (0, 10, 0.1))
    assert cube_touches(t, ORIGIN, 0.5)


def test_triangle_on_cube_face_counts_as_contact():
    t = tri((-3, -3, 0.5), (3, -3, 0.5), (0, 3, 0.5))
    assert cube_touches(t, ORIGIN, 0.5)

    t = tri((-3, -3, 0.5 + 1e-6), (3, -3, 0.5 + 1e-6), (0, 3, 0.5 + 1e-6))
    assert not cube_touches(t, ORIGIN, 0.5)


def test_triangle_separated_by_edge_axis():
    # bounding boxes overlap and the plane crosses the cube, but the
    # hypotenuse stays beyond the x + y = 1 corner
    t = tri((1.4, -0.2, 0.0), (-0.2, 1.4, 0.0), (1.4, 1.4, 0.0))
    assert not cube_touches(t, ORIGIN, 0.5)

    t = tri((0.9, -0.2, 0.0), (-0.2, 0.9, 0.0), (1.4, 1.4, 0.0))
    assert cube_touches(t, ORIGIN, 0.5)


def test_tilted_plane_missing_corner():
    # plane x + y + z = 1.6 passes beside the (0.5, 0.5, 0.5) corner
    t = tri((1.6, 0.0, 0.0), (0.0, 1.6, 0.0), (0.0, 0.0, 1.6))
    assert not cube_touches(t, ORIGIN, 0.5)

    t = tri((1.4, 0.0, 0.0), (0.0, 1.4, 0.0), (0.0, 0.0, 1.4))
    assert cube_touches(t, ORIGIN, 0.5)


def test_mask_is_per_triangle():
    tris = np.concatenate([
        tri((5, 5, 5), (6, 5, 5), (5, 6, 5)),
        tri((0, 0, 0), (0.1, 0, 0), (0, 0.1, 0)),
        tri((-2, 0, 0), (2, 0, 0), (0, 0, 3)),
    ])
    assert contact_mask(tris, ORIGIN, 0.5).tolist() == [False, True, True]
    assert contact_mask(np.zeros((0, 3, 3)), ORIGIN, 0.5).shape == (0,)


def test_degenerate_segment_triangle():
    t = tri((-1, 0.2, 0.2), (1, 0.2, 0.2), (1, 0.2, 0.2))
    assert cube_touches(t, ORIGIN, 0.5)


def test_non_finite_input_raises():
    t = tri((np.nan, 0, 0), (1, 0, 0), (0, 1, 0))
    with pytest.raises(ContactTestError):
        cube_touches(t, ORIGIN, 0.5)


def test_overflow_raises():
    t = tri((1e308, 0, 0), (-1e308, 0, 0), (0, 1e308, 0))
    with pytest.raises(ContactTestError):
        cube_touches(t, ORIGIN, 0.5)
