import numpy as np
import pytest

from mesh2schematic.preprocess.io import TriangleMesh


@pytest.fixture
def unit_square():
    """Two triangles covering [0,1] x [0,1] at z = 0."""
    vertices = np.array([
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [1.0, 1.0, 0.0],
        [0.0, 1.0, 0.0],
    ])
    faces = np.array([[0, 1, 2], [0, 2, 3]])
    return TriangleMesh(vertices=vertices, faces=faces)
