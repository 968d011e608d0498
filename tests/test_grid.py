import itertools

import numpy as np

from mesh2schematic.grid import SparseVoxelGrid


def test_fresh_grid_is_empty():
    grid = SparseVoxelGrid(3, 4, 5)
    for i, j, k in itertools.product(range(3), range(4), range(5)):
        assert grid.get(i, j, k) is False
    assert grid.count() == 0


def test_set_then_get_round_trip():
    grid = SparseVoxelGrid(2, 3, 2)
    for (i, j, k), b in itertools.product(
        itertools.product(range(2), range(3), range(2)), (True, False)
    ):
        grid.set(i, j, k, b)
        assert grid.get(i, j, k) is b


def test_occupied_and_dense():
    grid = SparseVoxelGrid(4, 2, 3)
    grid.update([(0, 0, 0), (3, 1, 2)])
    grid.set(1, 1, 1, False)

    assert set(grid.occupied()) == {(0, 0, 0), (3, 1, 2)}
    assert grid.count() == 2

    dense = grid.to_dense()
    assert dense.shape == (4, 2, 3)
    assert int(dense.sum()) == 2
    assert dense[3, 1, 2]
    assert not np.any(dense[1])


def test_dimensions_are_kept_verbatim():
    grid = SparseVoxelGrid(7, 0, 2)
    assert grid.dims == (7, 0, 2)
    assert (grid.width, grid.height, grid.length) == (7, 0, 2)
    assert SparseVoxelGrid(-1, 2, 2).dims == (-1, 2, 2)
