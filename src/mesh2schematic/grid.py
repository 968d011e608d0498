from __future__ import annotations
from typing import Dict, Iterable, Iterator, Tuple

import numpy as np

Coord = Tuple[int, int, int]


class SparseVoxelGrid:
    """
    Boolean occupancy over [0, nx) x [0, ny) x [0, nz).

    Only cells that were explicitly set are stored; anything else reads as
    False. Coordinates must be in range: that is the caller's job.
    """

    def __init__(self, nx: int, ny: int, nz: int):
        self.dims: Tuple[int, int, int] = (int(nx), int(ny), int(nz))
        self._cells: Dict[Coord, bool] = {}

    @property
    def width(self) -> int:
        return self.dims[0]

    @property
    def height(self) -> int:
        return self.dims[1]

    @property
    def length(self) -> int:
        return self.dims[2]

    def _check(self, i: int, j: int, k: int) -> None:
        nx, ny, nz = self.dims
        assert 0 <= i < nx and 0 <= j < ny and 0 <= k < nz, f"({i}, {j}, {k}) outside {self.dims}"

    def get(self, i: int, j: int, k: int) -> bool:
        self._check(i, j, k)
        return self._cells.get((i, j, k), False)

    def set(self, i: int, j: int, k: int, value: bool) -> None:
        self._check(i, j, k)
        self._cells[(i, j, k)] = bool(value)

    def update(self, coords: Iterable[Coord]) -> None:
        """Mark every coordinate in `coords` occupied."""
        for i, j, k in coords:
            self.set(i, j, k, True)

    def occupied(self) -> Iterator[Coord]:
        return (c for c, v in self._cells.items() if v)

    def count(self) -> int:
        return sum(1 for _ in self.occupied())

    def to_dense(self) -> np.ndarray:
        """(nx, ny, nz) bool array, for inspection and export to numpy tools."""
        out = np.zeros(tuple(max(d, 0) for d in self.dims), dtype=bool)
        for i, j, k in self.occupied():
            out[i, j, k] = True
        return out

    def __repr__(self) -> str:
        return f"SparseVoxelGrid(dims={self.dims}, occupied={self.count()})"
