from __future__ import annotations
import logging
from concurrent.futures import FIRST_EXCEPTION, ProcessPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from ..config import VoxelizationConfig
from ..errors import ContactTestError
from ..grid import Coord, SparseVoxelGrid
from .contact import contact_mask
from .io import TriangleMesh
from .normalize import Pose, compute_pose, grid_dims, resolve_edge_length

logger = logging.getLogger(__name__)

ProgressFn = Callable[[float], None]
Partition = Tuple[int, int, int]   # (i, j_start, j_stop)


@dataclass
class VoxelizationResult:
    grid: SparseVoxelGrid
    edge_length: float
    pose: Pose


def _overlapping(lo_tri: np.ndarray, hi_tri: np.ndarray, lo: float, hi: float) -> np.ndarray:
    return (lo_tri <= hi) & (hi_tri >= lo)


def sample_partition(
    triangles: np.ndarray,
    edge: float,
    dims: Tuple[int, int, int],
    partition: Partition,
) -> List[Coord]:
    """
    Occupied cells of one x slice, rows j_start..j_stop-1.

    Cell (i, j, k) is the cube of side `edge` centered on (i, j, k) * edge in
    the posed frame, so the low side of the mesh box gets half a cell of
    margin.
    """
    i, j_start, j_stop = partition
    _, _, nz = dims
    half = 0.5 * edge
    if len(triangles) == 0:
        return []
    if not np.all(np.isfinite(triangles)):
        raise ContactTestError(f"Non-finite triangle coordinates in slice {i}")

    tri_min = triangles.min(axis=1)
    tri_max = triangles.max(axis=1)

    cx = i * edge
    in_slice = _overlapping(tri_min[:, 0], tri_max[:, 0], cx - half, cx + half)
    if not np.any(in_slice):
        return []
    s_tris, s_min, s_max = triangles[in_slice], tri_min[in_slice], tri_max[in_slice]

    out: List[Coord] = []
    for j in range(j_start, j_stop):
        cy = j * edge
        in_row = _overlapping(s_min[:, 1], s_max[:, 1], cy - half, cy + half)
        if not np.any(in_row):
            continue
        r_tris, r_min, r_max = s_tris[in_row], s_min[in_row], s_max[in_row]

        for k in range(nz):
            cz = k * edge
            in_cell = _overlapping(r_min[:, 2], r_max[:, 2], cz - half, cz + half)
            if not np.any(in_cell):
                continue
            center = np.array([cx, cy, cz])
            if np.any(contact_mask(r_tris[in_cell], center, half)):
                out.append((i, j, k))
    return out


# Per-process copy of the posed triangles, set once by the pool initializer.
_WORKER_STATE: Dict[str, object] = {}


def _init_worker(triangles: np.ndarray, edge: float, dims: Tuple[int, int, int]) -> None:
    _WORKER_STATE["triangles"] = triangles
    _WORKER_STATE["edge"] = edge
    _WORKER_STATE["dims"] = dims


def _run_partition(partition: Partition) -> Tuple[Partition, List[Coord]]:
    coords = sample_partition(
        _WORKER_STATE["triangles"],
        _WORKER_STATE["edge"],
        _WORKER_STATE["dims"],
        partition,
    )
    return partition, coords


def make_partitions(dims: Tuple[int, int, int], chunk_size: Optional[int] = None) -> List[Partition]:
    """One task per x slice, optionally split along y into chunk_size rows."""
    nx, ny, _ = dims
    step = ny if chunk_size is None else int(chunk_size)
    parts: List[Partition] = []
    for i in range(nx):
        if ny <= 0:
            parts.append((i, 0, 0))
            continue
        for j0 in range(0, ny, max(step, 1)):
            parts.append((i, j0, min(j0 + step, ny)))
    return parts


class _SliceProgress:
    """Counts finished partitions per x slice and reports completed slices."""

    def __init__(self, partitions: List[Partition], nx: int, progress: Optional[ProgressFn]):
        self.remaining: Dict[int, int] = {}
        for i, _, _ in partitions:
            self.remaining[i] = self.remaining.get(i, 0) + 1
        self.nx = nx
        self.done = 0
        self.progress = progress

    def finished(self, partition: Partition) -> None:
        i = partition[0]
        self.remaining[i] -= 1
        if self.remaining[i] == 0:
            self.done += 1
            pct = 100.0 * self.done / max(self.nx, 1)
            logger.debug("slice %d done (%.1f%%)", i, pct)
            if self.progress is not None:
                self.progress(pct)


def sample_sequential(
    triangles: np.ndarray,
    edge: float,
    dims: Tuple[int, int, int],
    *,
    chunk_size: Optional[int] = None,
    progress: Optional[ProgressFn] = None,
) -> SparseVoxelGrid:
    grid = SparseVoxelGrid(*dims)
    parts = make_partitions(dims, chunk_size)
    tracker = _SliceProgress(parts, dims[0], progress)
    for part in parts:
        grid.update(sample_partition(triangles, edge, dims, part))
        tracker.finished(part)
    return grid


def sample_parallel(
    triangles: np.ndarray,
    edge: float,
    dims: Tuple[int, int, int],
    *,
    workers: int,
    chunk_size: Optional[int] = None,
    progress: Optional[ProgressFn] = None,
) -> SparseVoxelGrid:
    """
    Fan partitions out over a process pool and union the results.

    The first failing partition cancels everything still queued and its
    exception is re-raised; no partial grid is returned.
    """
    grid = SparseVoxelGrid(*dims)
    parts = make_partitions(dims, chunk_size)
    tracker = _SliceProgress(parts, dims[0], progress)

    with ProcessPoolExecutor(
        max_workers=workers,
        initializer=_init_worker,
        initargs=(triangles, edge, dims),
    ) as pool:
        pending = {pool.submit(_run_partition, p) for p in parts}
        while pending:
            done, pending = wait(pending, return_when=FIRST_EXCEPTION)
            for fut in done:
                err = fut.exception()
                if err is not None:
                    for other in pending:
                        other.cancel()
                    raise err
                part, coords = fut.result()
                grid.update(coords)
                tracker.finished(part)
    return grid


def voxelize(
    mesh: TriangleMesh,
    config: VoxelizationConfig,
    *,
    progress: Optional[ProgressFn] = None,
) -> VoxelizationResult:
    """
    Shell-voxelize a mesh: a cell is occupied iff its cube touches a triangle.

    Cells fully enclosed by a closed surface stay empty. A mesh without
    extent under TargetAxisDivisions gives a 0 x 0 x 0 grid.
    """
    pose = compute_pose(mesh, config.rotation)
    edge = resolve_edge_length(config.resolution, pose.extents)
    dims = grid_dims(pose.extents, edge)
    logger.info("Voxel edge %.6g, grid %d x %d x %d", edge, *dims)

    if len(mesh.faces) == 0:
        triangles = np.zeros((0, 3, 3))
    else:
        triangles = pose.apply(mesh.vertices)[mesh.faces]

    if edge == 0.0:
        grid = SparseVoxelGrid(*dims)
    elif config.workers == 1:
        grid = sample_sequential(
            triangles, edge, dims, chunk_size=config.chunk_size, progress=progress,
        )
    else:
        grid = sample_parallel(
            triangles, edge, dims,
            workers=config.workers, chunk_size=config.chunk_size, progress=progress,
        )

    logger.info("Occupied cells: %d", grid.count())
    return VoxelizationResult(grid=grid, edge_length=edge, pose=pose)
