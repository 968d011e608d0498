from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import trimesh

from ..config import ExplicitEdgeLength, Resolution, TargetAxisDivisions
from ..errors import ConfigError
from .io import TriangleMesh

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pose:
    """Rotate-then-translate placement of a mesh; the mesh itself is untouched."""
    rotation: np.ndarray        # (4,4)
    transform: np.ndarray       # (4,4) original -> grid frame (rotation, then shift to origin)
    bounds_min: np.ndarray      # (3,) rotated AABB min before the shift
    extents: np.ndarray         # (3,) rotated AABB size

    def apply(self, points: np.ndarray) -> np.ndarray:
        points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(points) == 0:
            return points.copy()
        return trimesh.transform_points(points, self.transform)


def rotation_matrix(angles: Sequence[float]) -> np.ndarray:
    """
    4x4 rotation about X, then Y, then Z (radians).
    """
    rx, ry, rz = (float(a) for a in angles)
    R_x = trimesh.transformations.rotation_matrix(rx, [1.0, 0.0, 0.0])
    R_y = trimesh.transformations.rotation_matrix(ry, [0.0, 1.0, 0.0])
    R_z = trimesh.transformations.rotation_matrix(rz, [0.0, 0.0, 1.0])
    return R_z @ R_y @ R_x


def compute_pose(mesh: TriangleMesh, rotation: Sequence[float] = (0.0, 0.0, 0.0)) -> Pose:
    """
    Rotate the mesh bounds and place the rotated AABB min corner at the origin.

    A mesh without vertices gets a zero-sized box at the origin.
    """
    R = rotation_matrix(rotation)
    if len(mesh.vertices) == 0:
        bmin = np.zeros(3)
        bmax = np.zeros(3)
    else:
        rotated = trimesh.transform_points(mesh.vertices, R)
        bmin = rotated.min(axis=0)
        bmax = rotated.max(axis=0)

    T_translate = np.eye(4)
    T_translate[:3, 3] = -bmin
    T = T_translate @ R

    return Pose(rotation=R, transform=T, bounds_min=bmin, extents=bmax - bmin)


def resolve_edge_length(resolution: Resolution, extents: np.ndarray) -> float:
    """
    Edge length of one voxel.

    A non-positive configured value is a ConfigError. TargetAxisDivisions on a
    mesh with no extent (empty, or all vertices coincide) yields 0.0, which
    grid_dims turns into an empty grid.
    """
    if isinstance(resolution, ExplicitEdgeLength):
        edge = float(resolution.edge)
        if not edge > 0 or not math.isfinite(edge):
            raise ConfigError(f"Voxel edge length must be positive and finite, got {edge}")
        return edge

    if isinstance(resolution, TargetAxisDivisions):
        divisions = float(resolution.divisions)
        if not divisions > 0 or not math.isfinite(divisions):
            raise ConfigError(f"Axis divisions must be positive, got {resolution.divisions}")
        longest = float(np.max(extents)) if len(extents) else 0.0
        if longest == 0.0:
            logger.warning("Mesh has zero extent; producing an empty grid")
            return 0.0
        return longest / divisions

    raise ConfigError(f"Unknown resolution mode: {resolution!r}")


def grid_dims(extents: np.ndarray, edge: float) -> Tuple[int, int, int]:
    """Cells per axis: the tight box rounded up, plus one margin cell."""
    if edge == 0.0:
        return 0, 0, 0
    nx, ny, nz = (math.ceil(float(e) / edge) + 1 for e in extents)
    return int(nx), int(ny), int(nz)
