from .io import READERS, TriangleMesh, load_mesh
from .normalize import Pose, compute_pose, grid_dims, resolve_edge_length, rotation_matrix
from .contact import contact_mask, cube_touches
from .voxelize import VoxelizationResult, sample_parallel, sample_sequential, voxelize

__all__ = [
    "READERS",
    "TriangleMesh",
    "load_mesh",
    "Pose",
    "compute_pose",
    "grid_dims",
    "resolve_edge_length",
    "rotation_matrix",
    "contact_mask",
    "cube_touches",
    "VoxelizationResult",
    "sample_parallel",
    "sample_sequential",
    "voxelize",
]
