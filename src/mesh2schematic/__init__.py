from .config import ExplicitEdgeLength, TargetAxisDivisions, VoxelizationConfig
from .errors import ConfigError, ContactTestError, EncodeError, Mesh2SchematicError, MeshError
from .grid import SparseVoxelGrid
from .pipeline import convert, write_output

__version__ = "0.1.0"

__all__ = [
    "ExplicitEdgeLength",
    "TargetAxisDivisions",
    "VoxelizationConfig",
    "ConfigError",
    "ContactTestError",
    "EncodeError",
    "Mesh2SchematicError",
    "MeshError",
    "SparseVoxelGrid",
    "convert",
    "write_output",
]
