from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .errors import ConfigError


@dataclass(frozen=True)
class ExplicitEdgeLength:
    """Use this many model units per block."""
    edge: float


@dataclass(frozen=True)
class TargetAxisDivisions:
    """Make the longest bounding-box axis this many blocks long."""
    divisions: float


Resolution = Union[ExplicitEdgeLength, TargetAxisDivisions]


@dataclass(frozen=True)
class VoxelizationConfig:
    resolution: Resolution
    rotation: Tuple[float, float, float] = (0.0, 0.0, 0.0)   # radians, applied X then Y then Z
    block_id: str = "minecraft:stone"
    data_version: int = 2566
    workers: int = 1
    chunk_size: Optional[int] = None   # rows of the y axis per task, None = whole slice

    def __post_init__(self):
        if not isinstance(self.resolution, (ExplicitEdgeLength, TargetAxisDivisions)):
            raise ConfigError(f"Unknown resolution mode: {self.resolution!r}")
        if len(self.rotation) != 3:
            raise ConfigError("rotation must hold exactly three angles")
        if int(self.workers) < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")
        if self.chunk_size is not None and int(self.chunk_size) < 1:
            raise ConfigError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if not self.block_id:
            raise ConfigError("block_id must not be empty")
