from __future__ import annotations
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterable, Iterator, Tuple, Union

import nbtlib
from nbtlib import Compound

from ..errors import ConfigError, EncodeError
from ..grid import Coord, SparseVoxelGrid

GENERATOR = "mesh2schematic"
AIR = "minecraft:air"


class Encoder(ABC):
    """Turns a voxel grid into an NBT tree for one output container format."""

    root_name: str = ""

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock

    @abstractmethod
    def encode(
        self,
        grid: SparseVoxelGrid,
        block_id: str,
        data_version: int,
        model_name: str,
    ) -> Compound:
        ...

    @abstractmethod
    def file_extension(self) -> str:
        ...

    def save(self, path: Union[str, Path], blob: Compound) -> Path:
        """Write gzipped; appends the format's extension when missing."""
        p = Path(path)
        ext = "." + self.file_extension()
        if p.suffix != ext:
            p = p.with_name(p.name + ext)
        p.parent.mkdir(parents=True, exist_ok=True)
        nbtlib.File(blob, root_name=self.root_name).save(str(p), gzipped=True)
        return p


def compound(pairs: Iterable[Tuple[str, nbtlib.tag.Base]]) -> Compound:
    """Build a Compound, refusing a key that appears twice."""
    fields = {}
    for key, value in pairs:
        if key in fields:
            raise EncodeError(f"Duplicate key in compound: {key!r}")
        fields[key] = value
    return Compound(fields)


def number(tag_type, value: int):
    """Integer tag, with out-of-range values reported as EncodeError."""
    try:
        return tag_type(int(value))
    except (OverflowError, ValueError) as e:
        raise EncodeError(f"{tag_type.__name__} cannot hold {value}: {e}") from e


def as_signed(value: int, bits: int) -> int:
    """Reinterpret an unsigned value's bit pattern in the signed range."""
    if not 0 <= value < (1 << bits):
        raise EncodeError(f"{value} does not fit in {bits} unsigned bits")
    return value - (1 << bits) if value >= (1 << (bits - 1)) else value


def checked_dims(grid: SparseVoxelGrid) -> Tuple[int, int, int]:
    width, height, length = grid.dims
    if min(width, height, length) < 0:
        raise ConfigError(f"Grid dimensions must be non-negative, got {grid.dims}")
    return width, height, length


def cells_yzx(width: int, height: int, length: int) -> Iterator[Coord]:
    """Height slowest, then length, width fastest."""
    for y in range(height):
        for z in range(length):
            for x in range(width):
                yield x, y, z
