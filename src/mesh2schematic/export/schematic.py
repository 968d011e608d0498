from __future__ import annotations
import logging

import numpy as np
from nbtlib import ByteArray, Compound, Int, List, Long, Short, String

from ..grid import SparseVoxelGrid
from .base import AIR, GENERATOR, Encoder, as_signed, cells_yzx, checked_dims, compound, number
from .varint import encode_varints

logger = logging.getLogger(__name__)

SCHEMATIC_VERSION = 2


class SchematicEncoder(Encoder):
    """
    Sponge schematic (version 2): a two-entry palette plus one varint block
    id per cell.

    Fields
    ------
    Version, DataVersion : Int
    Metadata : Compound(Name, Author, Date (epoch seconds), RequiredMods)
    Width, Height, Length : Short holding an unsigned 16-bit size
    Palette : Compound, "minecraft:air" -> 0, block -> 1
    BlockData : ByteArray, ids in y, z, x order (x fastest)
    """

    root_name = "Schematic"

    def file_extension(self) -> str:
        return "schem"

    def encode(
        self,
        grid: SparseVoxelGrid,
        block_id: str,
        data_version: int,
        model_name: str,
    ) -> Compound:
        width, height, length = checked_dims(grid)
        sizes = [Short(as_signed(n, 16)) for n in (width, height, length)]

        ids = (1 if grid.get(x, y, z) else 0 for x, y, z in cells_yzx(width, height, length))
        # varint bytes kept bit for bit, read back as int8
        raw = encode_varints(ids)
        block_data = ByteArray(np.frombuffer(raw, dtype=np.int8).copy())
        logger.debug("BlockData: %d bytes for %d cells", len(raw), width * height * length)

        metadata = compound([
            ("Name", String(model_name)),
            ("Author", String(GENERATOR)),
            ("Date", number(Long, self.clock())),
            ("RequiredMods", List[String]()),
        ])
        palette = compound([
            (AIR, Int(0)),
            (block_id, Int(1)),
        ])
        return compound([
            ("Version", Int(SCHEMATIC_VERSION)),
            ("DataVersion", number(Int, data_version)),
            ("Metadata", metadata),
            ("Width", sizes[0]),
            ("Height", sizes[1]),
            ("Length", sizes[2]),
            ("Palette", palette),
            ("BlockData", block_data),
        ])
