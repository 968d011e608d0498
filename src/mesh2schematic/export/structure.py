from __future__ import annotations
import logging

from nbtlib import Compound, Int, List, String

from ..grid import SparseVoxelGrid
from .base import Encoder, cells_yzx, checked_dims, compound, number

logger = logging.getLogger(__name__)


def int_list(*values: int) -> List:
    return List[Int]([number(Int, v) for v in values])


class StructureEncoder(Encoder):
    """
    Structure block file: one palette entry for the block and one entry per
    occupied cell. Air is implicit, so empty cells produce nothing.
    """

    root_name = ""

    def file_extension(self) -> str:
        return "nbt"

    def encode(
        self,
        grid: SparseVoxelGrid,
        block_id: str,
        data_version: int,
        model_name: str,
    ) -> Compound:
        width, height, length = checked_dims(grid)

        blocks = []
        for x, y, z in cells_yzx(width, height, length):
            if grid.get(x, y, z):
                blocks.append(compound([
                    ("state", Int(0)),
                    ("pos", int_list(x, y, z)),
                ]))
        logger.debug("Structure %s: %d blocks", model_name, len(blocks))

        return compound([
            ("DataVersion", number(Int, data_version)),
            ("size", int_list(width, height, length)),
            ("palette", List[Compound]([compound([("Name", String(block_id))])])),
            ("blocks", List[Compound](blocks)),
        ])
