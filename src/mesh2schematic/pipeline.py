from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union

from nbtlib import Compound

from .config import VoxelizationConfig
from .export.base import Encoder
from .preprocess.io import TriangleMesh
from .preprocess.voxelize import ProgressFn, voxelize

logger = logging.getLogger(__name__)


def convert(
    mesh: TriangleMesh,
    config: VoxelizationConfig,
    encoder: Encoder,
    model_name: str,
    *,
    progress: Optional[ProgressFn] = None,
) -> Compound:
    """Voxelize `mesh` and encode the grid with `encoder`."""
    result = voxelize(mesh, config, progress=progress)
    blob = encoder.encode(result.grid, config.block_id, config.data_version, model_name)
    logger.info("Encoded %s as .%s", model_name, encoder.file_extension())
    return blob


def write_output(path: Union[str, Path], blob: Compound, encoder: Encoder) -> Path:
    out = encoder.save(path, blob)
    logger.info("Wrote %s", out)
    return out
