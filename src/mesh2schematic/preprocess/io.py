from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Union

import numpy as np
import trimesh

from ..errors import MeshError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TriangleMesh:
    """Read-only vertex/face arrays handed from a reader to the engine."""
    vertices: np.ndarray   # (V,3) float64
    faces: np.ndarray      # (F,3) int64, indices into vertices

    def __post_init__(self):
        v = np.array(self.vertices, dtype=np.float64).reshape(-1, 3)
        f = np.array(self.faces, dtype=np.int64).reshape(-1, 3)
        if not np.all(np.isfinite(v)):
            raise MeshError("Mesh has non-finite vertex coordinates")
        if f.size and (f.min() < 0 or f.max() >= len(v)):
            raise MeshError(
                f"Face index out of range: vertices={len(v)}, "
                f"index range=[{f.min()}, {f.max()}]"
            )
        v.flags.writeable = False
        f.flags.writeable = False
        object.__setattr__(self, "vertices", v)
        object.__setattr__(self, "faces", f)

    @property
    def triangles(self) -> np.ndarray:
        """(F,3,3) corner positions per face."""
        return self.vertices[self.faces]

    def __len__(self) -> int:
        return len(self.faces)

    @classmethod
    def from_trimesh(cls, mesh: trimesh.Trimesh) -> "TriangleMesh":
        return cls(vertices=np.asarray(mesh.vertices), faces=np.asarray(mesh.faces))

    def to_trimesh(self) -> trimesh.Trimesh:
        return trimesh.Trimesh(vertices=self.vertices.copy(), faces=self.faces.copy(), process=False)


def _load_trimesh(file_type: str) -> Callable[[Path], TriangleMesh]:
    def load(path: Path) -> TriangleMesh:
        try:
            obj = trimesh.load(str(path), file_type=file_type, force="scene", process=True)
        except Exception as e:
            raise MeshError(f"Could not parse {path}: {e}") from e

        if isinstance(obj, trimesh.Trimesh):
            return TriangleMesh.from_trimesh(obj)
        if not isinstance(obj, trimesh.Scene):
            raise MeshError(f"Unsupported trimesh load result type: {type(obj)}")

        # geometry transforms are applied by dump
        meshes = [m for m in obj.dump() if isinstance(m, trimesh.Trimesh)]
        if len(meshes) == 0:
            logger.warning("%s contains no triangle meshes", path)
            return TriangleMesh(vertices=np.zeros((0, 3)), faces=np.zeros((0, 3), dtype=np.int64))
        return TriangleMesh.from_trimesh(trimesh.util.concatenate(meshes))

    return load


READERS: Dict[str, Callable[[Path], TriangleMesh]] = {
    ".obj": _load_trimesh("obj"),
    ".stl": _load_trimesh("stl"),
    ".gltf": _load_trimesh("gltf"),
    ".glb": _load_trimesh("glb"),
    ".dae": _load_trimesh("dae"),
    ".ply": _load_trimesh("ply"),
    ".off": _load_trimesh("off"),
}


def load_mesh(path: Union[str, Path]) -> TriangleMesh:
    """
    Load a mesh file into a single TriangleMesh.

    The reader is picked from READERS by file suffix. Multi-object files are
    merged into one mesh.
    """
    p = Path(path)
    reader = READERS.get(p.suffix.lower())
    if reader is None:
        raise MeshError(f"No reader for '{p.suffix}' files (supported: {', '.join(sorted(READERS))})")
    if not p.is_file():
        raise FileNotFoundError(str(p))

    mesh = reader(p)
    logger.info("Loaded %s: %d vertices, %d triangles", p.name, len(mesh.vertices), len(mesh.faces))
    return mesh
