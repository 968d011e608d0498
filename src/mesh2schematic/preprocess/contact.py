"""
Cube/triangle contact test.

Separating axis test after Akenine-Moller, evaluated for many triangles at
once: the three box face normals, the triangle normal and the nine
edge/axis cross products. Touching counts as contact (zero tolerance).
"""
from __future__ import annotations

import numpy as np

from ..errors import ContactTestError

_UNIT = np.eye(3)


def contact_mask(triangles: np.ndarray, center: np.ndarray, half: float) -> np.ndarray:
    """
    Parameters
    ----------
    triangles : (N,3,3) corner positions
    center : (3,) cube center
    half : float
        half the cube edge

    Returns
    -------
    (N,) bool, True where the triangle touches or overlaps the cube.
    """
    triangles = np.asarray(triangles, dtype=np.float64)
    if triangles.shape[0] == 0:
        return np.zeros((0,), dtype=bool)

    try:
        with np.errstate(over="raise", invalid="raise"):
            tv = triangles - np.asarray(center, dtype=np.float64)
            if not np.all(np.isfinite(tv)) or not np.isfinite(half):
                raise ContactTestError("Non-finite coordinates in contact test")

            # box face normals == triangle AABB vs box
            separated = np.any((tv.min(axis=1) > half) | (tv.max(axis=1) < -half), axis=1)

            edges = np.stack(
                [tv[:, 1] - tv[:, 0], tv[:, 2] - tv[:, 1], tv[:, 0] - tv[:, 2]],
                axis=1,
            )  # (N,3,3)

            # triangle plane
            normal = np.cross(edges[:, 0], edges[:, 1])
            d = np.einsum("nv,nv->n", normal, tv[:, 0])
            r = half * np.abs(normal).sum(axis=1)
            separated |= np.abs(d) > r

            # edge x box-axis cross products, (N,9,3)
            axes = np.cross(_UNIT[None, :, None, :], edges[:, None, :, :]).reshape(-1, 9, 3)
            proj = np.einsum("nav,nkv->nak", axes, tv)   # (N,9,3)
            r = half * np.abs(axes).sum(axis=2)          # (N,9)
            separated |= np.any((proj.min(axis=2) > r) | (proj.max(axis=2) < -r), axis=1)
    except FloatingPointError as e:
        raise ContactTestError(f"Contact test failed: {e}") from e

    return ~separated


def cube_touches(triangles: np.ndarray, center: np.ndarray, half: float) -> bool:
    return bool(np.any(contact_mask(triangles, center, half)))
