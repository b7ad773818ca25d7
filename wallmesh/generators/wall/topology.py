"""
Triangle indices and flat normals for the wall mesh.

Both only depend on the quad layout described in geometry.py: four outer
quads, then row_count * total_columns quads on the front face and as many on
the back face.
"""

from __future__ import annotations

from typing import Dict, List

import numpy as np

from .geometry import OUTER_FACES, OUTER_QUAD_COUNT, VERTICES_PER_QUAD, WallFace
from .transform import Quaternion

# Two triangles per quad over its vertices (start,y0) (end,y0) (start,y1) (end,y1)
QUAD_PATTERN = (0, 1, 2, 1, 3, 2)

# Local face directions before rotation
LOCAL_FACE_NORMALS: Dict[WallFace, tuple] = {
    WallFace.TOP: (0.0, 1.0, 0.0),      # up
    WallFace.BOTTOM: (0.0, -1.0, 0.0),  # -up
    WallFace.RIGHT: (0.0, 0.0, 1.0),    # forward
    WallFace.LEFT: (0.0, 0.0, -1.0),    # -forward
    WallFace.FRONT: (1.0, 0.0, 0.0),    # right
    WallFace.BACK: (-1.0, 0.0, 0.0),    # -right
}


def quad_count(row_count: int, total_columns: int) -> int:
    """Number of quads in a wall with the given subdivision."""
    return OUTER_QUAD_COUNT + 2 * row_count * total_columns


def create_triangles(row_count: int, total_columns: int) -> np.ndarray:
    """Flat index buffer, QUAD_PATTERN shifted by 4 for every quad."""
    count = quad_count(row_count, total_columns)
    pattern = np.array(QUAD_PATTERN, dtype=np.uint32)
    offsets = np.arange(count, dtype=np.uint32) * VERTICES_PER_QUAD
    return (offsets[:, None] + pattern[None, :]).reshape(-1)


def face_normals(rotation: Quaternion) -> Dict[WallFace, np.ndarray]:
    """Rotated unit normal of every logical face."""
    matrix = rotation.to_matrix()
    return {
        face: matrix @ np.array(normal, dtype=np.float64)
        for face, normal in LOCAL_FACE_NORMALS.items()
    }


def create_normals(row_count: int, total_columns: int,
                   rotation: Quaternion) -> np.ndarray:
    """One flat normal per vertex, in quad order."""
    normals = face_normals(rotation)
    subdivided = row_count * total_columns

    per_quad: List[np.ndarray] = [normals[face] for face in OUTER_FACES]
    per_quad += [normals[WallFace.FRONT]] * subdivided
    per_quad += [normals[WallFace.BACK]] * subdivided

    return np.repeat(np.array(per_quad, dtype=np.float64), VERTICES_PER_QUAD, axis=0)
