"""
Checks on finished MeshBuffers arrays.

Every check returns a (possibly empty) list of issues and never raises.
"""

from typing import Dict, List, Optional

import numpy as np

from ..core import ValidationIssue
from ..rules import MESH_001, MESH_002, MESH_003, MESH_004, MESH_005, MESH_006

NORMAL_TOLERANCE = 1e-4


def check_triangle_count(triangles: np.ndarray, quad_count: int,
                         location: Optional[str] = None) -> List[ValidationIssue]:
    """Six indices per quad (MESH-001)."""
    expected = 6 * quad_count
    if len(triangles) == expected:
        return []
    return [MESH_001.issue(location, length=len(triangles),
                           quad_count=quad_count, expected=expected)]


def check_vertex_count(vertices: np.ndarray, quad_count: int,
                       location: Optional[str] = None) -> List[ValidationIssue]:
    """Four vertices per quad (MESH-006)."""
    if len(vertices) == 4 * quad_count:
        return []
    return [MESH_006.issue(location, vertex_count=len(vertices), quad_count=quad_count)]


def check_index_bounds(triangles: np.ndarray, vertex_count: int,
                       location: Optional[str] = None) -> List[ValidationIssue]:
    """Largest index below the vertex count (MESH-002)."""
    if len(triangles) == 0:
        return []
    largest = int(np.max(triangles))
    if largest < vertex_count:
        return []
    return [MESH_002.issue(location, index=largest, vertex_count=vertex_count)]


def check_parallel_buffers(vertices: np.ndarray, uv: np.ndarray, normals: np.ndarray,
                           location: Optional[str] = None) -> List[ValidationIssue]:
    """One uv and one normal per vertex (MESH-003)."""
    return [
        MESH_003.issue(location, buffer=name, length=len(buffer), vertex_count=len(vertices))
        for name, buffer in (("uv", uv), ("normals", normals))
        if len(buffer) != len(vertices)
    ]


def check_finite(buffers: Dict[str, np.ndarray],
                 location: Optional[str] = None) -> List[ValidationIssue]:
    """No NaN or infinity in any of the named buffers (MESH-004)."""
    return [
        MESH_004.issue(location, buffer=name)
        for name, buffer in buffers.items()
        if len(buffer) and not np.all(np.isfinite(buffer))
    ]


def check_unit_normals(normals: np.ndarray,
                       location: Optional[str] = None) -> List[ValidationIssue]:
    """Report the first normal that is not unit length (MESH-005)."""
    if len(normals) == 0:
        return []
    lengths = np.linalg.norm(normals, axis=1)
    bad = np.flatnonzero(np.abs(lengths - 1.0) > NORMAL_TOLERANCE)
    if len(bad) == 0:
        return []
    index = int(bad[0])
    return [MESH_005.issue(location, index=index, length=float(lengths[index]))]
