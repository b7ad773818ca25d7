"""Validation check functions grouped by concern."""

from .mesh_checks import (
    check_triangle_count,
    check_vertex_count,
    check_index_bounds,
    check_parallel_buffers,
    check_finite,
    check_unit_normals,
)
from .variant_checks import check_tile_counts, check_selectable_tiles

__all__ = [
    'check_triangle_count',
    'check_vertex_count',
    'check_index_bounds',
    'check_parallel_buffers',
    'check_finite',
    'check_unit_normals',
    'check_tile_counts',
    'check_selectable_tiles',
]
