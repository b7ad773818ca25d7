"""
Vertex and UV construction for the wall mesh.

The mesh is a box whose front and back faces are subdivided into segment
columns (see segmentation.py) and row_count rows. Axes, in generation units:
x is depth (front face at +depth), y is height (pivot at the bottom) and z is
width (right side positive).

Quad order, shared with the triangulator and the normal calculator:
    top, bottom, right, left,
    front columns (each column row_count quads, bottom row first),
    back columns  (same layout)

The front face walks from width_right to width_left: right segments outer
edge first, then left segments seam first. The back face walks from
width_left to width_right: left segments outer edge first, then right
segments seam first. A segment keeps its tile on both faces.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .parameters import WallParameters
from .segmentation import SEGMENT_WIDTH, Segment, WallSegmentation
from .texture_variants import TextureAtlas, TextureVariantState

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]

VERTICES_PER_QUAD = 4
OUTER_QUAD_COUNT = 4
OUTER_VERTEX_COUNT = OUTER_QUAD_COUNT * VERTICES_PER_QUAD


class WallFace(Enum):
    """Logical faces of the wall box."""
    TOP = "top"
    BOTTOM = "bottom"
    RIGHT = "right"
    LEFT = "left"
    FRONT = "front"
    BACK = "back"


OUTER_FACES = (WallFace.TOP, WallFace.BOTTOM, WallFace.RIGHT, WallFace.LEFT)


@dataclass(frozen=True)
class FaceColumn:
    """A segment as seen from one face, in that face's walk order.

    walk_start and walk_end are the z coordinates of the quad's first and
    second vertex; tile is the atlas tile of the underlying segment.
    """
    segment: Segment
    walk_start: float
    walk_end: float
    tile: int

    def u_range(self) -> Tuple[float, float]:
        """Tile-local u of both quad edges: distance from the outer edge / 2."""
        outer = self.segment.start
        return (abs(self.walk_start - outer) / SEGMENT_WIDTH,
                abs(self.walk_end - outer) / SEGMENT_WIDTH)


@dataclass
class WallGeometry:
    """Unfinalized vertex positions and final UVs of one wall."""
    vertices: np.ndarray  # (N, 3) float64, generation units
    uv: np.ndarray        # (N, 2) float64
    front_columns: List[FaceColumn]
    back_columns: List[FaceColumn]

    @property
    def quad_count(self) -> int:
        return len(self.vertices) // VERTICES_PER_QUAD


# ---------------------------------------------------------------------------
# Column ordering
# ---------------------------------------------------------------------------

def front_columns(segmentation: WallSegmentation,
                  state: TextureVariantState) -> List[FaceColumn]:
    """Columns of the front face, from width_right to width_left."""
    columns = [
        FaceColumn(seg, seg.start, seg.end, state.right_tiles[i])
        for i, seg in enumerate(segmentation.right.segments)
    ]
    left = list(enumerate(segmentation.left.segments))
    columns.extend(
        FaceColumn(seg, seg.end, seg.start, state.left_tiles[i])
        for i, seg in reversed(left)
    )
    return columns


def back_columns(segmentation: WallSegmentation,
                 state: TextureVariantState) -> List[FaceColumn]:
    """Columns of the back face, from width_left to width_right."""
    columns = [
        FaceColumn(seg, seg.start, seg.end, state.left_tiles[i])
        for i, seg in enumerate(segmentation.left.segments)
    ]
    right = list(enumerate(segmentation.right.segments))
    columns.extend(
        FaceColumn(seg, seg.end, seg.start, state.right_tiles[i])
        for i, seg in reversed(right)
    )
    return columns


# ---------------------------------------------------------------------------
# Vertices
# ---------------------------------------------------------------------------

def outer_vertices(params: WallParameters) -> List[Vec3]:
    """The 16 vertices of the top, bottom, right and left faces."""
    d, h = params.depth, params.height
    r, l = params.width_right, params.width_left
    return [
        # top
        (d, h, r), (d, h, l), (-d, h, r), (-d, h, l),
        # bottom
        (d, 0.0, l), (d, 0.0, r), (-d, 0.0, l), (-d, 0.0, r),
        # right
        (d, 0.0, r), (d, h, r), (-d, 0.0, r), (-d, h, r),
        # left
        (d, h, l), (d, 0.0, l), (-d, h, l), (-d, 0.0, l),
    ]


def row_bounds(params: WallParameters) -> List[Tuple[float, float]]:
    """(y0, y1) of every row, bottom row first."""
    quad_height = params.height / params.row_count
    bounds = []
    for row in range(params.row_count):
        y1 = params.height if row == params.row_count - 1 else (row + 1) * quad_height
        bounds.append((row * quad_height, y1))
    return bounds


def face_vertices(x: float, columns: List[FaceColumn],
                  rows: List[Tuple[float, float]]) -> List[Vec3]:
    """Quads of one subdivided face at depth coordinate x."""
    vertices: List[Vec3] = []
    for column in columns:
        for y0, y1 in rows:
            vertices.append((x, y0, column.walk_start))
            vertices.append((x, y0, column.walk_end))
            vertices.append((x, y1, column.walk_start))
            vertices.append((x, y1, column.walk_end))
    return vertices


# ---------------------------------------------------------------------------
# UVs
# ---------------------------------------------------------------------------

def outer_uv(params: WallParameters) -> List[Vec2]:
    """Tile-local UVs of the outer faces from texture_offset/texture_scale."""
    ox, oy = params.texture_offset
    s = params.texture_scale
    height = oy + params.height / 2 * s
    depth_x = ox + params.depth * s
    depth_x_left = ox + (1 - params.depth) * s
    return [
        # top
        (s, oy), (ox, oy), (s, s), (ox, s),
        # bottom
        (ox, oy), (s, oy), (ox, s), (s, s),
        # right
        (ox, oy), (ox, height), (depth_x, oy), (depth_x, height),
        # left
        (s + ox, height), (s + ox, oy), (depth_x_left, height), (depth_x_left, oy),
    ]


def face_uv(columns: List[FaceColumn], row_count: int) -> List[Vec2]:
    """Tile-local UVs of one subdivided face; each row spans v in [0, 1]."""
    uv: List[Vec2] = []
    for column in columns:
        u0, u1 = column.u_range()
        for _ in range(row_count):
            uv.extend([(u0, 0.0), (u1, 0.0), (u0, 1.0), (u1, 1.0)])
    return uv


def _tile_offsets(atlas: TextureAtlas, tiles: List[int]) -> np.ndarray:
    return np.array([atlas.tile_offset(t) for t in tiles], dtype=np.float64)


def place_in_atlas(local_uv: np.ndarray, tiles_per_vertex: List[int],
                   atlas: TextureAtlas) -> np.ndarray:
    """Shrink tile-local UVs to one atlas cell and move them to their tile."""
    zoomed = local_uv / np.array([atlas.columns, atlas.rows], dtype=np.float64)
    return zoomed + _tile_offsets(atlas, tiles_per_vertex)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class WallGeometryBuilder:
    """Builds vertex positions and UVs for a segmented wall."""

    def __init__(self, atlas: Optional[TextureAtlas] = None):
        self.atlas = atlas or TextureAtlas()

    def build(self, params: WallParameters, segmentation: WallSegmentation,
              state: TextureVariantState) -> WallGeometry:
        """Emit the outer box followed by the front and back face quads.

        Args:
            params: Clamped wall parameters
            segmentation: Segmentation of params
            state: Texture variants already ensured for segmentation

        Returns:
            WallGeometry in generation units
        """
        front = front_columns(segmentation, state)
        back = back_columns(segmentation, state)
        rows = row_bounds(params)

        vertices = outer_vertices(params)
        vertices.extend(face_vertices(params.depth, front, rows))
        vertices.extend(face_vertices(-params.depth, back, rows))

        local_uv = outer_uv(params)
        local_uv.extend(face_uv(front, params.row_count))
        local_uv.extend(face_uv(back, params.row_count))

        per_quad = VERTICES_PER_QUAD * params.row_count
        tiles = [self.atlas.blank_tile] * (VERTICES_PER_QUAD * 2)
        tiles += [state.side_tile] * (VERTICES_PER_QUAD * 2)
        for column in front + back:
            tiles += [column.tile] * per_quad

        uv = place_in_atlas(np.array(local_uv, dtype=np.float64), tiles, self.atlas)
        return WallGeometry(
            vertices=np.array(vertices, dtype=np.float64),
            uv=uv,
            front_columns=front,
            back_columns=back,
        )
