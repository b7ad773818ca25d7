"""
Procedural wall mesh generation.

A wall is a box whose front and back faces are cut into texture-tiled
segment columns. WallMeshGenerator is the entry point a host uses; the
remaining modules are the pipeline stages it runs.
"""

from .parameters import MIN_EXTENT, WallParameters
from .segmentation import (
    SEGMENT_WIDTH,
    Segment,
    SideSegmentation,
    WallSegmentation,
    segment_count,
    segment_side,
    segment_wall,
)
from .texture_variants import TextureAtlas, TextureVariantRegistry, TextureVariantState
from .transform import Quaternion, finalize_vertices
from .generator import MeshBuffers, WallMeshGenerator

__all__ = [
    'MIN_EXTENT',
    'WallParameters',
    'SEGMENT_WIDTH',
    'Segment',
    'SideSegmentation',
    'WallSegmentation',
    'segment_count',
    'segment_side',
    'segment_wall',
    'TextureAtlas',
    'TextureVariantRegistry',
    'TextureVariantState',
    'Quaternion',
    'finalize_vertices',
    'MeshBuffers',
    'WallMeshGenerator',
]
