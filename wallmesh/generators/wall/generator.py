"""
Wall mesh generator.

Owns a wall's parameters, rotation and texture variant state, and turns them
into MeshBuffers. Parameter changes only mark the wall dirty; update() (called
once per frame by a host) or regenerate() runs the pipeline:

    parameters -> segmentation -> texture variants -> vertices/UVs
               -> triangles -> normals -> transform -> validation -> buffers
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Tuple

import numpy as np

from wallmesh.validation import MeshValidator, ValidationError

from .geometry import VERTICES_PER_QUAD, WallGeometryBuilder
from .parameters import WallParameters
from .segmentation import WallSegmentation, segment_wall
from .texture_variants import TextureAtlas, TextureVariantRegistry, TextureVariantState
from .topology import create_normals, create_triangles
from .transform import Quaternion, finalize_vertices

logger = logging.getLogger(__name__)


@dataclass
class MeshBuffers:
    """Renderable wall mesh."""
    vertices: np.ndarray   # Shape: (N, 3), dtype=float32
    triangles: np.ndarray  # Shape: (M,), dtype=uint32, M % 3 == 0
    uv: np.ndarray         # Shape: (N, 2), dtype=float32
    normals: np.ndarray    # Shape: (N, 3), dtype=float32
    bounds_min: Tuple[float, float, float]
    bounds_max: Tuple[float, float, float]

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles) // 3

    @property
    def quad_count(self) -> int:
        return len(self.vertices) // VERTICES_PER_QUAD

    @property
    def is_empty(self) -> bool:
        return len(self.vertices) == 0

    @property
    def bounds_center(self) -> Tuple[float, float, float]:
        return tuple((lo + hi) / 2.0 for lo, hi in zip(self.bounds_min, self.bounds_max))

    @property
    def bounds_size(self) -> Tuple[float, float, float]:
        return tuple(hi - lo for lo, hi in zip(self.bounds_min, self.bounds_max))


class WallMeshGenerator:
    """Generates and caches the mesh of a single wall.

    The generator is either clean (mesh matches parameters) or dirty. Every
    mutation marks it dirty; regeneration clears the flag before it builds,
    so one update cycle never rebuilds twice. Regeneration is synchronous
    and not re-entrant.
    """

    def __init__(self, parameters: Optional[WallParameters] = None,
                 rotation: Optional[Quaternion] = None,
                 rng: Optional[random.Random] = None,
                 atlas: Optional[TextureAtlas] = None,
                 validator: Optional[MeshValidator] = None,
                 settings=None):
        """Initialize the generator.

        Args:
            parameters: Initial parameters (default: stored defaults)
            rotation: Wall rotation applied to vertices and normals
            rng: Random source for texture variants
            atlas: Texture atlas layout (default 4 x 3)
            validator: Validator run before publishing buffers
                       (default: a validator owned by this generator)
            settings: WallSettings providing defaults for delete_mesh()
        """
        self._settings = settings
        if parameters is None:
            parameters = self._default_parameters()
        self._params = parameters.clamped()
        self._rotation = (rotation or Quaternion.identity()).normalized()
        self._registry = TextureVariantRegistry(atlas=atlas, rng=rng)
        self._builder = WallGeometryBuilder(self._registry.atlas)
        self._validator = validator or MeshValidator()
        self._mesh: Optional[MeshBuffers] = None
        self._segmentation: Optional[WallSegmentation] = None
        self._dirty = True
        self._regenerating = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> WallParameters:
        """A copy of the current (clamped) parameters."""
        return replace(self._params)

    @property
    def rotation(self) -> Quaternion:
        return self._rotation

    @property
    def atlas(self) -> TextureAtlas:
        return self._registry.atlas

    @property
    def validator(self) -> MeshValidator:
        return self._validator

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def mesh(self) -> Optional[MeshBuffers]:
        """The last published buffers, or None."""
        return self._mesh

    @property
    def has_mesh(self) -> bool:
        return self._mesh is not None

    @property
    def segmentation(self) -> Optional[WallSegmentation]:
        """Segmentation used for the last published mesh."""
        return self._segmentation

    @property
    def texture_variants(self) -> Optional[TextureVariantState]:
        """A copy of the texture variant state, or None if uninitialized."""
        state = self._registry.state
        return state.copy() if state is not None else None

    @classmethod
    def get_parameter_schema(cls) -> Dict[str, Dict[str, Any]]:
        return WallParameters.get_parameter_schema()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_parameters(self, params: WallParameters) -> None:
        """Replace all parameters; extents are clamped to their minimum.

        Raises:
            ValueError: If row_count < 1 or a value is not finite.
        """
        self._params = params.clamped()
        self._dirty = True

    def apply_params(self, params: Dict[str, Any]) -> None:
        """Apply a dict of parameter values (from a host UI or the CLI).

        Unknown keys are ignored.
        """
        known = {f.name for f in fields(WallParameters)}
        updates = {k: v for k, v in params.items() if k in known}
        if "texture_offset" in updates:
            updates["texture_offset"] = tuple(updates["texture_offset"])
        self.set_parameters(replace(self._params, **updates))

    def set_rotation(self, rotation: Quaternion) -> None:
        self._rotation = rotation.normalized()
        self._dirty = True

    def reroll_texture_variants(self) -> None:
        """Pick new tiles for every segment; call regenerate() to see them."""
        self._registry.reroll()
        self._dirty = True

    def reset_texture_variants(self) -> None:
        """Forget tile assignments; the next regeneration seeds new ones."""
        self._registry.reset()
        self._dirty = True

    def delete_mesh(self) -> None:
        """Drop the mesh and return the wall to its default state."""
        self._mesh = None
        self._segmentation = None
        self._params = self._default_parameters().clamped()
        self._rotation = Quaternion.identity()
        self._registry.reset()
        self._dirty = True
        logger.info("Deleted wall mesh and restored default parameters")

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def update(self) -> Optional[MeshBuffers]:
        """Per-frame pump: regenerate only when dirty.

        Returns:
            The new buffers, or None if the wall was clean.
        """
        if not self._dirty:
            return None
        return self.regenerate()

    def regenerate(self, force: bool = False) -> MeshBuffers:
        """Run the pipeline if dirty, forced, or no mesh exists yet.

        Args:
            force: Rebuild even if the cached mesh is up to date

        Returns:
            The published MeshBuffers

        Raises:
            RuntimeError: If called while a regeneration is in progress
            ValidationError: If the built mesh fails validation; the
                previous mesh stays published
        """
        if self._regenerating:
            raise RuntimeError("regenerate() is not re-entrant")
        if not (self._dirty or force or self._mesh is None):
            return self._mesh

        self._regenerating = True
        try:
            self._dirty = False
            mesh, segmentation = self._build()
        finally:
            self._regenerating = False

        self._mesh = mesh
        self._segmentation = segmentation
        return mesh

    def _build(self) -> Tuple[MeshBuffers, WallSegmentation]:
        params = self._params
        validator = self._validator

        segmentation = segment_wall(params)
        right_count = segmentation.right.segment_count
        left_count = segmentation.left.segment_count

        state = self._registry.ensure(right_count, left_count)
        self._raise_on_failure(
            validator.validate_variants(state, right_count, left_count, self.atlas))

        geometry = self._builder.build(params, segmentation, state)
        triangles = create_triangles(params.row_count, segmentation.total_columns)
        normals = create_normals(params.row_count, segmentation.total_columns, self._rotation)
        vertices = finalize_vertices(geometry.vertices, self._rotation)

        if len(vertices):
            bounds_min = tuple(float(v) for v in vertices.min(axis=0))
            bounds_max = tuple(float(v) for v in vertices.max(axis=0))
        else:
            bounds_min = bounds_max = (0.0, 0.0, 0.0)

        mesh = MeshBuffers(
            vertices=vertices.astype(np.float32),
            triangles=triangles.astype(np.uint32),
            uv=geometry.uv.astype(np.float32),
            normals=normals.astype(np.float32),
            bounds_min=bounds_min,
            bounds_max=bounds_max,
        )
        self._raise_on_failure(
            validator.validate_mesh(mesh, params.row_count, segmentation.total_columns))

        logger.info(
            "Generated wall: %d columns x %d rows, %d vertices, %d triangles",
            segmentation.total_columns, params.row_count,
            mesh.vertex_count, mesh.triangle_count,
        )
        return mesh, segmentation

    def _raise_on_failure(self, result) -> None:
        for issue in result.warnings:
            logger.warning(str(issue))
        if result.failed:
            logger.error(f"Validation failed at {result.stage}: {len(result.errors)} errors")
            raise ValidationError(result)

    def _default_parameters(self) -> WallParameters:
        if self._settings is None:
            return WallParameters()
        return self._settings.get_default_parameters()
