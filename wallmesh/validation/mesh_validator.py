"""
MeshValidator runs the checks of each regeneration stage.

WallMeshGenerator calls validate_variants() once the variant registry is up
to date and validate_mesh() once the buffers are built; a failed result
stops the buffers from being published.
"""

import logging
from collections import deque
from typing import Deque, List, Optional

from .core import Severity, ValidationResult, ValidationStage
from .checks.mesh_checks import (
    check_finite,
    check_index_bounds,
    check_parallel_buffers,
    check_triangle_count,
    check_unit_normals,
    check_vertex_count,
)
from .checks.variant_checks import check_selectable_tiles, check_tile_counts

logger = logging.getLogger(__name__)

# Results kept per validator; older ones are dropped
HISTORY_LIMIT = 64


class MeshValidator:
    """Stage validator with optional strict mode.

    Attributes:
        strict_mode: Promote WARN issues to FAIL
        enabled: When False every stage passes without running checks
        history_limit: Number of recent results kept by get_history()
    """

    def __init__(self, strict_mode: bool = False, enabled: bool = True,
                 history_limit: int = HISTORY_LIMIT):
        self.strict_mode = strict_mode
        self.enabled = enabled
        self._history: Deque[ValidationResult] = deque(maxlen=history_limit)

    def validate_variants(self, state, right_count: int, left_count: int,
                          atlas) -> ValidationResult:
        """VAR-001 and VAR-002 on a TextureVariantState."""
        result = ValidationResult(stage=ValidationStage.VARIANTS)
        if not self.enabled:
            return result
        result.extend(check_tile_counts(state, right_count, left_count, location="variants"))
        result.extend(check_selectable_tiles(state, atlas, location="variants"))
        return self._finish(result)

    def validate_mesh(self, mesh, row_count: int, total_columns: int) -> ValidationResult:
        """MESH-001 to MESH-006 on freshly built MeshBuffers.

        Args:
            mesh: MeshBuffers
            row_count: Rows of the front and back faces
            total_columns: Right plus left segment count
        """
        result = ValidationResult(stage=ValidationStage.GENERATION)
        if not self.enabled:
            return result

        quads = 4 + 2 * row_count * total_columns
        result.extend(check_vertex_count(mesh.vertices, quads, location="vertices"))
        result.extend(check_triangle_count(mesh.triangles, quads, location="triangles"))
        result.extend(check_index_bounds(mesh.triangles, len(mesh.vertices), location="triangles"))
        result.extend(check_parallel_buffers(mesh.vertices, mesh.uv, mesh.normals))
        result.extend(check_finite({
            "vertices": mesh.vertices,
            "uv": mesh.uv,
            "normals": mesh.normals,
        }))
        result.extend(check_unit_normals(mesh.normals, location="normals"))
        return self._finish(result)

    @property
    def history_limit(self) -> int:
        return self._history.maxlen

    def get_history(self) -> List[ValidationResult]:
        """The most recent stage results, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def _finish(self, result: ValidationResult) -> ValidationResult:
        if self.strict_mode:
            for issue in result.warnings:
                issue.severity = Severity.FAIL
        if result.issues:
            logger.debug("%s", result.report())
        self._history.append(result)
        return result


_default_validator: Optional[MeshValidator] = None


def get_validator(strict_mode: Optional[bool] = None,
                  enabled: Optional[bool] = None) -> MeshValidator:
    """Process-wide validator for callers that want one shared configuration.

    Generators do not use it unless it is passed to them explicitly.

    Arguments that are not None update the shared instance.
    """
    global _default_validator

    if _default_validator is None:
        _default_validator = MeshValidator()
    if strict_mode is not None:
        _default_validator.strict_mode = strict_mode
    if enabled is not None:
        _default_validator.enabled = enabled
    return _default_validator


def reset_validator() -> None:
    """Drop the shared validator; the next get_validator() creates a new one."""
    global _default_validator
    _default_validator = None
