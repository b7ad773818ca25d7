"""
Rule table of the wall validators.

MESH rules guard the published buffers, VAR rules the texture variant
bookkeeping that feeds the UVs. Checks create issues through
ValidationRule.issue() so that codes, severities and wording live here.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """A rule code with its default severity and message templates.

    Templates use str.format placeholders; message and remediation are
    formatted with the same keyword arguments.
    """
    code: str
    severity: Severity
    message_template: str
    remediation_template: Optional[str] = None
    description: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        if self.remediation_template is None:
            return None
        return self.remediation_template.format(**kwargs)

    def issue(self, location: Optional[str] = None, **kwargs) -> ValidationIssue:
        """Create an issue of this rule."""
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            remediation=self.format_remediation(**kwargs),
            location=location,
        )


# Buffers

MESH_001 = ValidationRule(
    "MESH-001", Severity.FAIL,
    "Triangle buffer length {length} does not match {quad_count} quads (expected {expected})",
    "Emit exactly 6 indices per quad",
    "triangles.length == 6 * (4 + 2 * row_count * total_columns)",
)

MESH_002 = ValidationRule(
    "MESH-002", Severity.FAIL,
    "Triangle index {index} out of range for {vertex_count} vertices",
    "Keep the triangulator and vertex builder on the same quad order",
    "Every triangle index addresses an existing vertex",
)

MESH_003 = ValidationRule(
    "MESH-003", Severity.FAIL,
    "{buffer} has {length} entries but there are {vertex_count} vertices",
    "Emit one {buffer} entry per vertex",
    "uv and normals are parallel to vertices",
)

MESH_004 = ValidationRule(
    "MESH-004", Severity.FAIL,
    "Non-finite value in {buffer}",
    "Check wall parameters and rotation for NaN/inf",
    "All buffer values are finite",
)

MESH_005 = ValidationRule(
    "MESH-005", Severity.WARN,
    "Normal {index} has length {length:.4f}",
    "Use a unit quaternion for the wall rotation",
    "Normals are unit length",
)

MESH_006 = ValidationRule(
    "MESH-006", Severity.FAIL,
    "Vertex count {vertex_count} does not match {quad_count} quads",
    "Emit 4 vertices per quad",
    "vertices.length == 4 * quad_count",
)

# Texture variants

VAR_001 = ValidationRule(
    "VAR-001", Severity.FAIL,
    "{side} side has {actual} tiles for {expected} segments",
    "Call ensure() with the current segment counts before building UVs",
    "One tile per segment on each side after every regeneration",
)

VAR_002 = ValidationRule(
    "VAR-002", Severity.FAIL,
    "Tile {tile} is reserved or outside the {cells}-cell atlas",
    "Draw tiles only through random_tile()",
    "Segments and side faces never use reserved or out-of-range tiles",
)


ALL_RULES = [
    MESH_001, MESH_002, MESH_003, MESH_004, MESH_005, MESH_006,
    VAR_001, VAR_002,
]

RULES_BY_CODE: Dict[str, ValidationRule] = {rule.code: rule for rule in ALL_RULES}


def get_rule(code: str) -> Optional[ValidationRule]:
    return RULES_BY_CODE.get(code)
