"""
Wall parameters and their clamping policy.

Numeric extents are clamped at the boundary instead of rejected: a wall can
never be thinner, lower or narrower than MIN_EXTENT. A row count below one is
a programming error and raises ValueError.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Tuple

Vec2 = Tuple[float, float]

MIN_EXTENT = 0.1


@dataclass
class WallParameters:
    """Scalar inputs of one wall.

    Widths are measured from the wall's central vertical axis (the seam):
    width_right is positive, width_left is negative. All lengths are in
    generation units, which are halved when the mesh is finalized.
    """
    depth: float = 1.0
    height: float = 2.0
    width_right: float = 1.0
    width_left: float = -1.0
    row_count: int = 1
    texture_offset: Vec2 = (0.0, 0.0)
    texture_scale: float = 0.25

    @classmethod
    def get_parameter_schema(cls) -> Dict[str, Dict[str, Any]]:
        """Return a dict describing each parameter.

        Each key is a parameter name; value is a dict with:
            type: "float" | "int" | "vec2"
            default: default value
            min / max: optional numeric range
            label: human-readable label
        """
        return {
            "depth": {
                "type": "float", "default": 1.0, "min": MIN_EXTENT, "label": "Depth",
                "description": "Half extent from the back face to the front face"
            },
            "height": {
                "type": "float", "default": 2.0, "min": MIN_EXTENT, "label": "Height",
                "description": "Height of the wall above its pivot"
            },
            "width_right": {
                "type": "float", "default": 1.0, "min": MIN_EXTENT, "label": "Right Width",
                "description": "Extent to the right of the seam (two units per texture tile)"
            },
            "width_left": {
                "type": "float", "default": -1.0, "max": -MIN_EXTENT, "label": "Left Width",
                "description": "Extent to the left of the seam, negative"
            },
            "row_count": {
                "type": "int", "default": 1, "min": 1, "label": "Rows",
                "description": "Vertical subdivisions of the front and back faces"
            },
            "texture_offset": {
                "type": "vec2", "default": (0.0, 0.0), "label": "Texture Offset",
                "description": "Offset of the outer faces' UV block inside its atlas cell"
            },
            "texture_scale": {
                "type": "float", "default": 0.25, "label": "Texture Scale",
                "description": "Scale of the outer faces' UV block inside its atlas cell"
            },
        }

    def clamped(self) -> 'WallParameters':
        """Return a copy with every extent snapped to its minimum magnitude.

        Raises:
            ValueError: If row_count < 1 or a value is not finite.
        """
        if int(self.row_count) != self.row_count or self.row_count < 1:
            raise ValueError(f"row_count must be an integer >= 1, got {self.row_count!r}")

        values = (self.depth, self.height, self.width_right, self.width_left,
                  self.texture_scale, *self.texture_offset)
        if not all(math.isfinite(v) for v in values):
            raise ValueError(f"wall parameters must be finite: {self}")

        return replace(
            self,
            depth=max(float(self.depth), MIN_EXTENT),
            height=max(float(self.height), MIN_EXTENT),
            width_right=max(float(self.width_right), MIN_EXTENT),
            width_left=min(float(self.width_left), -MIN_EXTENT),
            row_count=int(self.row_count),
            texture_offset=(float(self.texture_offset[0]), float(self.texture_offset[1])),
            texture_scale=float(self.texture_scale),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WallParameters':
        """Create parameters from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if "texture_offset" in values:
            values["texture_offset"] = tuple(values["texture_offset"])
        return cls(**values)
