"""
Checks on the texture variant state before it is turned into UVs.
"""

from typing import List, Optional

from ..core import ValidationIssue
from ..rules import VAR_001, VAR_002


def check_tile_counts(state, right_count: int, left_count: int,
                      location: Optional[str] = None) -> List[ValidationIssue]:
    """One tile per segment on each side (VAR-001).

    Args:
        state: TextureVariantState after ensure()
        right_count: Right segment count
        left_count: Left segment count
        location: Prefix for issue locations
    """
    sides = (("right", state.right_tiles, right_count),
             ("left", state.left_tiles, left_count))
    return [
        VAR_001.issue(location, side=side, actual=len(tiles), expected=expected)
        for side, tiles, expected in sides
        if len(tiles) != expected
    ]


def check_selectable_tiles(state, atlas,
                           location: Optional[str] = None) -> List[ValidationIssue]:
    """Segments and side faces only use selectable tiles (VAR-002)."""
    slots = [(f"right[{i}]", t) for i, t in enumerate(state.right_tiles)]
    slots += [(f"left[{i}]", t) for i, t in enumerate(state.left_tiles)]
    slots.append(("side", state.side_tile))
    return [
        VAR_002.issue(f"{location}:{slot}" if location else slot,
                      tile=tile, cells=atlas.cell_count)
        for slot, tile in slots
        if not atlas.is_selectable(tile)
    ]
