"""
Width segmentation of the front and back faces.

Each side of the wall (right of the seam and left of the seam) is cut into
full two-unit segments, one texture tile each, plus at most one fractional
segment that absorbs the remainder. Full segments start at the outer edge;
the fractional segment is always the innermost one and touches the seam.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import List

from .parameters import WallParameters

logger = logging.getLogger(__name__)

# Width of one full segment in generation units (one texture tile)
SEGMENT_WIDTH = 2.0

# Remainders closer to zero than this are treated as an even width
REMAINDER_EPSILON = 1e-6


@dataclass(frozen=True)
class Segment:
    """One width slice of the front/back face.

    start is the edge closer to the outer boundary of the wall, end the edge
    closer to the seam. On the left side both are negative.
    """
    start: float
    end: float
    fractional: bool = False

    @property
    def width(self) -> float:
        return abs(self.end - self.start)


@dataclass(frozen=True)
class SideSegmentation:
    """Segmentation of one side, ordered from the outer edge inward."""
    full_segments: int
    remainder: float
    segments: List[Segment] = field(default_factory=list)

    @property
    def additive_segment(self) -> int:
        """1 if a fractional segment sits at the seam, else 0."""
        return 1 if self.remainder > 0.0 else 0

    @property
    def segment_count(self) -> int:
        return self.full_segments + self.additive_segment


@dataclass(frozen=True)
class WallSegmentation:
    """Right and left segmentation of a wall."""
    right: SideSegmentation
    left: SideSegmentation

    @property
    def total_columns(self) -> int:
        return self.right.segment_count + self.left.segment_count


def segment_count(width: float) -> int:
    """Number of segments for a side of the given width (either sign)."""
    return segment_side(width).segment_count


def segment_side(width: float) -> SideSegmentation:
    """Cut one side of the wall into segments.

    Args:
        width: Signed extent of the side; negative values produce a mirrored
            (left side) segmentation.

    Returns:
        SideSegmentation with the full segments first (outer edge) and the
        fractional segment, if any, last (at the seam).
    """
    sign = -1.0 if width < 0 else 1.0
    w = abs(width)

    full = int(math.floor(w / SEGMENT_WIDTH)) if w >= SEGMENT_WIDTH else 0
    remainder = w - SEGMENT_WIDTH * full
    if abs(remainder) < REMAINDER_EPSILON:
        remainder = 0.0

    segments: List[Segment] = []
    outer = w
    for _ in range(full):
        segments.append(Segment(start=sign * outer, end=sign * (outer - SEGMENT_WIDTH)))
        outer -= SEGMENT_WIDTH
    # The innermost segment always ends exactly on the seam
    if remainder > 0.0:
        segments.append(Segment(start=sign * outer, end=0.0, fractional=True))
    elif segments:
        segments[-1] = replace(segments[-1], end=0.0)

    return SideSegmentation(full_segments=full, remainder=remainder, segments=segments)


def segment_wall(params: WallParameters) -> WallSegmentation:
    """Segment both sides of a wall independently."""
    right = segment_side(params.width_right)
    left = segment_side(params.width_left)
    logger.debug(
        "Segmented wall: right=%d full + %d fractional, left=%d full + %d fractional",
        right.full_segments, right.additive_segment,
        left.full_segments, left.additive_segment,
    )
    return WallSegmentation(right=right, left=left)
