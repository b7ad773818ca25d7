"""
Texture variant bookkeeping for wall segments.

Every segment of the front/back faces shows one tile of a fixed texture
atlas. Tiles are picked at random once and then kept: when the wall grows or
shrinks, tiles are only added or removed at the seam end of a side, so the
segments that survive an edit never change their look.

Usage:
    registry = TextureVariantRegistry(rng=random.Random(7))
    registry.ensure(right_count=2, left_count=1)
    registry.state.right_tiles   # [outermost, ..., seam-adjacent]
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextureAtlas:
    """A fixed grid of columns x rows selectable tiles.

    Tile indices run row by row: column = index % columns, row = index // columns.
    The blank tile (last column, last row) covers the top and bottom faces and
    the pillar tile (first column, last row) is kept for decoration; neither
    is ever drawn for a segment or the side faces.
    """
    columns: int = 4
    rows: int = 3

    @property
    def cell_count(self) -> int:
        return self.columns * self.rows

    @property
    def blank_tile(self) -> int:
        return self.tile_index(self.columns - 1, self.rows - 1)

    @property
    def pillar_tile(self) -> int:
        return self.tile_index(0, self.rows - 1)

    @property
    def reserved_tiles(self) -> FrozenSet[int]:
        return frozenset((self.blank_tile, self.pillar_tile))

    def tile_index(self, column: int, row: int) -> int:
        return row * self.columns + column

    def column_of(self, tile: int) -> int:
        return tile % self.columns

    def row_of(self, tile: int) -> int:
        return tile // self.columns

    def tile_offset(self, tile: int) -> Tuple[float, float]:
        """UV offset of a tile's lower-left corner in atlas space."""
        return (self.column_of(tile) / self.columns, self.row_of(tile) / self.rows)

    def is_selectable(self, tile: int) -> bool:
        """True for in-range tiles that are not reserved."""
        return 0 <= tile < self.cell_count and tile not in self.reserved_tiles


@dataclass
class TextureVariantState:
    """Tile assignment owned by a single wall.

    Attributes:
        right_tiles: One tile per right segment, outer edge first, seam last
        left_tiles: One tile per left segment, outer edge first, seam last
        side_tile: Tile shared by the right and left end faces
        version: Incremented on every mutation
    """
    right_tiles: List[int] = field(default_factory=list)
    left_tiles: List[int] = field(default_factory=list)
    side_tile: int = 0
    version: int = 0

    def copy(self) -> 'TextureVariantState':
        return TextureVariantState(
            right_tiles=list(self.right_tiles),
            left_tiles=list(self.left_tiles),
            side_tile=self.side_tile,
            version=self.version,
        )


class TextureVariantRegistry:
    """Keeps a TextureVariantState in step with the wall's segment counts."""

    def __init__(self, atlas: Optional[TextureAtlas] = None,
                 rng: Optional[random.Random] = None):
        """Initialize the registry.

        Args:
            atlas: Atlas layout (default 4 x 3)
            rng: Random source for tile picks; seed it for reproducible walls
        """
        self.atlas = atlas or TextureAtlas()
        if len(self.atlas.reserved_tiles) >= self.atlas.cell_count:
            raise ValueError(f"atlas {self.atlas} has no selectable tiles")
        self._rng = rng or random.Random()
        self._state: Optional[TextureVariantState] = None

    @property
    def state(self) -> Optional[TextureVariantState]:
        """The current assignment, or None until the first ensure()."""
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    def random_tile(self) -> int:
        """Draw a uniformly distributed, non-reserved tile index."""
        while True:
            tile = self._rng.randrange(self.atlas.cell_count)
            if tile not in self.atlas.reserved_tiles:
                return tile

    def ensure(self, right_count: int, left_count: int) -> TextureVariantState:
        """Bring the tile lists to the given segment counts.

        A fresh registry is seeded with one tile per side and a side tile.
        After that, each unit of change appends a new tile to, or pops the
        last tile from, the seam end of the side that is off target,
        checking the right side before the left. Existing tiles are never
        re-rolled.

        Args:
            right_count: Segments on the right side
            left_count: Segments on the left side

        Returns:
            The updated state
        """
        if right_count < 0 or left_count < 0:
            raise ValueError(f"segment counts must be >= 0, got {right_count}, {left_count}")

        if self._state is None:
            self._state = TextureVariantState(
                right_tiles=[self.random_tile()],
                left_tiles=[self.random_tile()],
                side_tile=self.random_tile(),
            )
            logger.debug("Seeded texture variants: %s", self._state)

        state = self._state
        changed = False
        targets = ((state.right_tiles, right_count, "right"),
                   (state.left_tiles, left_count, "left"))
        while len(state.right_tiles) != right_count or len(state.left_tiles) != left_count:
            for tiles, target, side in targets:
                if len(tiles) < target:
                    tiles.append(self.random_tile())
                    logger.debug("Added %s tile %d at the seam", side, tiles[-1])
                    changed = True
                elif len(tiles) > target:
                    removed = tiles.pop()
                    logger.debug("Removed %s tile %d at the seam", side, removed)
                    changed = True

        if changed:
            state.version += 1
        return state

    def reroll(self) -> None:
        """Pick new tiles for every segment and the side faces."""
        if self._state is None:
            return
        state = self._state
        state.right_tiles = [self.random_tile() for _ in state.right_tiles]
        state.left_tiles = [self.random_tile() for _ in state.left_tiles]
        state.side_tile = self.random_tile()
        state.version += 1
        logger.debug("Re-rolled texture variants: %s", state)

    def reset(self) -> None:
        """Forget all assignments; the next ensure() seeds from scratch."""
        self._state = None
