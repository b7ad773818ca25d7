import unittest

import numpy as np

from wallmesh.generators.wall.geometry import (
    OUTER_VERTEX_COUNT, WallGeometryBuilder, back_columns, front_columns, row_bounds,
)
from wallmesh.generators.wall.parameters import WallParameters
from wallmesh.generators.wall.segmentation import segment_wall
from wallmesh.generators.wall.texture_variants import TextureAtlas, TextureVariantState


def build(params, state):
    return WallGeometryBuilder().build(params, segment_wall(params), state)


class TestColumnOrder(unittest.TestCase):
    def setUp(self):
        self.params = WallParameters(width_right=4.0, width_left=-3.0)
        self.segmentation = segment_wall(self.params)
        self.state = TextureVariantState(right_tiles=[0, 1], left_tiles=[2, 3], side_tile=4)

    def test_front_walks_right_to_left(self):
        columns = front_columns(self.segmentation, self.state)
        walk = [(c.walk_start, c.walk_end) for c in columns]
        self.assertEqual(walk, [(4.0, 2.0), (2.0, 0.0), (0.0, -1.0), (-1.0, -3.0)])
        self.assertEqual([c.tile for c in columns], [0, 1, 3, 2])

    def test_back_walks_left_to_right(self):
        columns = back_columns(self.segmentation, self.state)
        walk = [(c.walk_start, c.walk_end) for c in columns]
        self.assertEqual(walk, [(-3.0, -1.0), (-1.0, 0.0), (0.0, 2.0), (2.0, 4.0)])
        self.assertEqual([c.tile for c in columns], [2, 3, 1, 0])

    def test_segment_keeps_tile_on_both_faces(self):
        front = {c.segment: c.tile for c in front_columns(self.segmentation, self.state)}
        back = {c.segment: c.tile for c in back_columns(self.segmentation, self.state)}
        self.assertEqual(front, back)

    def test_u_range_measured_from_outer_edge(self):
        front = front_columns(self.segmentation, self.state)
        self.assertEqual(front[0].u_range(), (0.0, 1.0))
        self.assertEqual(front[2].u_range(), (0.5, 0.0))
        self.assertEqual(front[3].u_range(), (1.0, 0.0))


class TestRowBounds(unittest.TestCase):
    def test_last_row_ends_at_height(self):
        rows = row_bounds(WallParameters(height=2.0, row_count=3))
        self.assertEqual(len(rows), 3)
        self.assertEqual(rows[0][0], 0.0)
        self.assertEqual(rows[-1][1], 2.0)
        for (_, top), (bottom, _) in zip(rows, rows[1:]):
            self.assertAlmostEqual(top, bottom)


class TestWallGeometryBuilder(unittest.TestCase):
    def setUp(self):
        self.atlas = TextureAtlas()
        self.params = WallParameters()
        self.state = TextureVariantState(right_tiles=[0], left_tiles=[5], side_tile=2)
        self.geometry = build(self.params, self.state)

    def test_vertex_count(self):
        self.assertEqual(self.geometry.vertices.shape, (32, 3))
        self.assertEqual(self.geometry.uv.shape, (32, 2))
        self.assertEqual(self.geometry.quad_count, 8)

    def test_rows_multiply_face_quads(self):
        params = WallParameters(width_right=4.0, row_count=3)
        state = TextureVariantState(right_tiles=[0, 1], left_tiles=[5], side_tile=2)
        geometry = build(params, state)
        self.assertEqual(len(geometry.vertices), OUTER_VERTEX_COUNT + 2 * 3 * 3 * 4)

    def test_front_quads(self):
        front = self.geometry.vertices[16:24]
        expected = [
            (1, 0, 1), (1, 0, 0), (1, 2, 1), (1, 2, 0),
            (1, 0, 0), (1, 0, -1), (1, 2, 0), (1, 2, -1),
        ]
        np.testing.assert_array_equal(front, np.array(expected, dtype=np.float64))

    def test_back_quads_at_negative_depth(self):
        back = self.geometry.vertices[24:32]
        self.assertTrue(np.all(back[:, 0] == -1.0))
        self.assertEqual(tuple(back[0]), (-1.0, 0.0, -1.0))
        self.assertEqual(tuple(back[-1]), (-1.0, 2.0, 1.0))

    def test_segment_uv_inside_its_tile(self):
        uv = self.geometry.uv
        np.testing.assert_allclose(uv[16:20], [(0, 0), (0.125, 0), (0, 1 / 3), (0.125, 1 / 3)])
        np.testing.assert_allclose(
            uv[20:24],
            [(0.375, 1 / 3), (0.25, 1 / 3), (0.375, 2 / 3), (0.25, 2 / 3)],
        )

    def test_full_segment_spans_whole_tile(self):
        params = WallParameters(width_right=2.0, width_left=-2.0)
        state = TextureVariantState(right_tiles=[6], left_tiles=[1], side_tile=2)
        uv = build(params, state).uv
        u0, v0 = self.atlas.tile_offset(6)
        np.testing.assert_allclose(uv[16:20], [(u0, v0), (u0 + 0.25, v0),
                                               (u0, v0 + 1 / 3), (u0 + 0.25, v0 + 1 / 3)])

    def test_top_and_bottom_use_blank_tile(self):
        u0, v0 = self.atlas.tile_offset(self.atlas.blank_tile)
        uv = self.geometry.uv[:8]
        self.assertTrue(np.all(uv[:, 0] >= u0 - 1e-9))
        self.assertTrue(np.all(uv[:, 1] >= v0 - 1e-9))
        self.assertAlmostEqual(uv[0, 0], 0.25 / 4 + 0.75)
        self.assertAlmostEqual(uv[0, 1], 2 / 3)

    def test_side_faces_use_side_tile(self):
        uv = self.geometry.uv[8:16]
        self.assertAlmostEqual(uv[0, 0], 0.5)
        self.assertAlmostEqual(uv[0, 1], 0.0)
        self.assertTrue(np.all(uv[:, 0] >= 0.5 - 1e-9))

    def test_fractional_segment_uses_part_of_tile(self):
        params = WallParameters(width_right=2.5)
        state = TextureVariantState(right_tiles=[0, 1], left_tiles=[5], side_tile=2)
        uv = build(params, state).uv
        seam_quad = uv[20:24]
        u0, _ = self.atlas.tile_offset(1)
        self.assertAlmostEqual(seam_quad[:, 0].min(), u0)
        self.assertAlmostEqual(seam_quad[:, 0].max(), u0 + 0.25 / 4)


if __name__ == '__main__':
    unittest.main()
