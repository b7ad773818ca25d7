import unittest

import numpy as np

from wallmesh.generators.wall.topology import (
    QUAD_PATTERN, create_normals, create_triangles, quad_count,
)
from wallmesh.generators.wall.transform import Quaternion


class TestTriangles(unittest.TestCase):
    def test_length(self):
        for rows in (1, 2, 5):
            for columns in (2, 3, 7):
                triangles = create_triangles(rows, columns)
                self.assertEqual(len(triangles), 6 * (4 + 2 * rows * columns))
                self.assertEqual(quad_count(rows, columns), 4 + 2 * rows * columns)

    def test_pattern_shifted_per_quad(self):
        triangles = create_triangles(1, 2)
        self.assertEqual(list(triangles[:6]), list(QUAD_PATTERN))
        self.assertEqual(list(triangles[6:12]), [4, 5, 6, 5, 7, 6])
        self.assertEqual(triangles.dtype, np.uint32)

    def test_indices_in_range(self):
        triangles = create_triangles(3, 4)
        vertex_count = 4 * quad_count(3, 4)
        self.assertEqual(int(triangles.max()), vertex_count - 1)


class TestNormals(unittest.TestCase):
    def test_local_directions(self):
        normals = create_normals(1, 2, Quaternion.identity())
        self.assertEqual(normals.shape, (32, 3))
        expected = (
            [(0, 1, 0)] * 4 + [(0, -1, 0)] * 4 + [(0, 0, 1)] * 4 + [(0, 0, -1)] * 4
            + [(1, 0, 0)] * 8 + [(-1, 0, 0)] * 8
        )
        np.testing.assert_array_equal(normals, np.array(expected, dtype=np.float64))

    def test_rows_repeat_face_normal(self):
        normals = create_normals(3, 2, Quaternion.identity())
        front = normals[16:16 + 3 * 2 * 4]
        self.assertTrue(np.all(front == (1.0, 0.0, 0.0)))

    def test_rotated_with_the_wall(self):
        rotation = Quaternion.from_axis_angle((0, 1, 0), 90)
        normals = create_normals(1, 2, rotation)
        np.testing.assert_allclose(normals[16], (0, 0, -1), atol=1e-12)
        np.testing.assert_allclose(normals[8], (1, 0, 0), atol=1e-12)
        np.testing.assert_allclose(normals[0], (0, 1, 0), atol=1e-12)
        np.testing.assert_allclose(np.linalg.norm(normals, axis=1), 1.0)


if __name__ == '__main__':
    unittest.main()
