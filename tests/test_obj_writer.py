import random
import tempfile
import unittest
from pathlib import Path

import numpy as np

from wallmesh.conversion import ObjWriter, write_obj
from wallmesh.generators.wall import MeshBuffers, WallMeshGenerator, WallParameters
from wallmesh.validation import MeshValidator


def generate(params=None):
    generator = WallMeshGenerator(parameters=params, rng=random.Random(5),
                                  validator=MeshValidator())
    return generator.regenerate()


def lines_starting(path, prefix):
    return [line for line in Path(path).read_text().splitlines() if line.startswith(prefix)]


class TestObjWriter(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_write_unit_wall(self):
        mesh = generate()
        obj_path = self.tmp / "wall.obj"
        writer = write_obj(mesh, str(obj_path))
        self.assertEqual(writer.vertex_count, 32)
        self.assertEqual(writer.face_count, 16)
        self.assertEqual(len(lines_starting(obj_path, "v ")), 32)
        self.assertEqual(len(lines_starting(obj_path, "vt ")), 32)
        self.assertEqual(len(lines_starting(obj_path, "vn ")), 32)
        faces = lines_starting(obj_path, "f ")
        self.assertEqual(len(faces), 16)
        self.assertEqual(faces[0], "f 1/1/1 2/2/2 3/3/3")
        self.assertIn("mtllib wall.mtl", obj_path.read_text())
        self.assertTrue((self.tmp / "wall.mtl").exists())

    def test_texture_in_material(self):
        write_obj(generate(), str(self.tmp / "wall.obj"), texture_path="atlas.png")
        mtl = (self.tmp / "wall.mtl").read_text()
        self.assertIn("newmtl wall", mtl)
        self.assertIn("map_Kd atlas.png", mtl)

    def test_without_mtl(self):
        obj_path = self.tmp / "wall.obj"
        write_obj(generate(), str(obj_path), write_mtl=False)
        self.assertFalse((self.tmp / "wall.mtl").exists())
        self.assertNotIn("mtllib", obj_path.read_text())

    def test_empty_mesh_skipped(self):
        empty = MeshBuffers(
            vertices=np.zeros((0, 3), dtype=np.float32),
            triangles=np.zeros(0, dtype=np.uint32),
            uv=np.zeros((0, 2), dtype=np.float32),
            normals=np.zeros((0, 3), dtype=np.float32),
            bounds_min=(0.0, 0.0, 0.0),
            bounds_max=(0.0, 0.0, 0.0),
        )
        self.assertTrue(empty.is_empty)
        writer = ObjWriter()
        writer.add_mesh(empty, material="empty")
        writer.add_mesh(generate())
        self.assertEqual(writer.vertex_count, 32)
        self.assertEqual(writer.materials, ["wall"])

    def test_multiple_meshes_shift_indices(self):
        writer = ObjWriter()
        writer.add_mesh(generate(), material="a")
        writer.add_mesh(generate(WallParameters(width_right=4.0)), material="b")
        obj_path = self.tmp / "walls.obj"
        writer.write(str(obj_path))
        self.assertEqual(writer.vertex_count, 32 + 40)
        text = obj_path.read_text()
        self.assertLess(text.index("usemtl a"), text.index("usemtl b"))
        largest = max(int(i.split("/")[0]) for face in lines_starting(obj_path, "f ")
                      for i in face.split()[1:])
        self.assertEqual(largest, 72)


if __name__ == '__main__':
    unittest.main()
