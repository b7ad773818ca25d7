import tempfile
import unittest
from pathlib import Path
from unittest import mock

import main
from wallmesh.generators.wall.wall_settings import WallSettings


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.settings = WallSettings(path=self.tmp / "wall.ini")
        patcher = mock.patch.object(main, "WALL_SETTINGS", self.settings)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        self._tmp.cleanup()

    def run_main(self, *args):
        return main.main([str(self.tmp / "wall.obj"), "--seed", "7", *args])

    def vertex_lines(self):
        text = (self.tmp / "wall.obj").read_text()
        return [line for line in text.splitlines() if line.startswith("v ")]

    def test_writes_obj(self):
        self.assertEqual(self.run_main("--width-right", "4", "--rows", "2"), 0)
        self.assertEqual(len(self.vertex_lines()), 4 * (4 + 2 * 2 * 3))
        self.assertTrue((self.tmp / "wall.mtl").exists())

    def test_stored_defaults_used(self):
        self.settings.set_value("width_left", -4.0)
        self.assertEqual(self.run_main(), 0)
        self.assertEqual(len(self.vertex_lines()), 4 * (4 + 2 * 3))

    def test_rotation_and_reroll(self):
        self.assertEqual(self.run_main("--rotation", "0", "90", "0", "--reroll"), 0)
        self.assertEqual(len(self.vertex_lines()), 32)

    def test_no_mtl(self):
        self.assertEqual(self.run_main("--no-mtl"), 0)
        self.assertFalse((self.tmp / "wall.mtl").exists())

    def test_texture_from_settings(self):
        self.settings.set_value("atlas_image", "atlas.png")
        self.assertEqual(self.run_main(), 0)
        self.assertIn("map_Kd atlas.png", (self.tmp / "wall.mtl").read_text())

    def test_invalid_rows(self):
        self.assertEqual(self.run_main("--rows", "0"), 2)
        self.assertFalse((self.tmp / "wall.obj").exists())

    def test_save_defaults(self):
        self.assertEqual(self.run_main("--height", "6", "--save-defaults"), 0)
        self.assertEqual(self.settings.get_value("height"), 6.0)


if __name__ == '__main__':
    unittest.main()
