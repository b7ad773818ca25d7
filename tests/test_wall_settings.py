import tempfile
import unittest
from pathlib import Path

from wallmesh.generators.wall import WallParameters
from wallmesh.generators.wall.wall_settings import DEFAULT_VALUES, SETTING_KEYS, WallSettings


class TestWallSettings(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "wall.ini"
        self.settings = WallSettings(path=self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_builtin_defaults(self):
        self.assertEqual(self.settings.get_all_values(), DEFAULT_VALUES)
        self.assertEqual(self.settings.get_default_parameters(), WallParameters())
        self.assertEqual(self.settings.atlas_image, "")

    def test_set_and_get(self):
        self.settings.set_value("height", 4.0)
        self.settings.set_value("row_count", 3)
        self.assertEqual(self.settings.get_value("height"), 4.0)
        self.assertEqual(self.settings.get_value("row_count"), 3)
        self.assertIsInstance(self.settings.get_value("row_count"), int)

    def test_unknown_names(self):
        with self.assertRaises(KeyError):
            self.settings.get_value("colour")
        self.settings.set_value("colour", "red")
        self.assertNotIn("colour", self.settings.get_all_values())

    def test_persisted_between_instances(self):
        params = WallParameters(depth=0.5, height=3.0, width_right=4.0, width_left=-2.0,
                                row_count=2, texture_offset=(0.1, 0.2), texture_scale=0.5)
        self.settings.save_parameters(params)
        self.settings.set_value("atlas_image", "textures/wall.png")

        reloaded = WallSettings(path=self.path)
        self.assertEqual(reloaded.get_default_parameters(), params)
        self.assertEqual(reloaded.atlas_image, "textures/wall.png")

    def test_reset_to_defaults(self):
        self.settings.set_value("width_right", 8.0)
        self.settings.reset_to_defaults()
        self.assertEqual(self.settings.get_value("width_right"), DEFAULT_VALUES["width_right"])

    def test_every_key_has_default(self):
        self.assertEqual(set(SETTING_KEYS), set(DEFAULT_VALUES))


if __name__ == '__main__':
    unittest.main()
