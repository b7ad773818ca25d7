"""
Persistent wall defaults stored in QSettings.

Holds the parameters a wall is reset to when its mesh is deleted, and the
atlas image referenced by exported materials.

Usage:
    from wallmesh.generators.wall.wall_settings import WALL_SETTINGS

    # Parameters for a fresh wall
    params = WALL_SETTINGS.get_default_parameters()

    # Change a single default
    WALL_SETTINGS.set_value("height", 4.0)

    # Reset to built-in defaults
    WALL_SETTINGS.reset_to_defaults()
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from PyQt5.QtCore import QSettings

from .parameters import WallParameters

# Settings keys and their built-in values
DEFAULT_VALUES: Dict[str, Any] = {
    "depth": 1.0,
    "height": 2.0,
    "width_right": 1.0,
    "width_left": -1.0,
    "row_count": 1,
    "texture_offset_x": 0.0,
    "texture_offset_y": 0.0,
    "texture_scale": 0.25,
    "atlas_image": "",
}

SETTING_KEYS = list(DEFAULT_VALUES.keys())


class WallSettings:
    """Wall defaults stored in QSettings.

    Empty or missing values fall back to DEFAULT_VALUES. QSettings is
    accessed lazily so that the store can be created at import time.
    """

    def __init__(self, organization: str = "WallMesh", application: str = "WallDefaults",
                 path: Optional[Union[str, Path]] = None):
        """Initialize wall settings.

        Args:
            organization: QSettings organization name
            application: QSettings application name
            path: Optional INI file; overrides the native store when given
        """
        self._organization = organization
        self._application = application
        self._path = str(path) if path is not None else None
        self._settings = None

    def _get_settings(self) -> QSettings:
        """Get or create the QSettings instance.

        Recreates the instance when the underlying C++ object was deleted.
        """
        try:
            if self._settings is not None:
                # Will throw if the wrapped object is gone
                self._settings.fileName()
                return self._settings
        except RuntimeError:
            pass

        if self._path is not None:
            self._settings = QSettings(self._path, QSettings.IniFormat)
        else:
            self._settings = QSettings(self._organization, self._application)
        return self._settings

    def get_value(self, name: str) -> Any:
        """Get a setting, converted to the type of its built-in default.

        Args:
            name: One of SETTING_KEYS

        Returns:
            The stored value if set, otherwise the built-in default.
        """
        if name not in DEFAULT_VALUES:
            raise KeyError(f"unknown wall setting: {name}")
        default = DEFAULT_VALUES[name]
        try:
            value = self._get_settings().value(f"wall/{name}", None)
        except RuntimeError:
            return default
        if value is None or value == "":
            return default
        try:
            return type(default)(value)
        except (TypeError, ValueError):
            return default

    def set_value(self, name: str, value: Any):
        """Store a setting.

        Args:
            name: One of SETTING_KEYS (unknown names are ignored)
            value: New value
        """
        if name in DEFAULT_VALUES:
            try:
                settings = self._get_settings()
                settings.setValue(f"wall/{name}", value)
                settings.sync()
            except RuntimeError:
                # QSettings not available, ignore
                pass

    def get_all_values(self) -> Dict[str, Any]:
        """Get every setting (custom or default)."""
        return {name: self.get_value(name) for name in SETTING_KEYS}

    def get_default_parameters(self) -> WallParameters:
        """WallParameters built from the stored defaults."""
        values = self.get_all_values()
        return WallParameters(
            depth=values["depth"],
            height=values["height"],
            width_right=values["width_right"],
            width_left=values["width_left"],
            row_count=values["row_count"],
            texture_offset=(values["texture_offset_x"], values["texture_offset_y"]),
            texture_scale=values["texture_scale"],
        )

    def save_parameters(self, params: WallParameters):
        """Store params as the new defaults."""
        self.set_value("depth", float(params.depth))
        self.set_value("height", float(params.height))
        self.set_value("width_right", float(params.width_right))
        self.set_value("width_left", float(params.width_left))
        self.set_value("row_count", int(params.row_count))
        self.set_value("texture_offset_x", float(params.texture_offset[0]))
        self.set_value("texture_offset_y", float(params.texture_offset[1]))
        self.set_value("texture_scale", float(params.texture_scale))

    @property
    def atlas_image(self) -> str:
        """Atlas image path for exported materials ("" = none)."""
        return self.get_value("atlas_image")

    def reset_to_defaults(self):
        """Clear all custom values, reverting to built-in defaults."""
        try:
            settings = self._get_settings()
            for name in SETTING_KEYS:
                settings.remove(f"wall/{name}")
            settings.sync()
        except RuntimeError:
            pass


# Global singleton instance
WALL_SETTINGS = WallSettings()


__all__ = [
    'WallSettings',
    'WALL_SETTINGS',
    'SETTING_KEYS',
    'DEFAULT_VALUES',
]
