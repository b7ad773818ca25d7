"""
Conversion of generated meshes to file formats.
"""

from .obj_writer import ObjWriter, write_obj

__all__ = [
    'ObjWriter',
    'write_obj',
]
