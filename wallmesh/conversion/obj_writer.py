"""
Wavefront OBJ export for generated wall meshes.

Positions, texture coordinates and normals of MeshBuffers share one index
per vertex, so every face is written as `f i/i/i j/j/j k/k/k`. An optional
.mtl next to the .obj references the texture atlas.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Face = Tuple[int, int, int]


class ObjWriter:
    """Collects wall meshes and writes them into a single OBJ file."""

    def __init__(self):
        self._meshes: List[Tuple[object, str]] = []

    def add_mesh(self, mesh, material: str = "wall"):
        """Queue a mesh; its indices are shifted past earlier meshes on write.

        Empty meshes are skipped.

        Args:
            mesh: MeshBuffers
            material: Material name used for all of its faces
        """
        if mesh.is_empty:
            logger.warning("Skipping empty mesh for material %s", material)
            return
        self._meshes.append((mesh, material))

    @property
    def vertex_count(self) -> int:
        return sum(len(mesh.vertices) for mesh, _ in self._meshes)

    @property
    def face_count(self) -> int:
        return sum(len(mesh.triangles) // 3 for mesh, _ in self._meshes)

    @property
    def materials(self) -> List[str]:
        return sorted({material for _, material in self._meshes})

    def _faces_by_material(self) -> Dict[str, List[Face]]:
        faces: Dict[str, List[Face]] = {}
        base = 1  # OBJ indices are 1-based
        for mesh, material in self._meshes:
            triangles = np.asarray(mesh.triangles, dtype=np.int64).reshape(-1, 3) + base
            faces.setdefault(material, []).extend(
                (int(a), int(b), int(c)) for a, b, c in triangles)
            base += len(mesh.vertices)
        return faces

    def write(self, obj_path: str, write_mtl: bool = True, texture_path: Optional[str] = None):
        """Write the .obj and, unless disabled, a .mtl with the same stem.

        Args:
            obj_path: Output .obj path
            write_mtl: Also write <stem>.mtl next to the .obj
            texture_path: Atlas image referenced as map_Kd, if any
        """
        obj_p = Path(obj_path)
        mtl_p = obj_p.with_suffix(".mtl")

        with open(obj_p, "w") as f:
            f.write("# wallmesh OBJ export\n")
            f.write(f"# {self.vertex_count} vertices, {self.face_count} faces\n")
            if write_mtl:
                f.write(f"mtllib {mtl_p.name}\n")
            f.write("\n")

            for mesh, _ in self._meshes:
                for x, y, z in mesh.vertices:
                    f.write(f"v {x:.6f} {y:.6f} {z:.6f}\n")
            for mesh, _ in self._meshes:
                for u, v in mesh.uv:
                    f.write(f"vt {u:.6f} {v:.6f}\n")
            for mesh, _ in self._meshes:
                for x, y, z in mesh.normals:
                    f.write(f"vn {x:.6f} {y:.6f} {z:.6f}\n")
            f.write("\n")

            for material, faces in sorted(self._faces_by_material().items()):
                f.write(f"usemtl {material}\n")
                for a, b, c in faces:
                    f.write(f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}\n")

        logger.info("Wrote %s (%d vertices, %d faces)", obj_p, self.vertex_count, self.face_count)

        if write_mtl:
            self._write_mtl(mtl_p, texture_path)

    def _write_mtl(self, mtl_path: Path, texture_path: Optional[str] = None):
        with open(mtl_path, "w") as f:
            f.write("# wallmesh MTL\n")
            for material in self.materials:
                f.write(f"\nnewmtl {material}\n")
                f.write("Kd 1.0 1.0 1.0\n")
                f.write("illum 1\n")
                if texture_path:
                    f.write(f"map_Kd {texture_path}\n")


def write_obj(mesh, obj_path: str, material: str = "wall", write_mtl: bool = True,
              texture_path: Optional[str] = None) -> ObjWriter:
    """Export one mesh in one call."""
    writer = ObjWriter()
    writer.add_mesh(mesh, material)
    writer.write(obj_path, write_mtl=write_mtl, texture_path=texture_path)
    return writer
