"""
Final vertex transform: unit conversion and pivot-preserving rotation.

Generation math works in doubled units so that two units of width equal one
texture tile. finalize_vertices() halves every vertex and rotates the result
about its own bounding-box center; the mesh origin is not translated.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

Vec3 = Tuple[float, float, float]

# Generation units per output unit
UNIT_SCALE = 0.5


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion (w, x, y, z)."""
    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def identity(cls) -> 'Quaternion':
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_axis_angle(cls, axis: Vec3, degrees: float) -> 'Quaternion':
        """Rotation of `degrees` around `axis` (need not be normalized)."""
        ax = np.asarray(axis, dtype=np.float64)
        length = np.linalg.norm(ax)
        if length < 1e-12:
            return cls.identity()
        ax = ax / length
        half = math.radians(degrees) / 2.0
        s = math.sin(half)
        return cls(math.cos(half), float(ax[0] * s), float(ax[1] * s), float(ax[2] * s))

    @classmethod
    def from_euler(cls, x: float, y: float, z: float) -> 'Quaternion':
        """Rotation from Euler angles in degrees.

        Applied in Z, X, Y order (Z first), the convention of scene editors
        with a Y-up, left-handed frame.
        """
        qx = cls.from_axis_angle((1.0, 0.0, 0.0), x)
        qy = cls.from_axis_angle((0.0, 1.0, 0.0), y)
        qz = cls.from_axis_angle((0.0, 0.0, 1.0), z)
        return qy * qx * qz

    def __mul__(self, other: 'Quaternion') -> 'Quaternion':
        """Hamilton product; (a * b) applies b first, then a."""
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z
        return Quaternion(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        )

    def norm(self) -> float:
        return math.sqrt(self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> 'Quaternion':
        n = self.norm()
        if n < 1e-12:
            return Quaternion.identity()
        return Quaternion(self.w / n, self.x / n, self.y / n, self.z / n)

    def is_identity(self, tolerance: float = 1e-12) -> bool:
        q = self.normalized()
        return abs(abs(q.w) - 1.0) < tolerance

    def to_matrix(self) -> np.ndarray:
        """3x3 rotation matrix of the normalized quaternion."""
        q = self.normalized()
        w, x, y, z = q.w, q.x, q.y, q.z
        return np.array([
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ], dtype=np.float64)

    def rotate(self, vector: Vec3) -> Vec3:
        v = self.to_matrix() @ np.asarray(vector, dtype=np.float64)
        return (float(v[0]), float(v[1]), float(v[2]))


def bounds_center(vertices: np.ndarray) -> np.ndarray:
    """Center of the axis-aligned bounding box of an (N, 3) array."""
    if len(vertices) == 0:
        return np.zeros(3, dtype=np.float64)
    return (vertices.min(axis=0) + vertices.max(axis=0)) / 2.0


def finalize_vertices(vertices: np.ndarray, rotation: Quaternion) -> np.ndarray:
    """Halve vertices and rotate them about their bounding-box center.

    Args:
        vertices: (N, 3) positions in generation units
        rotation: Wall rotation supplied by the host

    Returns:
        New (N, 3) float64 array; the input is not modified
    """
    scaled = np.asarray(vertices, dtype=np.float64) * UNIT_SCALE
    if rotation.is_identity():
        return scaled
    pivot = bounds_center(scaled)
    matrix = rotation.to_matrix()
    return (scaled - pivot) @ matrix.T + pivot
