"""
wallmesh - procedural wall meshes with stable texture-atlas tiling.
"""

__version__ = "0.1.0"
