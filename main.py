#!/usr/bin/env python3
"""
wallmesh - Command Line Entry Point

Builds one wall from the given parameters and writes it as Wavefront OBJ.
Parameters that are not given fall back to the stored wall defaults.
"""

import argparse
import logging
import random
import sys

from wallmesh.conversion import write_obj
from wallmesh.generators.wall import Quaternion, WallMeshGenerator
from wallmesh.generators.wall.wall_settings import WALL_SETTINGS
from wallmesh.validation import ValidationError

logger = logging.getLogger("wallmesh")

# CLI option -> WallParameters field
PARAMETER_OPTIONS = {
    "depth": "depth",
    "height": "height",
    "width_right": "width_right",
    "width_left": "width_left",
    "rows": "row_count",
    "texture_scale": "texture_scale",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a segmented, texture-tiled wall mesh as OBJ",
    )
    parser.add_argument("output", help="Output .obj path")
    parser.add_argument("--depth", type=float, help="Half extent front/back")
    parser.add_argument("--height", type=float, help="Wall height")
    parser.add_argument("--width-right", type=float, help="Extent right of the seam (> 0)")
    parser.add_argument("--width-left", type=float, help="Extent left of the seam (< 0)")
    parser.add_argument("--rows", type=int, help="Row subdivisions of the front/back faces")
    parser.add_argument("--texture-offset", type=float, nargs=2, metavar=("U", "V"),
                        help="Offset of the outer faces' UV block")
    parser.add_argument("--texture-scale", type=float, help="Scale of the outer faces' UV block")
    parser.add_argument("--rotation", type=float, nargs=3, metavar=("X", "Y", "Z"),
                        default=(0.0, 0.0, 0.0), help="Euler rotation in degrees")
    parser.add_argument("--seed", type=int, help="Seed for texture variant selection")
    parser.add_argument("--reroll", action="store_true",
                        help="Re-roll the texture variants once before writing")
    parser.add_argument("--texture", help="Atlas image for the MTL (default: stored setting)")
    parser.add_argument("--no-mtl", action="store_true", help="Do not write an .mtl file")
    parser.add_argument("--save-defaults", action="store_true",
                        help="Store the resulting parameters as the new defaults")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    updates = {}
    for option, field_name in PARAMETER_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            updates[field_name] = value
    if args.texture_offset is not None:
        updates["texture_offset"] = tuple(args.texture_offset)

    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        generator = WallMeshGenerator(
            rotation=Quaternion.from_euler(*args.rotation),
            rng=rng,
            settings=WALL_SETTINGS,
        )
        generator.apply_params(updates)
    except ValueError as e:
        logger.error(f"Invalid wall parameters: {e}")
        return 2

    try:
        mesh = generator.regenerate()
        if args.reroll:
            generator.reroll_texture_variants()
            mesh = generator.regenerate()
    except ValidationError as e:
        logger.error(str(e))
        return 1

    texture = args.texture if args.texture is not None else WALL_SETTINGS.atlas_image
    write_obj(mesh, args.output, write_mtl=not args.no_mtl, texture_path=texture or None)

    if args.save_defaults:
        WALL_SETTINGS.save_parameters(generator.parameters)
        logger.info("Stored wall defaults")

    return 0


if __name__ == "__main__":
    sys.exit(main())
