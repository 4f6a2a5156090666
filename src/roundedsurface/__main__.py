"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from roundedsurface import config
from roundedsurface.controller.mesher import SurfaceMesher
from roundedsurface.logging_config import setup_logging
from roundedsurface.model.corner_radii import CornerRadii
from roundedsurface.model.io import export_mesh
from roundedsurface.model.parameters import RectGeometry, SurfaceParameters, UVMode

logger = logging.getLogger("roundedsurface.cli")

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roundedsurface",
        description="Generate a rounded rectangular prism mesh.",
    )
    parser.add_argument("--size", nargs=2, type=float, metavar=("WIDTH", "HEIGHT"),
                        default=config.DEFAULT_RECT_SIZE, help="Rectangle size.")
    parser.add_argument("--pivot", nargs=2, type=float, metavar=("PX", "PY"),
                        default=config.DEFAULT_PIVOT, help="Normalized pivot (0-1 per axis).")
    parser.add_argument("--radius", type=float, default=None,
                        help="Radius for all four corners (overridden by --radii).")
    parser.add_argument("--radii", nargs=4, type=float, default=None,
                        metavar=("TL", "TR", "BL", "BR"), help="Per-corner radii.")
    parser.add_argument("--depth", type=float, default=0.0, help="Total surface depth.")
    parser.add_argument("--front-depth", type=float, default=0.0, help="Front face bevel depth.")
    parser.add_argument("--back-depth", type=float, default=0.0, help="Back face bevel depth.")
    parser.add_argument("--subdivisions", type=int, default=config.DEFAULT_CORNER_SUBDIVISIONS,
                        help="Corner subdivision count.")
    parser.add_argument("--uv-mode", choices=[m.value for m in UVMode], default=UVMode.NORMALIZED.value,
                        help="Texture coordinate projection.")
    parser.add_argument("--depth-offset", type=float, default=config.DEFAULT_DEPTH_OFFSET,
                        help="Depth bias added to every vertex.")
    parser.add_argument("-o", "--output", default=None,
                        help=f"Export path, format by extension (e.g. {config.DEFAULT_EXPORT_PATH}).")
    parser.add_argument("--show", action="store_true", help="Open a preview window.")
    parser.add_argument("--show-uv", action="store_true", help="Colour the preview by U coordinate.")
    parser.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                        help="Logging level (default: INFO or $%s)." % config.LOG_LEVEL_ENV_VAR)
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    return parser


def parameters_from_args(args: argparse.Namespace) -> tuple[SurfaceParameters, RectGeometry]:
    if args.radii is not None:
        radii = CornerRadii(*args.radii)
    elif args.radius is not None:
        radii = CornerRadii.uniform(args.radius)
    else:
        radii = CornerRadii()

    parameters = SurfaceParameters(
        corner_radii=radii,
        surface_depth=args.depth,
        front_face_depth=args.front_depth,
        back_face_depth=args.back_depth,
        corner_subdivisions=args.subdivisions,
        depth_offset=args.depth_offset,
        uv_mode=UVMode(args.uv_mode),
    )
    rect = RectGeometry(size=tuple(args.size), pivot=tuple(args.pivot))
    return parameters, rect


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level or config.get_log_level(), log_file=args.log_file)

    parameters, rect = parameters_from_args(args)
    mesh = SurfaceMesher().build(parameters, rect)

    if args.output:
        try:
            export_mesh(mesh, args.output)
        except Exception as e:
            logger.error(f"Export failed: {e}")
            return 1

    if args.show or args.show_uv:
        # Delayed import: the preview pulls in VTK, which plain exports do not need
        from roundedsurface.view.preview import show_surface
        show_surface(mesh, show_uv=args.show_uv)

    if not args.output and not (args.show or args.show_uv):
        lo, hi = mesh.bounds()
        print(f"{mesh.name}: {mesh.n_vertices} vertices, {mesh.n_triangles} triangles, "
              f"bounds {lo.round(4).tolist()} - {hi.round(4).tolist()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
