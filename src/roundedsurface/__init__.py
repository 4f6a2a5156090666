"""
roundedsurface
==============
Procedural mesh generator for rounded rectangular prisms with per-corner
radii, independent front/back bevel depths and adjustable corner resolution.

Quick start:
    >>> from roundedsurface import CornerRadii, build_surface
    >>> mesh = build_surface((10.0, 6.0), CornerRadii.uniform(1.0), 1.0, 0.25, 0.25)
"""
from roundedsurface.controller.mesher import SurfaceMesher, build_surface
from roundedsurface.model.corner_radii import CornerIcon, CornerRadii
from roundedsurface.model.mesh_part import MeshPart
from roundedsurface.model.parameters import RectGeometry, SurfaceParameters, UVMode

__all__ = [
    "CornerIcon",
    "CornerRadii",
    "MeshPart",
    "RectGeometry",
    "SurfaceMesher",
    "SurfaceParameters",
    "UVMode",
    "build_surface",
]
