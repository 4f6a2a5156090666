"""
Surface Parameters (Data Model)
===============================
Pure inputs of a surface build.

Why is this file needed?
------------------------
1. Inputs: It groups everything the mesher needs (radii, depths, resolution,
   UV mode) separately from the rectangle supplied by the host transform.
2. Clamping: Out-of-range values are never rejected. `resolve()` clamps them
   to the nearest valid value, so a live edit always produces a mesh.

Classes:
    UVMode: Texture coordinate projection.
    RectGeometry: Rectangle size and pivot from the transform provider.
    SurfaceParameters: Raw user-facing parameters.
    ResolvedSurface: Clamped values the mesher actually consumes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import logging

from roundedsurface import config
from roundedsurface.model.corner_radii import CornerRadii

logger = logging.getLogger(__name__)


class UVMode(StrEnum):
    """How positions are projected onto texture coordinates."""
    NORMALIZED = "normalized"    # xy / rect size + 0.5, the rect covers [0, 1]^2
    UNIT_SQUARE = "unit-square"  # xy in rect units, centred on the rect centre


@dataclass(frozen=True)
class RectGeometry:
    """Rectangle size (width, height) and normalized pivot (px, py)."""
    size: tuple[float, float] = config.DEFAULT_RECT_SIZE
    pivot: tuple[float, float] = config.DEFAULT_PIVOT

    @property
    def width(self) -> float:
        return self.size[0]

    @property
    def height(self) -> float:
        return self.size[1]

    def clamped(self) -> RectGeometry:
        """Copy with negative dimensions raised to zero."""
        return RectGeometry(
            size=(max(0.0, float(self.size[0])), max(0.0, float(self.size[1]))),
            pivot=(float(self.pivot[0]), float(self.pivot[1])),
        )


@dataclass
class SurfaceParameters:
    corner_radii: CornerRadii = field(default_factory=CornerRadii)
    surface_depth: float = 0.0
    front_face_depth: float = 0.0
    back_face_depth: float = 0.0
    corner_subdivisions: int = config.DEFAULT_CORNER_SUBDIVISIONS
    depth_offset: float = config.DEFAULT_DEPTH_OFFSET
    uv_mode: UVMode = UVMode.NORMALIZED

    def resolve(self, rect: RectGeometry) -> ResolvedSurface:
        """
        Clamp every parameter against the rectangle.

        - radii to [0, min(width, height) / 2]
        - surface depth to >= 0
        - each face depth to [0, surface_depth / 2], independently
        - subdivisions to >= 1
        """
        rect = rect.clamped()
        max_radius = min(rect.width, rect.height) / 2.0
        radii = self.corner_radii.clamped(max_radius)

        surface_depth = max(0.0, float(self.surface_depth))
        max_face_depth = surface_depth / 2.0
        front = min(max(0.0, float(self.front_face_depth)), max_face_depth)
        back = min(max(0.0, float(self.back_face_depth)), max_face_depth)
        subdivisions = max(1, int(self.corner_subdivisions))

        if radii != self.corner_radii:
            logger.debug(f"Corner radii clamped to {radii} (max {max_radius:g}).")
        if (front, back) != (self.front_face_depth, self.back_face_depth):
            logger.debug(f"Face depths clamped to front={front:g}, back={back:g}.")
        if subdivisions != self.corner_subdivisions:
            logger.debug(f"Corner subdivisions clamped to {subdivisions}.")

        return ResolvedSurface(
            rect=rect,
            corner_radii=radii,
            surface_depth=surface_depth,
            front_face_depth=front,
            back_face_depth=back,
            corner_subdivisions=subdivisions,
            depth_offset=float(self.depth_offset),
            uv_mode=UVMode(self.uv_mode),
        )


@dataclass(frozen=True)
class ResolvedSurface:
    """Clamped, ready-to-mesh parameters. Built by SurfaceParameters.resolve."""
    rect: RectGeometry
    corner_radii: CornerRadii
    surface_depth: float
    front_face_depth: float
    back_face_depth: float
    corner_subdivisions: int
    depth_offset: float
    uv_mode: UVMode
