"""
Surface Mesh Generation
=======================
This module translates SurfaceParameters into a closed triangle mesh.

Why is this file needed?
------------------------
1. Faces: It places four copies of the corner primitive per face, mirrored
   into the four quadrants, and fills the flat centre with one quad.
2. Seams: It stitches neighbouring corners together along the rectangle
   edges, and the front face to the back face along the side walls.
3. Output: It computes UVs and applies the pivot / depth offset.

Corner numbering: 0-3 are the front face (top-left, top-right, bottom-left,
bottom-right), 4-7 the same corners of the back face.
"""
from __future__ import annotations

from enum import IntEnum
import logging
import time
from typing import Optional

import numpy as np

from roundedsurface import config
from roundedsurface.controller.corner_cache import CornerCache, CORNER_CACHE, corner_vertex_counts
from roundedsurface.model.corner_radii import CornerRadii
from roundedsurface.model.mesh_part import MeshPart, Quad
from roundedsurface.model.parameters import RectGeometry, ResolvedSurface, SurfaceParameters, UVMode

logger = logging.getLogger(__name__)


class Corner(IntEnum):
    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_LEFT = 2
    BOTTOM_RIGHT = 3


class Direction(IntEnum):
    X = 0
    Y = 1
    Z = 2


class CornerFeature(IntEnum):
    CORNER_START = 0       # first vertex of a corner face (the pole on that axis)
    STITCH_EDGE_START = 1  # first vertex of a stitch edge


# Stitch (from_corner, to_corner, plane_normal) tuples
Stitch = tuple[int, int, Direction]

FACE_STITCHES: tuple[Stitch, ...] = (
    (Corner.TOP_RIGHT, Corner.TOP_LEFT, Direction.X),
    (Corner.BOTTOM_LEFT, Corner.BOTTOM_RIGHT, Direction.X),
    (Corner.BOTTOM_LEFT, Corner.TOP_LEFT, Direction.Y),
    (Corner.TOP_RIGHT, Corner.BOTTOM_RIGHT, Direction.Y),
)

SIDE_STITCHES: tuple[Stitch, ...] = (
    (4, 0, Direction.Z),
    (1, 5, Direction.Z),
    (2, 6, Direction.Z),
    (7, 3, Direction.Z),
)

# (top_left, top_right, bottom_left, bottom_right) corner indices per wall
SIDE_WALLS: tuple[tuple[Quad, Direction], ...] = (
    ((2, 6, 0, 4), Direction.X),  # left
    ((5, 7, 1, 3), Direction.X),  # right
    ((4, 5, 0, 1), Direction.Y),  # top
    ((2, 3, 6, 7), Direction.Y),  # bottom
)


def corner_reflection(corner: Corner) -> tuple[float, float]:
    match corner:
        case Corner.TOP_LEFT:
            return -1.0, 1.0
        case Corner.TOP_RIGHT:
            return 1.0, 1.0
        case Corner.BOTTOM_LEFT:
            return -1.0, -1.0
        case Corner.BOTTOM_RIGHT:
            return 1.0, -1.0
        case _:
            raise ValueError(f"Unknown corner: {corner!r}")


def corner_feature_index(
    corner_index: int,
    feature: CornerFeature,
    direction: Direction,
    subdivisions: int,
) -> int:
    """
    Index of a corner feature inside a buffer of combined corners.

    Raises:
        ValueError: For a feature/direction combination that does not exist.
            This is a logic defect in the caller, not bad input.
    """
    counts = corner_vertex_counts(subdivisions)

    match (feature, direction):
        case (CornerFeature.CORNER_START, Direction.X):
            local = 0
        case (CornerFeature.CORNER_START, Direction.Y):
            local = counts.vertices_per_face
        case (CornerFeature.CORNER_START, Direction.Z):
            local = 2 * counts.vertices_per_face
        case (CornerFeature.STITCH_EDGE_START, Direction.X):
            local = counts.total_face_vertices
        case (CornerFeature.STITCH_EDGE_START, Direction.Y):
            local = counts.total_face_vertices + counts.vertices_per_stitch_edge
        case (CornerFeature.STITCH_EDGE_START, Direction.Z):
            local = counts.total_face_vertices + 2 * counts.vertices_per_stitch_edge
        case _:
            raise ValueError(f"Invalid corner feature lookup: feature={feature!r}, direction={direction!r}")

    return corner_index * counts.total_vertices + local


def stitch_edges(plane_normal: Direction) -> tuple[Direction, Direction]:
    """The two corner faces that border the plane with the given normal."""
    match plane_normal:
        case Direction.X:
            return Direction.Z, Direction.Y
        case Direction.Y:
            return Direction.X, Direction.Z
        case Direction.Z:
            return Direction.Y, Direction.X
        case _:
            raise ValueError(f"Unknown plane normal: {plane_normal!r}")


def stitch_corner_edges(
    part: MeshPart,
    from_corner: int,
    to_corner: int,
    plane_normal: Direction,
    subdivisions: int,
) -> None:
    """
    Bridge the boundary arcs of two corners that face each other across a plane.

    The boundary arc of a corner in that plane runs along the first face, over
    the seam vertex on the stitch edge, and back along the second face. The
    n - 1 unique rows of each face are joined with one quad each; the last row
    of each face meets the seam vertex in a separate quad.
    """
    n = subdivisions
    first_edge, second_edge = stitch_edges(plane_normal)

    from_first = corner_feature_index(from_corner, CornerFeature.CORNER_START, first_edge, n)
    to_first = corner_feature_index(to_corner, CornerFeature.CORNER_START, first_edge, n)
    from_second = corner_feature_index(from_corner, CornerFeature.CORNER_START, second_edge, n)
    to_second = corner_feature_index(to_corner, CornerFeature.CORNER_START, second_edge, n)

    quads: list[Quad] = []

    # Stitch unique rows. The first face is walked along its row, the
    # second along its column, so the second is bridged in reverse order.
    for i in range(n - 1):
        quads.append((from_first + i, to_first + i, from_first + i + 1, to_first + i + 1))
        quads.append((
            to_second + i * n,
            from_second + i * n,
            to_second + (i + 1) * n,
            from_second + (i + 1) * n,
        ))

    # Stitch seams
    last_first_from = from_first + n - 1
    last_first_to = to_first + n - 1
    last_second_from = from_second + n * (n - 1)
    last_second_to = to_second + n * (n - 1)
    seam_from = corner_feature_index(from_corner, CornerFeature.STITCH_EDGE_START, second_edge, n)
    seam_to = corner_feature_index(to_corner, CornerFeature.STITCH_EDGE_START, second_edge, n)

    quads.append((last_first_from, last_first_to, seam_from, seam_to))
    quads.append((seam_from, seam_to, last_second_from, last_second_to))

    part.add_quads(*quads)


def multi_corner_quad(corner_indices: Quad, direction: Direction, subdivisions: int) -> Quad:
    """Quad spanning the poles of four corners on the given axis."""
    tl, tr, bl, br = corner_indices
    return (
        corner_feature_index(tl, CornerFeature.CORNER_START, direction, subdivisions),
        corner_feature_index(tr, CornerFeature.CORNER_START, direction, subdivisions),
        corner_feature_index(bl, CornerFeature.CORNER_START, direction, subdivisions),
        corner_feature_index(br, CornerFeature.CORNER_START, direction, subdivisions),
    )


class SurfaceMesher:
    """
    Builds rounded surface meshes.

    Stateless apart from the corner cache, so one instance can serve any
    number of surfaces.
    """
    def __init__(self, cache: Optional[CornerCache] = None) -> None:
        self.cache = cache if cache is not None else CORNER_CACHE

    def build(self, parameters: SurfaceParameters, rect: RectGeometry) -> MeshPart:
        """
        Generate the surface mesh.

        Args:
            parameters: Raw parameters, clamped here.
            rect: Rectangle size and pivot of the host transform.

        Returns:
            A new MeshPart owned by the caller.
        """
        start = time.perf_counter()
        surface = parameters.resolve(rect)

        front = self.build_face(surface, surface.front_face_depth, is_front_face=True)
        back = self.build_face(surface, surface.back_face_depth, is_front_face=False)
        mesh = MeshPart.combine(front, back)

        self.build_sides(mesh, surface.corner_subdivisions)
        self.build_uv(mesh, surface)
        mesh.translate(self.surface_offset(surface))
        mesh.name = config.SURFACE_MESH_NAME

        logger.info(
            f"Surface mesh generated: {mesh.n_vertices} vertices, {mesh.n_triangles} triangles "
            f"(n={surface.corner_subdivisions}) in {(time.perf_counter() - start) * 1e3:.2f} ms."
        )
        return mesh

    def build_face(self, surface: ResolvedSurface, face_depth: float, is_front_face: bool) -> MeshPart:
        """
        One planar side of the surface (front or back) with its rounded rim.
        """
        n = surface.corner_subdivisions
        template = self.cache.get(n)
        radii: CornerRadii = surface.corner_radii
        depth_scale = -face_depth if is_front_face else face_depth

        lengths = {
            Corner.TOP_LEFT: radii.top_left,
            Corner.TOP_RIGHT: radii.top_right,
            Corner.BOTTOM_LEFT: radii.bottom_left,
            Corner.BOTTOM_RIGHT: radii.bottom_right,
        }

        corners: list[MeshPart] = []
        for corner in Corner:
            length = lengths[corner]
            rx, ry = corner_reflection(corner)
            part = template.copy()
            part.scale((rx * length, ry * length, depth_scale))
            part.translate(self.corner_offset(surface, corner, length, face_depth, is_front_face))
            # With the front face's negative depth scale, top-right and bottom-left
            # mirror an odd number of axes. The back face is flipped as a whole below.
            if rx * ry > 0:
                part.flip_triangle_faces()
            corners.append(part)

        face = MeshPart.combine(*corners)
        face.add_quad(multi_corner_quad(
            (Corner.TOP_LEFT, Corner.TOP_RIGHT, Corner.BOTTOM_LEFT, Corner.BOTTOM_RIGHT),
            Direction.Z,
            n,
        ))

        for from_corner, to_corner, plane_normal in FACE_STITCHES:
            stitch_corner_edges(face, from_corner, to_corner, plane_normal, n)

        if not is_front_face:
            face.flip_triangle_faces()

        return face

    @staticmethod
    def build_sides(mesh: MeshPart, subdivisions: int) -> None:
        """Close the side walls between the front (0-3) and back (4-7) corners."""
        for from_corner, to_corner, plane_normal in SIDE_STITCHES:
            stitch_corner_edges(mesh, from_corner, to_corner, plane_normal, subdivisions)

        mesh.add_quads(*(multi_corner_quad(quad, direction, subdivisions) for quad, direction in SIDE_WALLS))

    @staticmethod
    def build_uv(mesh: MeshPart, surface: ResolvedSurface) -> None:
        """Planar projection of the positions onto the XY plane."""
        xy = mesh.positions[:, :2]
        match surface.uv_mode:
            case UVMode.NORMALIZED:
                size = np.asarray(surface.rect.size, dtype=np.float64)
                # A collapsed axis maps onto the centre line instead of dividing by zero
                scale = np.divide(1.0, size, out=np.zeros(2), where=size > 0.0)
                mesh.uv = xy * scale + 0.5
            case UVMode.UNIT_SQUARE:
                mesh.uv = xy.copy()
            case _:
                raise ValueError(f"Unknown UV mode: {surface.uv_mode!r}")

    @staticmethod
    def surface_offset(surface: ResolvedSurface) -> tuple[float, float, float]:
        """Move the rect centre to match the pivot and push the surface back by the depth bias."""
        (width, height), (px, py) = surface.rect.size, surface.rect.pivot
        return (
            width / 2.0 - px * width,
            height / 2.0 - py * height,
            surface.depth_offset,
        )

    @staticmethod
    def corner_offset(
        surface: ResolvedSurface,
        corner: Corner,
        corner_size: float,
        depth: float,
        is_front_face: bool,
    ) -> tuple[float, float, float]:
        """Centre of a corner's sphere: inset by its radius from the rect corner."""
        rx, ry = corner_reflection(corner)
        width, height = surface.rect.size
        offset_depth = depth if is_front_face else surface.surface_depth - depth
        return (
            (width / 2.0 - corner_size) * rx,
            (height / 2.0 - corner_size) * ry,
            offset_depth,
        )


def build_surface(
    rect_size: tuple[float, float],
    corner_radii: CornerRadii,
    surface_depth: float,
    front_face_depth: float,
    back_face_depth: float,
    corner_subdivisions: int = config.DEFAULT_CORNER_SUBDIVISIONS,
    pivot: tuple[float, float] = config.DEFAULT_PIVOT,
    uv_mode: UVMode = UVMode.NORMALIZED,
    depth_offset: float = config.DEFAULT_DEPTH_OFFSET,
) -> MeshPart:
    """Convenience wrapper around SurfaceMesher().build(...)."""
    parameters = SurfaceParameters(
        corner_radii=corner_radii,
        surface_depth=surface_depth,
        front_face_depth=front_face_depth,
        back_face_depth=back_face_depth,
        corner_subdivisions=corner_subdivisions,
        depth_offset=depth_offset,
        uv_mode=uv_mode,
    )
    return SurfaceMesher().build(parameters, RectGeometry(size=rect_size, pivot=pivot))
