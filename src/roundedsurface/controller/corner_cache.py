"""
Corner Primitive
================
Builds the curved corner piece shared by every corner of every face.

The corner is made by subdividing the three faces of a unit cube that meet
at (1, 1, 1) and normalizing every grid point onto the unit sphere. The
result is an eighth of a sphere with a uniform triangulation and no
trigonometry per vertex.

Vertex layout for `n` subdivisions:

    [0, n^2)            face X: (1, y/n, x/n)
    [n^2, 2n^2)         face Y: (x/n, 1, y/n)
    [2n^2, 3n^2)        face Z: (y/n, x/n, 1)
    [3n^2, 3n^2 + n)    stitch edge XY: (1, 1, i/n)
    [.., + n)           stitch edge YZ: (i/n, 1, 1)
    [.., + n)           stitch edge XZ: (1, i/n, 1)
    3n^2 + 3n           apex: (1, 1, 1)

(all normalized; a face vertex is stored at face * n^2 + y * n + x)
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
import time

import numpy as np

from roundedsurface.model.mesh_part import MeshPart, Triangle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CornerVertexCounts:
    """Vertex counts of one corner for a given subdivision count."""
    vertices_per_face: int
    total_face_vertices: int
    vertices_per_stitch_edge: int
    total_vertices: int


def corner_vertex_counts(subdivisions: int) -> CornerVertexCounts:
    vertices_per_face = subdivisions * subdivisions
    total_face_vertices = 3 * vertices_per_face
    vertices_per_stitch_edge = subdivisions
    total_vertices = total_face_vertices + 3 * vertices_per_stitch_edge + 1
    return CornerVertexCounts(
        vertices_per_face=vertices_per_face,
        total_face_vertices=total_face_vertices,
        vertices_per_stitch_edge=vertices_per_stitch_edge,
        total_vertices=total_vertices,
    )


def _normalized(vectors: np.ndarray) -> np.ndarray:
    return vectors / np.linalg.norm(vectors, axis=1, keepdims=True)


def build_corner(subdivisions: int) -> MeshPart:
    """
    Builds one corner of the surface in its canonical orientation.

    Args:
        subdivisions: Number of vertices along each face edge (n >= 1).

    Returns:
        A MeshPart with 3n^2 + 3n + 1 vertices on the unit sphere and 6n^2
        triangles wound outward.
    """
    if subdivisions < 1:
        raise ValueError(f"Corner subdivisions must be >= 1, got {subdivisions}.")

    n = subdivisions
    counts = corner_vertex_counts(n)
    step = 1.0 / n

    # 1. Face vertices. Row-major grid: index = y * n + x
    ys, xs = np.divmod(np.arange(counts.vertices_per_face), n)
    u = xs * step
    v = ys * step
    one = np.ones_like(u)
    face_x = np.column_stack([one, v, u])
    face_y = np.column_stack([u, one, v])
    face_z = np.column_stack([v, u, one])

    # 2. Stitch edges joining the three faces
    t = np.arange(n) * step
    ones = np.ones_like(t)
    edge_xy = np.column_stack([ones, ones, t])
    edge_yz = np.column_stack([t, ones, ones])
    edge_xz = np.column_stack([ones, t, ones])

    # 3. Apex
    apex = np.ones((1, 3))

    positions = _normalized(np.vstack([face_x, face_y, face_z, edge_xy, edge_yz, edge_xz, apex]))

    corner = MeshPart(positions=positions)
    corner.add_triangles(*_corner_triangles(n, counts))
    return corner


def _corner_triangles(n: int, counts: CornerVertexCounts) -> list[Triangle]:
    """
    Triangulate the three faces.

    Each face is walked as an (n + 1) x (n + 1) grid whose last column and last
    row are borrowed from the stitch edges, and whose far corner is the apex.
    Every cell is split into (x, y) (x, y+1) (x+1, y) and
    (x+1, y+1) (x+1, y) (x, y+1).
    """
    triangles: list[Triangle] = []
    grid_quads = n - 1
    edge_start = counts.total_face_vertices
    apex = counts.total_vertices - 1

    for face in range(3):
        offset = face * counts.vertices_per_face
        for y in range(n):
            for x in range(n):
                i = offset + y * n + x
                # Grid point (x, y) reflected through the face centre
                i2 = offset + (grid_quads - y) * n + (grid_quads - x)
                # Stitch edge vertices bordering this face at column n and row n
                edge_x = edge_start + ((face + 2) * n + y) % (3 * n)
                edge_y = edge_start + (face * n + x) % (3 * n)

                if x == grid_quads and y == grid_quads:
                    triangles.append((i, edge_y, edge_x))
                    triangles.append((edge_y, apex, edge_x))
                elif x == grid_quads:
                    triangles.append((i, i + n, edge_x))
                    triangles.append((edge_x + 1, edge_x, i + n))
                elif y == grid_quads:
                    triangles.append((i, edge_y, i + 1))
                    triangles.append((edge_y + 1, i + 1, edge_y))
                else:
                    # Upper triangle of this cell, lower triangle of the reflected cell
                    triangles.append((i, i + n, i + 1))
                    triangles.append((i2, i2 - n, i2 - 1))

    return triangles


class CornerCache:
    """
    Process-wide store of corner templates keyed by subdivision count.

    Lookups and first-time construction are guarded by a lock, so concurrent
    builds may share one cache. Templates are frozen; callers must `copy()`
    before transforming them.
    """
    def __init__(self) -> None:
        self._corners: dict[int, MeshPart] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._corners)

    def __contains__(self, subdivisions: object) -> bool:
        return subdivisions in self._corners

    def get(self, subdivisions: int) -> MeshPart:
        cached = self._corners.get(subdivisions)
        if cached is not None:
            return cached

        with self._lock:
            # Another thread may have built it while we waited
            cached = self._corners.get(subdivisions)
            if cached is not None:
                return cached

            start = time.perf_counter()
            corner = build_corner(subdivisions).freeze()
            self._corners[subdivisions] = corner
            logger.debug(
                f"Built corner primitive n={subdivisions}: {corner.n_vertices} vertices, "
                f"{corner.n_triangles} triangles in {(time.perf_counter() - start) * 1e3:.2f} ms."
            )
            return corner

    def clear(self) -> None:
        with self._lock:
            self._corners.clear()


CORNER_CACHE = CornerCache()
