"""
Mesh Buffer
===========
A mutable container of vertex positions, UV coordinates and triangles.

Why is this file needed?
------------------------
1. Building: The surface is assembled from many small pieces (corners, seams,
   closing quads). Each piece is a MeshPart that can be scaled, moved and
   flipped independently.
2. Combination: Pieces are concatenated with the triangle indices of every
   part shifted by the number of vertices that precede it.
"""
from __future__ import annotations

from typing import Iterable, Sequence, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

Triangle = tuple[int, int, int]
Quad = tuple[int, int, int, int]


class MeshPart:
    """
    Positions (N, 3), UVs (N, 2) once populated, and triangles (M, 3).
    """
    def __init__(
        self,
        positions: npt.ArrayLike | None = None,
        uv: npt.ArrayLike | None = None,
        triangles: npt.ArrayLike | None = None,
        name: str = "",
    ) -> None:
        self.positions: npt.NDArray[np.float64] = _as_array(positions, 3, np.float64)
        self.uv: npt.NDArray[np.float64] = _as_array(uv, 2, np.float64)
        self.triangles: npt.NDArray[np.int64] = _as_array(triangles, 3, np.int64)
        self.name = name

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self.name!r}, "
            f"vertices={self.n_vertices}, triangles={self.n_triangles})"
        )

    @property
    def n_vertices(self) -> int:
        return len(self.positions)

    @property
    def n_triangles(self) -> int:
        return len(self.triangles)

    @property
    def has_uv(self) -> bool:
        return len(self.uv) > 0

    # ---- topology ----

    def add_triangles(self, *triangles: Triangle) -> None:
        """Append triangles given as index triples."""
        if not self.triangles.flags.writeable:
            raise ValueError(f"Cannot add triangles to frozen mesh part {self.name!r}.")
        if not triangles:
            return
        new = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
        self.triangles = np.vstack([self.triangles, new])

    def add_quad(self, quad: Quad) -> None:
        self.add_quads(quad)

    def add_quads(self, *quads: Quad) -> None:
        """
        Append quads given as (top_left, top_right, bottom_left, bottom_right).

        Each quad is split along the top-left / bottom-right diagonal into
        (tl, tr, br) and (tl, br, bl), so every quad keeps the winding of its
        corner order.
        """
        triangles: list[Triangle] = []
        for tl, tr, bl, br in quads:
            triangles.append((tl, tr, br))
            triangles.append((tl, br, bl))
        self.add_triangles(*triangles)

    def flip_triangle_faces(self) -> None:
        """Reverse the vertex order of every triangle."""
        self.triangles[:] = self.triangles[:, ::-1].copy()

    # ---- affine transforms ----
    # In place, so a frozen template raises instead of being rebound

    def scale(self, vector: Sequence[float]) -> None:
        self.positions *= np.asarray(vector, dtype=np.float64)

    def translate(self, vector: Sequence[float]) -> None:
        self.positions += np.asarray(vector, dtype=np.float64)

    # ---- copies and combination ----

    def copy(self) -> MeshPart:
        """Deep copy. The copy is always writable, even if the source is a frozen template."""
        return MeshPart(
            positions=self.positions.copy(),
            uv=self.uv.copy(),
            triangles=self.triangles.copy(),
            name=self.name,
        )

    def freeze(self) -> MeshPart:
        """Mark the underlying arrays read-only. Returns self for chaining."""
        self.positions.flags.writeable = False
        self.uv.flags.writeable = False
        self.triangles.flags.writeable = False
        return self

    @classmethod
    def combine(cls, *parts: MeshPart) -> MeshPart:
        """
        Concatenate parts in argument order into a new MeshPart.

        Triangle indices of each part are shifted by the cumulative vertex count
        of the parts before it. The inputs are left untouched.

        Raises:
            ValueError: If some parts carry UVs and others do not.
        """
        if not parts:
            return cls()

        with_uv = [p.has_uv for p in parts]
        if any(with_uv) and not all(with_uv):
            raise ValueError("Cannot combine mesh parts with and without UV coordinates.")

        offsets = np.cumsum([0] + [p.n_vertices for p in parts[:-1]])
        positions = np.vstack([p.positions for p in parts])
        uv = np.vstack([p.uv for p in parts])
        triangles = np.vstack([p.triangles + offset for p, offset in zip(parts, offsets)])

        return cls(positions=positions, uv=uv, triangles=triangles)

    # ---- queries ----

    def bounds(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """Axis aligned (min, max) corners of the positions."""
        if self.n_vertices == 0:
            zero = np.zeros(3, dtype=np.float64)
            return zero, zero.copy()
        return self.positions.min(axis=0), self.positions.max(axis=0)

    def validate(self) -> None:
        """
        Check the buffer invariants.

        Raises:
            ValueError: If a triangle references a missing vertex or the UV list
                is populated but does not match the positions.
        """
        if self.n_triangles and (self.triangles.min() < 0 or self.triangles.max() >= self.n_vertices):
            raise ValueError(
                f"Triangle indices out of range [0, {self.n_vertices}) "
                f"(min={self.triangles.min()}, max={self.triangles.max()})."
            )
        if self.has_uv and len(self.uv) != self.n_vertices:
            raise ValueError(f"Expected {self.n_vertices} UV coordinates, got {len(self.uv)}.")


def _as_array(data: Iterable | None, width: int, dtype: type) -> np.ndarray:
    if data is None:
        return np.empty((0, width), dtype=dtype)
    # Always copy: parts own their buffers and transform them in place
    return np.array(data, dtype=dtype).reshape(-1, width)
