"""
Surface Component (Lifecycle Adapter)
=====================================
Keeps a surface mesh in sync with its parameters and host rectangle.

Why is this file needed?
------------------------
1. Dirty tracking: Every parameter setter marks the surface dirty. In edit
   mode the mesh is rebuilt immediately; while playing it is rebuilt once per
   frame in `late_update()`, however many parameters changed.
2. Decoupling: The host rectangle arrives through a RectTransform signal and
   the finished mesh leaves through the `mesh_built` signal, so the mesher
   knows nothing about the host engine or the renderer.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Optional

from PySide6.QtCore import QObject, Signal

from roundedsurface import config
from roundedsurface.controller.mesher import SurfaceMesher
from roundedsurface.model.corner_radii import CornerRadii
from roundedsurface.model.mesh_part import MeshPart
from roundedsurface.model.parameters import RectGeometry, SurfaceParameters, UVMode

logger = logging.getLogger(__name__)


class RectTransform(QObject):
    """Transform provider: the rectangle a surface is drawn into."""
    dimensions_changed = Signal()

    def __init__(
        self,
        size: tuple[float, float] = config.DEFAULT_RECT_SIZE,
        pivot: tuple[float, float] = config.DEFAULT_PIVOT,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._size = (float(size[0]), float(size[1]))
        self._pivot = (float(pivot[0]), float(pivot[1]))

    @property
    def size(self) -> tuple[float, float]:
        return self._size

    @size.setter
    def size(self, value: tuple[float, float]) -> None:
        value = (float(value[0]), float(value[1]))
        if value != self._size:
            self._size = value
            self.dimensions_changed.emit()

    @property
    def pivot(self) -> tuple[float, float]:
        return self._pivot

    @pivot.setter
    def pivot(self, value: tuple[float, float]) -> None:
        value = (float(value[0]), float(value[1]))
        if value != self._pivot:
            self._pivot = value
            self.dimensions_changed.emit()

    def geometry(self) -> RectGeometry:
        return RectGeometry(size=self._size, pivot=self._pivot)


class SurfaceComponent(QObject):
    """
    Owns the parameters of one surface and rebuilds its mesh when they change.

    Signals:
        mesh_built(MeshPart, material): emitted after every rebuild; the render
            target connects here.
    """
    mesh_built = Signal(object, object)

    def __init__(
        self,
        rect_transform: RectTransform,
        parameters: Optional[SurfaceParameters] = None,
        material: Any = None,
        is_playing: bool = False,
        mesher: Optional[SurfaceMesher] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.rect_transform = rect_transform
        self.material = material
        self.is_playing = is_playing
        # Own copy: components never share mutable parameters
        self._parameters = dataclasses.replace(parameters) if parameters is not None else SurfaceParameters()
        self._mesher = mesher or SurfaceMesher()
        self._mesh: Optional[MeshPart] = None
        self._is_dirty = False

        self.rect_transform.dimensions_changed.connect(self.mark_dirty)

    # ---- state ----

    @property
    def mesh(self) -> Optional[MeshPart]:
        """The last built mesh, or None before the first build."""
        return self._mesh

    @property
    def is_dirty(self) -> bool:
        return self._is_dirty

    @property
    def parameters(self) -> SurfaceParameters:
        return self._parameters

    @parameters.setter
    def parameters(self, value: SurfaceParameters) -> None:
        self._parameters = dataclasses.replace(value)
        self.mark_dirty()

    # ---- parameter properties ----

    @property
    def corner_radii(self) -> CornerRadii:
        return self._parameters.corner_radii

    @corner_radii.setter
    def corner_radii(self, value: CornerRadii) -> None:
        self._set_and_mark_dirty("corner_radii", value)

    @property
    def corner_subdivisions(self) -> int:
        return self._parameters.corner_subdivisions

    @corner_subdivisions.setter
    def corner_subdivisions(self, value: int) -> None:
        self._set_and_mark_dirty("corner_subdivisions", value)

    @property
    def surface_depth(self) -> float:
        return self._parameters.surface_depth

    @surface_depth.setter
    def surface_depth(self, value: float) -> None:
        self._set_and_mark_dirty("surface_depth", value)

    @property
    def front_face_depth(self) -> float:
        return self._parameters.front_face_depth

    @front_face_depth.setter
    def front_face_depth(self, value: float) -> None:
        self._set_and_mark_dirty("front_face_depth", value)

    @property
    def back_face_depth(self) -> float:
        return self._parameters.back_face_depth

    @back_face_depth.setter
    def back_face_depth(self, value: float) -> None:
        self._set_and_mark_dirty("back_face_depth", value)

    @property
    def uv_mode(self) -> UVMode:
        return self._parameters.uv_mode

    @uv_mode.setter
    def uv_mode(self, value: UVMode) -> None:
        self._set_and_mark_dirty("uv_mode", UVMode(value))

    @property
    def depth_offset(self) -> float:
        return self._parameters.depth_offset

    @depth_offset.setter
    def depth_offset(self, value: float) -> None:
        self._set_and_mark_dirty("depth_offset", value)

    # ---- lifecycle ----

    def start(self) -> MeshPart:
        """Initial build."""
        return self.build_surface()

    def late_update(self) -> Optional[MeshPart]:
        """Per-frame hook while playing: rebuild once if anything changed."""
        if self.is_playing and self._is_dirty:
            return self.build_surface()
        return None

    def mark_dirty(self) -> None:
        if self.is_playing:
            self._is_dirty = True
        else:
            self.build_surface()

    def build_surface(self) -> MeshPart:
        self._mesh = self._mesher.build(self._parameters, self.rect_transform.geometry())
        self._is_dirty = False
        self.mesh_built.emit(self._mesh, self.material)
        return self._mesh

    def _set_and_mark_dirty(self, name: str, value: Any) -> None:
        setattr(self._parameters, name, value)
        logger.debug(f"Surface parameter '{name}' set to {value!r}.")
        self.mark_dirty()
