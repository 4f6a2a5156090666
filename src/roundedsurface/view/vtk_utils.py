"""
VTK and Geometry Utilities
Helper functions for converting surface meshes to PyVista data.
"""
import logging

import numpy as np
import numpy.typing as npt
import pyvista as pv

from roundedsurface.model.mesh_part import MeshPart

logger = logging.getLogger(__name__)


class VtkUtils:
    @staticmethod
    def triangles_to_faces(triangles: npt.NDArray[np.int64]) -> npt.NDArray[np.int64]:
        """
        Convert (M, 3) triangles to the flat VTK face array [3, a, b, c, 3, ...].
        """
        tri = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
        counts = np.full((len(tri), 1), 3, dtype=np.int64)
        return np.hstack([counts, tri]).ravel()

    @staticmethod
    def mesh_part_to_polydata(mesh: MeshPart) -> pv.PolyData:
        """
        Build a PolyData surface from a MeshPart.
        UVs, when present, become the active texture coordinates.
        """
        if mesh.n_vertices == 0:
            return pv.PolyData()

        pd = pv.PolyData(mesh.positions.copy(), VtkUtils.triangles_to_faces(mesh.triangles))
        if mesh.has_uv:
            pd.active_texture_coordinates = mesh.uv.copy()
        return pd

    @staticmethod
    def polydata_to_mesh_part(pd: pv.PolyData, name: str = "") -> MeshPart:
        """
        Inverse of `mesh_part_to_polydata`. Non-triangle faces are triangulated first.
        """
        if pd.n_points == 0:
            return MeshPart(name=name)

        if not pd.is_all_triangles:
            pd = pd.triangulate()

        triangles = np.asarray(pd.faces, dtype=np.int64).reshape(-1, 4)[:, 1:]
        uv = pd.active_texture_coordinates
        return MeshPart(
            positions=np.asarray(pd.points, dtype=np.float64),
            uv=None if uv is None else np.asarray(uv, dtype=np.float64),
            triangles=triangles,
            name=name,
        )


mesh_part_to_polydata = VtkUtils.mesh_part_to_polydata
