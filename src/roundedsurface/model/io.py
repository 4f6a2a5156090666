"""
Input/Output Manager (meshio)
Handles writing surface meshes to, and reading them from, mesh files.
"""
import logging
import os

import meshio
import numpy as np

from roundedsurface.model.mesh_part import MeshPart

# Get module logger
logger = logging.getLogger(__name__)

# Point data key meshio's OBJ writer/reader uses for texture coordinates
OBJ_UV_KEY = "obj:vt"
UV_KEY = "uv"


class IOManager:
    @staticmethod
    def _uv_key(filepath: str) -> str:
        return OBJ_UV_KEY if os.path.splitext(filepath)[1].lower() == ".obj" else UV_KEY

    @staticmethod
    def to_meshio(mesh: MeshPart, uv_key: str = UV_KEY) -> meshio.Mesh:
        """Wrap a MeshPart as a meshio triangle mesh."""
        mesh.validate()
        point_data = {uv_key: mesh.uv} if mesh.has_uv else {}
        return meshio.Mesh(
            points=mesh.positions,
            cells=[("triangle", mesh.triangles)],
            point_data=point_data,
        )

    @staticmethod
    def export_mesh(mesh: MeshPart, filepath: str) -> None:
        """
        Write the mesh to any format meshio supports, chosen by file extension.
        OBJ files get their UVs as 'vt' records, other formats a 'uv' point array.
        """
        logger.info(f"Exporting mesh '{mesh.name}' to: {filepath}")
        try:
            out = IOManager.to_meshio(mesh, uv_key=IOManager._uv_key(filepath))
            meshio.write(filepath, out)
            logger.info(f"Mesh exported ({mesh.n_vertices} vertices, {mesh.n_triangles} triangles).")
        except Exception as e:
            logger.exception(f"Failed to export mesh: {e}")
            raise e

    @staticmethod
    def load_mesh(filepath: str) -> MeshPart:
        """
        Read a triangle mesh written by `export_mesh` (or any triangle mesh).

        Raises:
            ValueError: If the file contains no triangle cells.
        """
        logger.info(f"Loading mesh from: {filepath}")
        data = meshio.read(filepath)

        triangles = [block.data for block in data.cells if block.type == "triangle"]
        if not triangles:
            msg = f"File '{filepath}' contains no triangle cells."
            logger.error(msg)
            raise ValueError(msg)

        uv = data.point_data.get(IOManager._uv_key(filepath))
        if uv is not None:
            uv = np.asarray(uv, dtype=np.float64)[:, :2]

        mesh = MeshPart(
            positions=np.asarray(data.points, dtype=np.float64)[:, :3],
            uv=uv,
            triangles=np.vstack(triangles),
            name=os.path.splitext(os.path.basename(filepath))[0],
        )
        logger.debug(f"Loaded {mesh!r}.")
        return mesh


export_mesh = IOManager.export_mesh
load_mesh = IOManager.load_mesh
