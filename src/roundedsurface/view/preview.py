"""
Surface Preview
Opens a PyVista window showing a surface mesh, optionally with a UV checker.
"""
from __future__ import annotations

import logging
from typing import Optional

import pyvista as pv

from roundedsurface.model.mesh_part import MeshPart
from roundedsurface.view.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)


def add_surface(
    plotter: pv.Plotter,
    mesh: MeshPart,
    show_edges: bool = True,
    show_uv: bool = False,
    color: str = "#D0D0D0",
) -> Optional[pv.Actor]:
    """
    Add a surface mesh to an existing plotter.

    Args:
        plotter: Target plotter.
        mesh: The mesh to draw.
        show_edges: Draw triangle edges.
        show_uv: Colour the surface by its U coordinate instead of a flat colour.
    """
    pd = VtkUtils.mesh_part_to_polydata(mesh)
    if pd.n_points == 0:
        logger.warning("Nothing to preview, the mesh is empty.")
        return None

    if show_uv and mesh.has_uv:
        pd.point_data["u"] = mesh.uv[:, 0]
        return plotter.add_mesh(
            pd,
            scalars="u",
            cmap="viridis",
            show_edges=show_edges,
            edge_color="grey",
            scalar_bar_args={"title": "U", "vertical": True},
        )

    return plotter.add_mesh(pd, color=color, show_edges=show_edges, edge_color="grey")


def show_surface(
    mesh: MeshPart,
    show_edges: bool = True,
    show_uv: bool = False,
    screenshot: Optional[str] = None,
) -> None:
    """Open a blocking preview window (or render off screen into `screenshot`)."""
    plotter = pv.Plotter(off_screen=screenshot is not None)
    add_surface(plotter, mesh, show_edges=show_edges, show_uv=show_uv)
    plotter.add_axes()
    # Front face points at -Z
    plotter.view_vector((0.4, 0.3, -1.0), viewup=(0.0, 1.0, 0.0))
    plotter.enable_parallel_projection()

    if screenshot is not None:
        plotter.show(screenshot=screenshot)
        logger.info(f"Preview saved to: {screenshot}")
    else:
        plotter.show(title=mesh.name or "Surface")
