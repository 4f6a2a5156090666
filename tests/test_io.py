import numpy as np
import pytest

from roundedsurface.model.io import IOManager, export_mesh, load_mesh
from roundedsurface.model.mesh_part import MeshPart


def test_vtu_round_trip(tmp_path, scenario_mesh):
    path = str(tmp_path / "panel.vtu")
    export_mesh(scenario_mesh, path)

    loaded = load_mesh(path)

    assert loaded.name == "panel"
    np.testing.assert_allclose(loaded.positions, scenario_mesh.positions)
    np.testing.assert_array_equal(loaded.triangles, scenario_mesh.triangles)
    np.testing.assert_allclose(loaded.uv, scenario_mesh.uv)


def test_obj_export_writes_texture_coordinates(tmp_path, scenario_mesh):
    path = tmp_path / "panel.obj"
    export_mesh(scenario_mesh, str(path))

    lines = path.read_text().splitlines()
    assert sum(line.startswith("v ") for line in lines) == scenario_mesh.n_vertices
    assert sum(line.startswith("vt ") for line in lines) == scenario_mesh.n_vertices
    assert sum(line.startswith("f ") for line in lines) == scenario_mesh.n_triangles


def test_mesh_without_uv_exports_without_point_data():
    mesh = MeshPart(positions=[[0, 0, 0], [1, 0, 0], [0, 1, 0]], triangles=[[0, 1, 2]])
    out = IOManager.to_meshio(mesh)
    assert out.point_data == {}
    assert out.cells[0].type == "triangle"


def test_invalid_mesh_is_not_written(tmp_path):
    mesh = MeshPart(positions=[[0, 0, 0], [1, 0, 0]], triangles=[[0, 1, 2]])
    path = tmp_path / "broken.vtu"
    with pytest.raises(ValueError):
        export_mesh(mesh, str(path))
    assert not path.exists()


def test_load_rejects_files_without_triangles(tmp_path):
    import meshio

    path = str(tmp_path / "lines.vtu")
    meshio.write(path, meshio.Mesh(points=np.zeros((2, 3)), cells=[("line", np.array([[0, 1]]))]))
    with pytest.raises(ValueError, match="no triangle cells"):
        load_mesh(path)
