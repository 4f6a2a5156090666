from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from roundedsurface.controller.corner_cache import CornerCache, build_corner, corner_vertex_counts
from mesh_checks import directed_edges, triangle_normals


@pytest.mark.parametrize("n", [1, 2, 3, 4, 7])
def test_vertex_count_formula(n):
    corner = build_corner(n)
    assert corner.n_vertices == 3 * n * n + 3 * n + 1
    assert corner_vertex_counts(n).total_vertices == corner.n_vertices


@pytest.mark.parametrize("n", [1, 2, 3, 4, 7])
def test_triangle_count_and_indices(n):
    corner = build_corner(n)
    assert corner.n_triangles == 6 * n * n
    corner.validate()
    # no triangle repeats a vertex
    tri = corner.triangles
    assert np.all((tri[:, 0] != tri[:, 1]) & (tri[:, 1] != tri[:, 2]) & (tri[:, 0] != tri[:, 2]))


@pytest.mark.parametrize("n", [1, 3, 6])
def test_all_vertices_lie_on_unit_sphere(n):
    corner = build_corner(n)
    np.testing.assert_allclose(np.linalg.norm(corner.positions, axis=1), 1.0)
    assert np.all(corner.positions >= 0.0)


def test_layout_of_poles_edges_and_apex():
    n = 3
    corner = build_corner(n)
    p = corner.positions
    np.testing.assert_allclose(p[0], [1, 0, 0])
    np.testing.assert_allclose(p[n * n], [0, 1, 0])
    np.testing.assert_allclose(p[2 * n * n], [0, 0, 1])
    s = 1 / np.sqrt(2)
    np.testing.assert_allclose(p[3 * n * n], [s, s, 0])
    np.testing.assert_allclose(p[3 * n * n + n], [0, s, s])
    np.testing.assert_allclose(p[3 * n * n + 2 * n], [s, 0, s])
    np.testing.assert_allclose(p[-1], np.full(3, 1 / np.sqrt(3)))


def test_face_vertex_is_normalized_cube_point():
    n = 4
    corner = build_corner(n)
    x, y = 3, 1
    expected = np.array([1.0, y / n, x / n])
    np.testing.assert_allclose(corner.positions[y * n + x], expected / np.linalg.norm(expected))


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_triangles_face_outward(n):
    corner = build_corner(n)
    normals = triangle_normals(corner.positions, corner.triangles)
    centroids = corner.positions[corner.triangles].mean(axis=1)
    assert np.all(np.einsum("ij,ij->i", normals, centroids) > 0.0)


@pytest.mark.parametrize("n", [1, 2, 4])
def test_corner_patch_is_consistently_wound(n):
    edges = directed_edges(build_corner(n).triangles)
    unique = {tuple(e) for e in edges.tolist()}
    assert len(unique) == len(edges)


def test_invalid_subdivisions_raise():
    with pytest.raises(ValueError):
        build_corner(0)


def test_cache_returns_shared_frozen_template():
    cache = CornerCache()
    first = cache.get(3)
    assert cache.get(3) is first
    assert 3 in cache
    assert len(cache) == 1
    assert not first.positions.flags.writeable
    assert not first.triangles.flags.writeable


def test_cached_template_cannot_be_transformed_in_place():
    cache = CornerCache()
    template = cache.get(3)

    with pytest.raises(ValueError):
        template.scale((2.0, 2.0, 2.0))
    with pytest.raises(ValueError):
        template.translate((1.0, 0.0, 0.0))
    with pytest.raises(ValueError):
        template.flip_triangle_faces()
    with pytest.raises(ValueError):
        template.add_triangles((0, 1, 2))

    np.testing.assert_allclose(np.linalg.norm(cache.get(3).positions, axis=1), 1.0)
    assert cache.get(3).n_triangles == 6 * 3 * 3


def test_copied_template_transforms_leave_cache_intact():
    cache = CornerCache()
    part = cache.get(2).copy()
    part.scale((2.0, 2.0, 2.0))
    part.flip_triangle_faces()
    np.testing.assert_allclose(np.linalg.norm(part.positions, axis=1), 2.0)
    np.testing.assert_allclose(np.linalg.norm(cache.get(2).positions, axis=1), 1.0)


def test_cache_keeps_one_template_per_subdivision_count():
    cache = CornerCache()
    assert cache.get(2) is not cache.get(3)
    assert len(cache) == 2
    cache.clear()
    assert len(cache) == 0


def test_cache_is_safe_under_concurrent_first_use():
    cache = CornerCache()
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: cache.get(9), range(32)))
    assert all(r is results[0] for r in results)
    assert len(cache) == 1
