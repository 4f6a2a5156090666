import numpy as np
import pytest

from roundedsurface.model.mesh_part import MeshPart


def make_triangle(offset=0.0):
    return MeshPart(
        positions=np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0]], dtype=float) + offset,
        triangles=[(0, 1, 2)],
    )


def make_quad():
    part = MeshPart(positions=[[-1, 1, 0], [1, 1, 0], [-1, -1, 0], [1, -1, 0]])
    part.add_quad((0, 1, 2, 3))
    return part


def test_empty_part_has_shaped_arrays():
    part = MeshPart()
    assert part.positions.shape == (0, 3)
    assert part.uv.shape == (0, 2)
    assert part.triangles.shape == (0, 3)
    assert part.n_vertices == 0
    assert not part.has_uv


def test_quad_is_split_along_top_left_bottom_right_diagonal():
    part = make_quad()
    np.testing.assert_array_equal(part.triangles, [[0, 1, 3], [0, 3, 2]])


def test_both_quad_triangles_share_winding():
    part = make_quad()
    p = part.positions
    normals = [np.cross(p[b] - p[a], p[c] - p[a]) for a, b, c in part.triangles]
    assert normals[0][2] < 0
    assert normals[1][2] < 0


def test_add_triangles_appends_in_order():
    part = make_triangle()
    part.add_triangles((2, 1, 0), (0, 2, 1))
    np.testing.assert_array_equal(part.triangles, [[0, 1, 2], [2, 1, 0], [0, 2, 1]])


def test_add_triangles_without_arguments_is_noop():
    part = make_triangle()
    part.add_triangles()
    assert part.n_triangles == 1


def test_scale_and_translate_apply_to_every_position():
    part = make_triangle()
    part.scale((2.0, -1.0, 3.0))
    part.translate((1.0, 1.0, 1.0))
    np.testing.assert_allclose(part.positions, [[1, 1, 1], [3, 1, 1], [1, 0, 1]])


def test_flip_reverses_each_triangle():
    part = make_quad()
    part.flip_triangle_faces()
    np.testing.assert_array_equal(part.triangles, [[3, 1, 0], [2, 3, 0]])


def test_flip_twice_restores_original_order():
    part = make_quad()
    original = part.triangles.copy()
    part.flip_triangle_faces()
    part.flip_triangle_faces()
    np.testing.assert_array_equal(part.triangles, original)


def test_combine_offsets_indices_by_previous_vertex_counts():
    a = make_triangle()
    b = make_quad()
    combined = MeshPart.combine(a, b)

    assert combined.n_vertices == 7
    np.testing.assert_array_equal(combined.triangles, [[0, 1, 2], [3, 4, 6], [3, 6, 5]])
    np.testing.assert_allclose(combined.positions[3:], b.positions)


def test_combine_leaves_inputs_untouched():
    a = make_triangle()
    b = make_quad()
    MeshPart.combine(a, b)
    np.testing.assert_array_equal(b.triangles, [[0, 1, 3], [0, 3, 2]])
    assert a.n_vertices == 3


def test_combine_is_associative():
    a, b, c = make_triangle(), make_quad(), make_triangle(offset=5.0)
    left = MeshPart.combine(MeshPart.combine(a, b), c)
    right = MeshPart.combine(a, MeshPart.combine(b, c))

    np.testing.assert_allclose(left.positions, right.positions)
    np.testing.assert_array_equal(left.triangles, right.triangles)
    np.testing.assert_allclose(left.uv, right.uv)


def test_combine_concatenates_uv():
    a = make_triangle()
    a.uv = np.array([[0, 0], [1, 0], [0, 1]], dtype=float)
    b = make_triangle()
    b.uv = np.array([[0.5, 0.5]] * 3)
    combined = MeshPart.combine(a, b)
    assert combined.uv.shape == (6, 2)
    np.testing.assert_allclose(combined.uv[3:], 0.5)


def test_combine_rejects_mixed_uv():
    a = make_triangle()
    a.uv = np.zeros((3, 2))
    with pytest.raises(ValueError):
        MeshPart.combine(a, make_triangle())


def test_combine_without_parts_is_empty():
    assert MeshPart.combine().n_vertices == 0


def test_copy_is_independent():
    part = make_quad()
    clone = part.copy()
    clone.scale((2.0, 2.0, 2.0))
    clone.flip_triangle_faces()
    np.testing.assert_allclose(part.positions[0], [-1, 1, 0])
    np.testing.assert_array_equal(part.triangles[0], [0, 1, 3])


def test_frozen_part_rejects_writes_but_copies_are_writable():
    part = make_quad().freeze()
    with pytest.raises(ValueError):
        part.positions[0, 0] = 10.0

    clone = part.copy()
    clone.positions[0, 0] = 10.0
    assert clone.positions.flags.writeable
    assert part.positions[0, 0] == -1.0


def test_part_owns_its_input_arrays():
    positions = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    part = MeshPart(positions=positions, triangles=[(0, 1, 2)])
    part.scale((3.0, 3.0, 3.0))
    part.translate((1.0, 1.0, 1.0))
    np.testing.assert_array_equal(positions[1], [1.0, 0.0, 0.0])
    np.testing.assert_array_equal(part.positions[1], [4.0, 1.0, 1.0])


def test_validate_detects_out_of_range_indices():
    part = make_triangle()
    part.add_triangles((0, 1, 3))
    with pytest.raises(ValueError):
        part.validate()


def test_validate_detects_uv_length_mismatch():
    part = make_triangle()
    part.uv = np.zeros((2, 2))
    with pytest.raises(ValueError):
        part.validate()


def test_bounds():
    lo, hi = make_quad().bounds()
    np.testing.assert_allclose(lo, [-1, -1, 0])
    np.testing.assert_allclose(hi, [1, 1, 0])
