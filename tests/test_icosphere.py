"""Tests for icosphere: base icosahedron and subdivision."""

import numpy as np
import pytest

from icosphere import (
    create_icosahedron,
    expected_counts,
    get_middle_point,
    subdivide_icosahedron,
    validate_base_mesh,
)


class TestCreateIcosahedron:
    def test_shapes(self):
        vertices, triangles = create_icosahedron()
        assert vertices.shape == (12, 3)
        assert triangles.shape == (20, 3)

    def test_vertices_on_unit_sphere(self):
        vertices, _ = create_icosahedron()
        np.testing.assert_allclose(np.linalg.norm(vertices, axis=1), 1.0)

    def test_every_vertex_in_five_triangles(self):
        _, triangles = create_icosahedron()
        counts = np.bincount(triangles.ravel(), minlength=12)
        assert list(counts) == [5] * 12


class TestValidateBaseMesh:
    def test_accepts_icosahedron(self):
        vertices, triangles = create_icosahedron()
        checked_vertices, checked_triangles = validate_base_mesh(vertices, triangles.ravel())
        assert checked_vertices.shape == (12, 3)
        assert checked_triangles.shape == (20, 3)

    def test_rejects_missing_triangle(self):
        vertices, triangles = create_icosahedron()
        with pytest.raises(ValueError, match="triangle definition"):
            validate_base_mesh(vertices, triangles[:19])

    def test_rejects_index_count_not_multiple_of_three(self):
        vertices, triangles = create_icosahedron()
        with pytest.raises(ValueError, match="triangle definition"):
            validate_base_mesh(vertices, triangles.ravel()[:59])

    def test_rejects_out_of_range_index(self):
        vertices, triangles = create_icosahedron()
        triangles = triangles.copy()
        triangles[3, 1] = 12
        with pytest.raises(ValueError, match="reference vertices"):
            validate_base_mesh(vertices, triangles)

    def test_rejects_wrong_vertex_count(self):
        vertices, triangles = create_icosahedron()
        with pytest.raises(ValueError, match="vertex data"):
            validate_base_mesh(vertices[:11], triangles)


class TestGetMiddlePoint:
    def test_shared_edge_creates_one_vertex(self):
        vertices = [np.array([1.0, 0.0, 0.0]), np.array([0.0, 1.0, 0.0])]
        cache = {}
        first = get_middle_point(vertices, cache, 0, 1)
        second = get_middle_point(vertices, cache, 1, 0)
        assert first == second == 2
        assert len(vertices) == 3
        assert cache == {(0, 1): 2}
        np.testing.assert_allclose(vertices[2], [0.5, 0.5, 0.0])


class TestSubdivideIcosahedron:
    @pytest.mark.parametrize("level", [0, 1, 2, 3])
    def test_counts_match_closed_form(self, level):
        vertices, triangles = create_icosahedron()
        vertices, triangles, _ = subdivide_icosahedron(vertices, triangles, level)
        assert (len(vertices), len(triangles)) == expected_counts(level)

    def test_level_one_counts(self):
        vertices, triangles = create_icosahedron()
        vertices, triangles, _ = subdivide_icosahedron(vertices, triangles, 1)
        assert len(vertices) == 42
        assert len(triangles) == 80

    def test_level_zero_is_scaled_icosahedron(self):
        base_vertices, base_triangles = create_icosahedron()
        vertices, triangles, cache = subdivide_icosahedron(base_vertices, base_triangles, 0, radius=3.0)
        np.testing.assert_allclose(vertices, base_vertices * 3.0)
        np.testing.assert_array_equal(triangles, base_triangles)
        assert cache == {}

    def test_vertices_on_sphere_of_radius(self):
        vertices, triangles = create_icosahedron()
        vertices, _, _ = subdivide_icosahedron(vertices, triangles, 2, radius=2.5)
        np.testing.assert_allclose(np.linalg.norm(vertices, axis=1), 2.5)

    def test_midpoints_are_not_duplicated(self):
        vertices, triangles = create_icosahedron()
        vertices, _, cache = subdivide_icosahedron(vertices, triangles, 3)
        assert len(cache) == len(vertices) - 12
        unique_positions = np.unique(np.round(vertices, decimals=9), axis=0)
        assert len(unique_positions) == len(vertices)

    def test_base_vertices_keep_their_indices(self):
        base_vertices, base_triangles = create_icosahedron()
        vertices, _, _ = subdivide_icosahedron(base_vertices, base_triangles, 2)
        np.testing.assert_allclose(vertices[:12], base_vertices)

    def test_uses_caller_cache(self):
        vertices, triangles = create_icosahedron()
        cache = {}
        _, _, returned = subdivide_icosahedron(vertices, triangles, 1, midpoint_cache=cache)
        assert returned is cache
        assert len(cache) == 30

    def test_negative_level_raises(self):
        vertices, triangles = create_icosahedron()
        with pytest.raises(ValueError):
            subdivide_icosahedron(vertices, triangles, -1)
