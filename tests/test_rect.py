"""Unit tests for rect intersection.

Tests cover:
- Derived plane normal and offset
- Single-sided visibility
- Planar coordinate bounds
- Parallel rays
- Construction validation
"""

import numpy as np
import pytest


@pytest.fixture
def floor_rect(gray_lambertian):
    """Unit square in the y=0 plane, spanning x in [0, 1] and z in [-1, 0]."""
    from pathtracer.geometry.rect import Rect

    return Rect((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, -1.0), gray_lambertian)


def _interval():
    from pathtracer.core.interval import Interval

    return Interval(0.001, np.inf)


class TestRectBasics:
    """Tests for Rect construction."""

    def test_derived_normal_and_offset(self, floor_rect):
        np.testing.assert_allclose(floor_rect.normal, [0.0, -1.0, 0.0])
        assert floor_rect.d == 0.0

    def test_offset_of_shifted_plane(self, gray_lambertian):
        from pathtracer.geometry.rect import Rect

        rect = Rect((0.0, 2.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, -1.0), gray_lambertian)
        assert abs(rect.d - (-2.0)) < 1e-12

    def test_rejects_parallel_edges(self, gray_lambertian):
        from pathtracer.geometry.rect import Rect

        with pytest.raises(ValueError):
            Rect((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0), gray_lambertian)

    def test_coordinates(self, floor_rect):
        from pathtracer.core.ray import vec3
        from pathtracer.geometry.rect import rect_coordinates

        alpha, beta = rect_coordinates(floor_rect, vec3(0.25, 0.0, -0.75))
        assert abs(alpha - 0.25) < 1e-12
        assert abs(beta - 0.75) < 1e-12


class TestRectIntersection:
    """Tests for ray-rect intersection."""

    def test_hit_from_visible_side(self, floor_rect, sampler):
        """Test a ray traveling along the normal direction."""
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.geometry.rect import hit_rect, rect_coordinates

        ray = Ray(vec3(0.5, 1.0, -0.5), vec3(0.0, -1.0, 0.0))
        hit = hit_rect(floor_rect, sampler, ray, _interval())

        assert hit is not None
        assert abs(hit.t - 1.0) < 1e-12
        np.testing.assert_allclose(hit.position, [0.5, 0.0, -0.5])
        alpha, beta = rect_coordinates(floor_rect, hit.position)
        assert abs(alpha - 0.5) < 1e-12
        assert abs(beta - 0.5) < 1e-12
        # Accepted rays always travel with the geometric normal
        assert not hit.front_face
        np.testing.assert_allclose(hit.normal, [0.0, 1.0, 0.0])

    def test_invisible_from_other_side(self, floor_rect, sampler):
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.geometry.rect import hit_rect

        ray = Ray(vec3(0.5, -1.0, -0.5), vec3(0.0, 1.0, 0.0))
        assert hit_rect(floor_rect, sampler, ray, _interval()) is None

    def test_parallel_ray_misses(self, floor_rect, sampler):
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.geometry.rect import hit_rect

        ray = Ray(vec3(-1.0, 0.0, -0.5), vec3(1.0, 0.0, 0.0))
        assert hit_rect(floor_rect, sampler, ray, _interval()) is None

    @pytest.mark.parametrize(
        "x, z",
        [(1.5, -0.5), (-0.5, -0.5), (0.5, 0.5), (0.5, -1.5)],
    )
    def test_outside_bounds_misses(self, floor_rect, sampler, x, z):
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.geometry.rect import hit_rect

        ray = Ray(vec3(x, 1.0, z), vec3(0.0, -1.0, 0.0))
        assert hit_rect(floor_rect, sampler, ray, _interval()) is None

    def test_edge_is_inclusive(self, floor_rect, sampler):
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.geometry.rect import hit_rect

        ray = Ray(vec3(1.0, 1.0, -1.0), vec3(0.0, -1.0, 0.0))
        assert hit_rect(floor_rect, sampler, ray, _interval()) is not None

    def test_behind_ray_misses(self, floor_rect, sampler):
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.geometry.rect import hit_rect

        ray = Ray(vec3(0.5, -1.0, -0.5), vec3(0.0, -1.0, 0.0))
        assert hit_rect(floor_rect, sampler, ray, _interval()) is None


class TestPrimitiveDispatch:
    """Tests for the primitive union helpers."""

    def test_intersect_dispatches(self, floor_rect, gray_lambertian, sampler):
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.geometry import Sphere, intersect

        ray = Ray(vec3(0.5, 1.0, -0.5), vec3(0.0, -1.0, 0.0))
        assert intersect(floor_rect, sampler, ray, _interval()) is not None

        sphere = Sphere((0.5, 5.0, -0.5), 1.0, gray_lambertian)
        ray_up = Ray(vec3(0.5, 1.0, -0.5), vec3(0.0, 1.0, 0.0))
        hit = intersect(sphere, sampler, ray_up, _interval())
        assert abs(hit.t - 3.0) < 1e-12

    def test_normal(self, floor_rect, gray_lambertian):
        from pathtracer.core.ray import vec3
        from pathtracer.geometry import Sphere, normal

        np.testing.assert_allclose(normal(floor_rect, vec3(0.5, 0.0, -0.5)), [0.0, -1.0, 0.0])
        sphere = Sphere((0.0, 0.0, 0.0), 2.0, gray_lambertian)
        np.testing.assert_allclose(normal(sphere, vec3(0.0, 2.0, 0.0)), [0.0, 1.0, 0.0])
