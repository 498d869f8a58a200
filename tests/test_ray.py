"""Unit tests for rays, vector helpers and samplers.

Tests cover:
- Ray evaluation
- Vector helpers (normalize, reflect, near_zero)
- Random unit vectors and their draw counts
- NumpySampler and SequenceSampler behavior
"""

import numpy as np
import pytest


class TestRay:
    """Tests for the Ray dataclass."""

    def test_pos(self):
        from pathtracer.core.ray import Ray, vec3

        ray = Ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, -2.0))
        np.testing.assert_allclose(ray.pos(0.0), [1.0, 2.0, 3.0])
        np.testing.assert_allclose(ray.pos(1.5), [1.0, 2.0, 0.0])

    def test_pos_negative_t_not_checked(self):
        """Test that negative parameters are evaluated without complaint."""
        from pathtracer.core.ray import Ray, vec3

        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0))
        np.testing.assert_allclose(ray.pos(-2.0), [-2.0, 0.0, 0.0])


class TestVectorHelpers:
    """Tests for the small vector utility functions."""

    def test_as_vec3_rejects_wrong_shape(self):
        from pathtracer.core.ray import as_vec3

        with pytest.raises(ValueError):
            as_vec3((1.0, 2.0))

    def test_as_vec3_copies(self):
        from pathtracer.core.ray import as_vec3

        source = np.array([1.0, 2.0, 3.0])
        v = as_vec3(source)
        source[0] = 9.0
        assert v[0] == 1.0

    def test_normalize(self):
        from pathtracer.core.ray import length, normalize, vec3

        v = normalize(vec3(3.0, 0.0, 4.0))
        np.testing.assert_allclose(v, [0.6, 0.0, 0.8])
        assert abs(length(v) - 1.0) < 1e-12

    def test_cross_and_dot(self):
        from pathtracer.core.ray import cross, dot, vec3

        np.testing.assert_allclose(cross(vec3(1, 0, 0), vec3(0, 1, 0)), [0.0, 0.0, 1.0])
        assert dot(vec3(1, 2, 3), vec3(4, 5, 6)) == 32.0

    def test_reflect_45_degrees(self):
        from pathtracer.core.ray import reflect, vec3

        reflected = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))
        np.testing.assert_allclose(reflected, [1.0, 1.0, 0.0])

    def test_near_zero(self):
        from pathtracer.core.ray import near_zero, vec3

        assert near_zero(vec3(1e-7, -1e-7, 0.0))
        assert not near_zero(vec3(1e-7, 1e-5, 0.0))


class TestRandomVectors:
    """Tests for sampler-driven direction generation."""

    def test_random_unit_vector_is_unit(self, sampler):
        from pathtracer.core.ray import length, random_unit_vector

        for _ in range(100):
            assert abs(length(random_unit_vector(sampler)) - 1.0) < 1e-9

    def test_random_unit_vector_uses_three_draws(self, sampler):
        from pathtracer.core.ray import random_unit_vector

        random_unit_vector(sampler)
        assert sampler.draws == 3

    def test_random_unit_vector_covers_all_octants(self, sampler):
        """Test that components take both signs."""
        from pathtracer.core.ray import random_unit_vector

        samples = np.array([random_unit_vector(sampler) for _ in range(200)])
        assert (samples < 0.0).any(axis=0).all()
        assert (samples > 0.0).any(axis=0).all()

    def test_random_unit_vector_scripted(self):
        from pathtracer.core.ray import random_unit_vector
        from pathtracer.core.sampler import SequenceSampler

        v = random_unit_vector(SequenceSampler([0.5, 0.5, 0.75]))
        np.testing.assert_allclose(v, [0.0, 0.0, 1.0])

    def test_random_unit_vector_zero_point_falls_back(self):
        from pathtracer.core.ray import random_unit_vector
        from pathtracer.core.sampler import SequenceSampler

        v = random_unit_vector(SequenceSampler([0.5]))
        np.testing.assert_allclose(v, [0.0, 0.0, 1.0])

    def test_random_on_hemisphere_faces_normal(self, sampler):
        from pathtracer.core.ray import dot, random_on_hemisphere, vec3

        normal = vec3(0.0, 1.0, 0.0)
        for _ in range(100):
            assert dot(random_on_hemisphere(sampler, normal), normal) >= 0.0


class TestSamplers:
    """Tests for the injected random sources."""

    def test_numpy_sampler_range(self, sampler):
        values = [sampler.random() for _ in range(1000)]
        assert all(0.0 <= v < 1.0 for v in values)

    def test_numpy_sampler_reproducible(self):
        from pathtracer.core.sampler import NumpySampler

        a = NumpySampler(seed=5)
        b = NumpySampler(seed=5)
        assert [a.random() for _ in range(10)] == [b.random() for _ in range(10)]

    def test_sequence_sampler_cycles(self):
        from pathtracer.core.sampler import SequenceSampler

        s = SequenceSampler([0.1, 0.2])
        assert [s.random() for _ in range(5)] == [0.1, 0.2, 0.1, 0.2, 0.1]
        assert s.draws == 5

    @pytest.mark.parametrize("values", [[], [1.0], [-0.1], [0.5, 1.5]])
    def test_sequence_sampler_rejects_invalid(self, values):
        from pathtracer.core.sampler import SequenceSampler

        with pytest.raises(ValueError):
            SequenceSampler(values)
