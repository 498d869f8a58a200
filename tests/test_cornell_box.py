"""Unit tests for the Cornell box scene.

Tests cover:
- Scene creation and primitive counts
- Wall orientations (visible from inside the box)
- Sphere positions and materials
- Camera configuration
- Parameter overrides
"""

import numpy as np
import pytest


@pytest.fixture
def cornell_box_scene():
    """Create the default Cornell box scene."""
    from pathtracer.scene.cornell_box import create_cornell_box_scene

    return create_cornell_box_scene()


class TestSceneCreation:
    """Tests for basic scene creation."""

    def test_returns_scene_and_camera(self, cornell_box_scene):
        from pathtracer.camera import PinholeCamera
        from pathtracer.scene import Scene

        scene, camera = cornell_box_scene
        assert isinstance(scene, Scene)
        assert isinstance(camera, PinholeCamera)

    def test_primitive_counts(self, cornell_box_scene):
        from pathtracer.geometry import Rect, Sphere

        scene, _ = cornell_box_scene
        assert len(scene) == 9
        assert sum(isinstance(p, Rect) for p in scene) == 6
        assert sum(isinstance(p, Sphere) for p in scene) == 3

    def test_default_camera(self, cornell_box_scene):
        from pathtracer.camera import JitterPattern

        _, camera = cornell_box_scene
        assert (camera.width, camera.height) == (320, 240)
        assert camera.jitter is JitterPattern.SINGLE_AXIS
        np.testing.assert_allclose(camera.center, [0.0, 0.0, 0.0])


class TestWalls:
    """Tests for wall geometry."""

    def test_walls_visible_from_inside(self, cornell_box_scene):
        """Test that every rect normal points out of the box."""
        from pathtracer.geometry import Rect

        scene, _ = cornell_box_scene
        box_center = np.array([0.0, 0.0, -1.8])
        for primitive in scene:
            if isinstance(primitive, Rect):
                rect_center = primitive.origin + 0.5 * (primitive.u + primitive.v)
                assert np.dot(primitive.normal, rect_center - box_center) > 0.0

    def test_ceiling_light(self, cornell_box_scene):
        from pathtracer.materials import DiffuseLight

        scene, _ = cornell_box_scene
        light = scene.primitives[5]
        assert isinstance(light.material, DiffuseLight)
        np.testing.assert_allclose(light.material.emission, [10.0, 10.0, 10.0])
        np.testing.assert_allclose(light.normal, [0.0, 1.0, 0.0])

    def test_wall_colors(self, cornell_box_scene):
        from pathtracer.materials import Diffuse, Lambertian

        scene, _ = cornell_box_scene
        floor, ceiling, left, right, back = scene.primitives[:5]
        assert isinstance(floor.material, Lambertian)
        assert isinstance(back.material, Diffuse)
        np.testing.assert_allclose(left.material.albedo, [0.0, 0.0, 0.85])
        np.testing.assert_allclose(right.material.albedo, [0.0, 0.85, 0.0])


class TestSpheres:
    """Tests for sphere placement and materials."""

    def test_sphere_materials(self, cornell_box_scene):
        from pathtracer.materials import DiffuseLight, Lambertian, Metal

        scene, _ = cornell_box_scene
        lambertian, metal, glow = scene.primitives[6:]

        assert isinstance(lambertian.material, Lambertian)
        np.testing.assert_allclose(lambertian.center, [-0.5, -0.5, -1.5])
        assert lambertian.radius == 0.5

        assert isinstance(metal.material, Metal)
        assert metal.material.fuzz == 0.03
        assert metal.radius == 0.6

        assert isinstance(glow.material, DiffuseLight)
        assert glow.radius == 0.1


class TestParams:
    """Tests for CornellBoxParams overrides."""

    def test_custom_params(self):
        from pathtracer.camera import JitterPattern
        from pathtracer.scene.cornell_box import CornellBoxParams, create_cornell_box_scene

        params = CornellBoxParams(
            width=64,
            height=48,
            jitter=JitterPattern.PIXEL_AREA,
            light_intensity=4.0,
            metal_fuzz=0.0,
        )
        scene, camera = create_cornell_box_scene(params)
        assert (camera.width, camera.height) == (64, 48)
        assert camera.jitter is JitterPattern.PIXEL_AREA
        np.testing.assert_allclose(scene.primitives[5].material.emission, [4.0, 4.0, 4.0])
        assert scene.primitives[7].material.fuzz == 0.0

    def test_invalid_params_raise(self):
        from pathtracer.scene.cornell_box import CornellBoxParams, create_cornell_box_scene

        with pytest.raises(ValueError):
            create_cornell_box_scene(CornellBoxParams(metal_fuzz=2.0))
        with pytest.raises(ValueError):
            create_cornell_box_scene(CornellBoxParams(width=0))

    def test_center_pixel_sees_box(self, sampler):
        """Test that a ray through the image center hits the back wall region."""
        from pathtracer.camera import get_ray
        from pathtracer.core.integrator import HIT_INTERVAL
        from pathtracer.scene.cornell_box import CornellBoxParams, create_cornell_box_scene

        scene, camera = create_cornell_box_scene(CornellBoxParams(width=9, height=9))
        hit = scene.closest_intersection(sampler, get_ray(camera, 4, 4), HIT_INTERVAL)
        assert hit is not None
