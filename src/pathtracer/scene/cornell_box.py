"""Cornell box scene configuration.

This module provides a factory function for the reference scene: an open box
seen from the front, lit by an emissive rect just below the ceiling.

The box spans x in [-1, 1], y in [-1, 1] and z in [-2.8, -0.8], with the
camera at the origin looking down -z. It contains:
- Floor and ceiling: light gray Lambertian
- Left wall: blue Lambertian
- Right wall: green Lambertian
- Back wall: light gray uniform diffuse
- Ceiling light: 1 x 1 DiffuseLight rect
- A magenta Lambertian sphere, a fuzzy mirror sphere and a small green
  emissive sphere

Every rect has v x u pointing out of the box, so it is visible from inside.

Example:
    >>> from pathtracer.core.integrator import RenderSettings, render_to_file
    >>> from pathtracer.core.sampler import NumpySampler
    >>> from pathtracer.scene.cornell_box import create_cornell_box_scene
    >>>
    >>> scene, camera = create_cornell_box_scene()
    >>> render_to_file(camera, scene, NumpySampler(1), "cornell.bmp")  # doctest: +SKIP
"""

from __future__ import annotations

from dataclasses import dataclass

from pathtracer.camera.pinhole import JitterPattern, PinholeCamera
from pathtracer.materials import Diffuse, DiffuseLight, Lambertian, Metal
from pathtracer.scene.intersection import Scene

# =============================================================================
# Cornell Box Parameters
# =============================================================================


@dataclass
class CornellBoxParams:
    """Parameters for configuring a Cornell box scene.

    All parameters default to the reference configuration.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        jitter: Sub-pixel sampling pattern of the camera.
        light_intensity: Emission of each channel of the ceiling light.
        left_wall_color: RGB albedo of the left wall.
        right_wall_color: RGB albedo of the right wall.
        metal_fuzz: Fuzz of the mirror sphere, in [0, 1].
    """

    width: int = 320
    height: int = 240
    jitter: JitterPattern = JitterPattern.SINGLE_AXIS
    light_intensity: float = 10.0
    left_wall_color: tuple[float, float, float] = (0.0, 0.0, 0.85)
    right_wall_color: tuple[float, float, float] = (0.0, 0.85, 0.0)
    metal_fuzz: float = 0.03


# =============================================================================
# Cornell Box Constants
# =============================================================================

WHITE_WALL_ALBEDO = (0.85, 0.85, 0.85)

LAMBERTIAN_SPHERE_ALBEDO = (0.9, 0.2, 0.9)
METAL_SPHERE_ALBEDO = (1.0, 1.0, 1.0)
GLOWING_SPHERE_EMISSION = (0.5, 1.0, 0.5)


# =============================================================================
# Cornell Box Factory
# =============================================================================


def create_cornell_box_scene(
    params: CornellBoxParams | None = None,
) -> tuple[Scene, PinholeCamera]:
    """Create the reference Cornell box scene and its camera.

    Primitives are added walls first (floor, ceiling, left, right, back),
    then the ceiling light, then the three spheres.

    Args:
        params: Optional scene parameters. Defaults to CornellBoxParams().

    Returns:
        A tuple of (scene, camera).

    Raises:
        ValueError: If a parameter yields an invalid material or camera.
    """
    if params is None:
        params = CornellBoxParams()

    scene = Scene()
    white = Lambertian(WHITE_WALL_ALBEDO)

    # Floor
    scene.add_rect((-1.0, -1.0, -0.8), (2.0, 0.0, 0.0), (0.0, 0.0, -2.0), white)
    # Ceiling
    scene.add_rect((-1.0, 1.0, -2.8), (2.0, 0.0, 0.0), (0.0, 0.0, 2.0), white)
    # Left wall
    scene.add_rect(
        (-1.0, -1.0, -0.8),
        (0.0, 0.0, -2.0),
        (0.0, 2.0, 0.0),
        Lambertian(params.left_wall_color),
    )
    # Right wall
    scene.add_rect(
        (1.0, -1.0, -2.8),
        (0.0, 0.0, 2.0),
        (0.0, 2.0, 0.0),
        Lambertian(params.right_wall_color),
    )
    # Back wall
    scene.add_rect(
        (-1.0, -1.0, -2.8),
        (2.0, 0.0, 0.0),
        (0.0, 2.0, 0.0),
        Diffuse(WHITE_WALL_ALBEDO),
    )
    # Light, slightly below the ceiling and facing down
    intensity = params.light_intensity
    scene.add_rect(
        (-0.5, 0.99, -2.3),
        (1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0),
        DiffuseLight((intensity, intensity, intensity)),
    )

    scene.add_sphere((-0.5, -0.5, -1.5), 0.5, Lambertian(LAMBERTIAN_SPHERE_ALBEDO))
    scene.add_sphere((0.36, -0.4, -2.3), 0.6, Metal(METAL_SPHERE_ALBEDO, params.metal_fuzz))
    scene.add_sphere((0.1, -0.9, -1.15), 0.1, DiffuseLight(GLOWING_SPHERE_EMISSION))

    camera = PinholeCamera(width=params.width, height=params.height, jitter=params.jitter)
    return scene, camera
