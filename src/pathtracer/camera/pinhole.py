"""Pinhole camera model for perspective ray generation.

The camera sits at ``center`` looking down -z with +y up. The viewport is a
rectangle at distance ``focal_length`` in front of the camera, ``viewport_height``
units tall and as wide as the image aspect ratio requires. Pixels are indexed
from the lower-left corner: x grows to the right, y grows upward.

Derived viewport geometry:
    pixel_delta_u: Step between horizontally adjacent pixel centers
    pixel_delta_v: Step between vertically adjacent pixel centers
    pixel_origin: Center of pixel (0, 0), the lower-left pixel

Rays are not normalized: direction = jittered pixel point - camera center.

Example:
    >>> from pathtracer.camera.pinhole import PinholeCamera, get_ray
    >>> camera = PinholeCamera(width=2, height=2)
    >>> get_ray(camera, 0, 0).direction
    array([-0.5, -0.5, -1. ])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pathtracer.core.interval import Interval, bounded_int
from pathtracer.core.ray import Ray, Vec3, as_vec3, vec3
from pathtracer.core.sampler import Sampler

# Image dimensions are stored as 16-bit fields by the raster encoders
MAX_IMAGE_DIMENSION = 65535
_DIMENSION_RANGE = Interval(1, MAX_IMAGE_DIMENSION)


class JitterPattern(str, Enum):
    """Sub-pixel offset pattern for antialiasing.

    SINGLE_AXIS offsets both random terms along pixel_delta_u, so samples
    spread horizontally only. This reproduces the reference renders.
    PIXEL_AREA uses pixel_delta_v for the second term and covers the whole
    pixel square.
    """

    SINGLE_AXIS = "single-axis"
    PIXEL_AREA = "pixel-area"


@dataclass(frozen=True, eq=False)
class PinholeCamera:
    """Configuration and derived viewport geometry of a pinhole camera.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        viewport_height: Height of the viewport in world units.
        focal_length: Distance from the camera center to the viewport.
        center: Camera position in world space (x, y, z).
        jitter: Sub-pixel sampling pattern.
        pixel_delta_u: Horizontal pixel step. Derived.
        pixel_delta_v: Vertical pixel step. Derived.
        pixel_origin: Center of the lower-left pixel. Derived.

    Raises:
        ValueError: If a dimension is outside [1, 65535], or the viewport
            height or focal length is not positive.
    """

    width: int
    height: int
    viewport_height: float = 2.0
    focal_length: float = 1.0
    center: Vec3 = (0.0, 0.0, 0.0)
    jitter: JitterPattern = JitterPattern.SINGLE_AXIS
    pixel_delta_u: Vec3 = field(init=False)
    pixel_delta_v: Vec3 = field(init=False)
    pixel_origin: Vec3 = field(init=False)

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = bounded_int(getattr(self, name), _DIMENSION_RANGE)
            if value is None:
                raise ValueError(
                    f"Image {name} must be an integer in [1, {MAX_IMAGE_DIMENSION}], "
                    f"got {getattr(self, name)!r}"
                )
            object.__setattr__(self, name, value)
        if not self.viewport_height > 0.0:
            raise ValueError(f"Viewport height must be positive, got {self.viewport_height}")
        if not self.focal_length > 0.0:
            raise ValueError(f"Focal length must be positive, got {self.focal_length}")

        center = as_vec3(self.center)
        viewport_width = self.viewport_height * (self.width / self.height)

        viewport_u = vec3(viewport_width, 0.0, 0.0)
        viewport_v = vec3(0.0, self.viewport_height, 0.0)
        pixel_delta_u = viewport_u / self.width
        pixel_delta_v = viewport_v / self.height

        lower_left = (
            center - vec3(0.0, 0.0, self.focal_length) - viewport_u / 2.0 - viewport_v / 2.0
        )
        pixel_origin = lower_left + (pixel_delta_u + pixel_delta_v) / 2.0

        object.__setattr__(self, "center", center)
        object.__setattr__(self, "jitter", JitterPattern(self.jitter))
        object.__setattr__(self, "pixel_delta_u", pixel_delta_u)
        object.__setattr__(self, "pixel_delta_v", pixel_delta_v)
        object.__setattr__(self, "pixel_origin", pixel_origin)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


def pixel_center(camera: PinholeCamera, x: int, y: int) -> Vec3:
    """World-space center of pixel (x, y) on the viewport."""
    return camera.pixel_origin + x * camera.pixel_delta_u + y * camera.pixel_delta_v


def get_ray(camera: PinholeCamera, x: int, y: int) -> Ray:
    """Generate the ray through the center of pixel (x, y), without jitter."""
    return Ray(camera.center, pixel_center(camera, x, y) - camera.center)


def sample_offset(camera: PinholeCamera, sampler: Sampler) -> Vec3:
    """Random sub-pixel offset for one sample (2 draws).

    Each term is (-0.5 + U[0, 1)) times a pixel step. The second step is
    pixel_delta_u for SINGLE_AXIS and pixel_delta_v for PIXEL_AREA.
    """
    first = (-0.5 + sampler.random()) * camera.pixel_delta_u
    if camera.jitter == JitterPattern.PIXEL_AREA:
        second_delta = camera.pixel_delta_v
    else:
        second_delta = camera.pixel_delta_u
    second = (-0.5 + sampler.random()) * second_delta
    return first + second


def get_ray_jittered(camera: PinholeCamera, sampler: Sampler, x: int, y: int) -> Ray:
    """Generate a jittered ray through pixel (x, y) for antialiasing.

    Args:
        camera: The camera.
        sampler: Uniform random source (2 draws).
        x: Pixel x-coordinate (0 = left).
        y: Pixel y-coordinate (0 = bottom).

    Returns:
        A ray from the camera center through a random point of the pixel.
    """
    target = pixel_center(camera, x, y) + sample_offset(camera, sampler)
    return Ray(camera.center, target - camera.center)
