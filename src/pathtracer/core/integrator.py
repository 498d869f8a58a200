"""Recursive path tracing integrator.

This module implements the radiance recurrence and the per-pixel sampling
loop. For a ray r and remaining depth n:

    radiance(r, 0) = black
    radiance(r, n) = albedo * radiance(outgoing, n - 1) + emitted   on a hit
    radiance(r, n) = background(r)                                  on a miss

Paths are cut off at a fixed depth rather than by Russian roulette, which
darkens very long light paths slightly. Emission is added without being
scaled by the albedo of the emitter.

Hits closer than T_MIN are ignored so that a scattered ray does not
immediately hit the surface it leaves.

Example:
    >>> from pathtracer.camera.pinhole import PinholeCamera
    >>> from pathtracer.core.integrator import RenderSettings, render_image
    >>> from pathtracer.core.sampler import NumpySampler
    >>> from pathtracer.materials import Lambertian
    >>> from pathtracer.scene.intersection import Scene
    >>>
    >>> scene = Scene()
    >>> sphere = scene.add_sphere((0, 0, -1), 0.5, Lambertian((0.7, 0.3, 0.3)))
    >>> camera = PinholeCamera(width=32, height=24)
    >>> rows = render_image(camera, scene, NumpySampler(1), RenderSettings(samples=4))
    >>> len(rows), len(rows[0])
    (24, 96)
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

import numpy as np
import numpy.typing as npt

from pathtracer.camera.pinhole import PinholeCamera, get_ray_jittered
from pathtracer.core.film import image_rows, resolve
from pathtracer.core.interval import UNIT, Interval, bounded_int
from pathtracer.core.ray import Color, Ray, as_vec3, normalize
from pathtracer.core.sampler import Sampler
from pathtracer.output.export import ImageFormat, save_image
from pathtracer.scene.intersection import Scene

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Default samples per pixel and path depth
DEFAULT_SAMPLES = 100
DEFAULT_MAX_DEPTH = 30

# Upper bound on path depth; each bounce is one Python stack frame
MAX_DEPTH_LIMIT = 500

# t_min and t_max for ray intersection
T_MIN = 0.001
T_MAX = math.inf

HIT_INTERVAL = Interval(T_MIN, T_MAX)

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


# =============================================================================
# Background Radiance
# =============================================================================


@dataclass(frozen=True, eq=False)
class ConstantBackground:
    """Uniform background radiance returned by every escaping ray.

    Attributes:
        color: Background radiance (RGB). Defaults to mid-gray.
    """

    color: Color = (0.5, 0.5, 0.5)

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", as_vec3(self.color))

    def radiance(self, ray: Ray) -> Color:
        return self.color


@dataclass(frozen=True, eq=False)
class GradientBackground:
    """Vertical sky gradient.

    Blends from ``horizon`` to ``zenith`` by the y component of the
    normalized ray direction, clamped to [0, 1]. Rays pointing downward see
    the horizon color.

    Attributes:
        horizon: Radiance for rays with y <= 0 (RGB).
        zenith: Radiance for rays pointing straight up (RGB).
    """

    horizon: Color = (0.0, 0.0, 139.0 / 255.0)
    zenith: Color = (1.0, 1.0, 1.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "horizon", as_vec3(self.horizon))
        object.__setattr__(self, "zenith", as_vec3(self.zenith))

    def radiance(self, ray: Ray) -> Color:
        t = UNIT.clamp(float(normalize(ray.direction)[1]))
        return (1.0 - t) * self.horizon + t * self.zenith


Background = Union[ConstantBackground, GradientBackground]


# =============================================================================
# Render Settings
# =============================================================================


@dataclass(frozen=True)
class RenderSettings:
    """Sampling configuration for a render.

    Attributes:
        samples: Number of jittered samples per pixel.
        max_depth: Maximum number of ray segments per path.
        background: Radiance returned by rays that escape the scene.

    Raises:
        ValueError: If samples < 1 or max_depth is outside [1, MAX_DEPTH_LIMIT].
    """

    samples: int = DEFAULT_SAMPLES
    max_depth: int = DEFAULT_MAX_DEPTH
    background: Background = field(default_factory=ConstantBackground)

    def __post_init__(self) -> None:
        samples = bounded_int(self.samples, Interval(1, math.inf))
        if samples is None:
            raise ValueError(f"Samples per pixel must be a positive integer, got {self.samples!r}")
        max_depth = bounded_int(self.max_depth, Interval(1, MAX_DEPTH_LIMIT))
        if max_depth is None:
            raise ValueError(
                f"Max depth must be an integer in [1, {MAX_DEPTH_LIMIT}], got {self.max_depth!r}"
            )
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "max_depth", max_depth)


# =============================================================================
# Path Tracing Core
# =============================================================================


def radiance(
    sampler: Sampler,
    ray: Ray,
    scene: Scene,
    depth: int,
    background: Background,
) -> Color:
    """Estimate the radiance carried back along a ray.

    Args:
        sampler: Uniform random source for material bounces.
        ray: The ray to trace.
        scene: The scene to intersect.
        depth: Remaining path depth. At 0 the result is black.
        background: Radiance for rays that hit nothing.

    Returns:
        The radiance estimate (RGB).
    """
    if depth <= 0:
        return np.zeros(3, dtype=np.float64)

    hit = scene.closest_intersection(sampler, ray, HIT_INTERVAL)
    if hit is None:
        return np.array(background.radiance(ray), dtype=np.float64)

    bounced = radiance(sampler, hit.outgoing, scene, depth - 1, background)
    return hit.albedo * bounced + hit.emitted


def sample_pixel(
    camera: PinholeCamera,
    scene: Scene,
    sampler: Sampler,
    settings: RenderSettings,
    x: int,
    y: int,
) -> Color:
    """Average settings.samples jittered radiance estimates for one pixel."""
    total = np.zeros(3, dtype=np.float64)
    for _ in range(settings.samples):
        ray = get_ray_jittered(camera, sampler, x, y)
        total += radiance(sampler, ray, scene, settings.max_depth, settings.background)
    return total / settings.samples


def render(
    camera: PinholeCamera,
    scene: Scene,
    sampler: Sampler,
    settings: RenderSettings | None = None,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.float32]:
    """Render the averaged linear radiance of every pixel.

    Pixels are visited bottom to top, left to right, drawing from the single
    sampler in that order.

    Args:
        camera: The camera defining image size and viewport.
        scene: The scene to render.
        sampler: Uniform random source for jitter and bounces.
        settings: Sampling configuration. Defaults to RenderSettings().
        callback: Optional function called after each row with
            (rows_done, total_rows).

    Returns:
        float32 array of shape (height, width, 3), row 0 at the bottom.
    """
    if settings is None:
        settings = RenderSettings()

    width, height = camera.width, camera.height
    image = np.zeros((height, width, 3), dtype=np.float32)

    logger.info(
        "Rendering %dx%d, %d samples per pixel, depth %d, %d primitives",
        width,
        height,
        settings.samples,
        settings.max_depth,
        len(scene),
    )
    start_time = time.perf_counter()

    for y in range(height):
        for x in range(width):
            image[y, x] = sample_pixel(camera, scene, sampler, settings, x, y)
        logger.debug("%d lines remaining", height - y - 1)
        if callback is not None:
            callback(y + 1, height)

    logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
    return image


def render_image(
    camera: PinholeCamera,
    scene: Scene,
    sampler: Sampler,
    settings: RenderSettings | None = None,
    callback: ProgressCallback | None = None,
) -> list[bytes]:
    """Render a scene to rows of blue-green-red bytes.

    Returns:
        One bytes object of length 3 * width per row, bottom row first.
    """
    linear = render(camera, scene, sampler, settings, callback)
    return image_rows(resolve(linear))


def render_to_file(
    camera: PinholeCamera,
    scene: Scene,
    sampler: Sampler,
    path: str | Path,
    settings: RenderSettings | None = None,
    image_format: ImageFormat | None = None,
    callback: ProgressCallback | None = None,
) -> Path:
    """Render a scene and write it with the matching raster encoder.

    Args:
        camera: The camera defining image size and viewport.
        scene: The scene to render.
        sampler: Uniform random source for jitter and bounces.
        path: Output file path.
        settings: Sampling configuration. Defaults to RenderSettings().
        image_format: An ImageFormat, or None to infer it from the suffix.
        callback: Optional per-row progress callback.

    Returns:
        The path that was written.

    Raises:
        OSError: If the file cannot be written.
        ValueError: If the format cannot be determined.
    """
    rows = render_image(camera, scene, sampler, settings, callback)
    return save_image(rows, path, image_format)
