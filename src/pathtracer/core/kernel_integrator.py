"""Taichi path tracing kernel.

A parallel version of the recursive integrator in pathtracer.core.integrator.
The scene is packed into flat arrays once per render, and every pixel traces
one path per kernel launch. The radiance recurrence is unrolled into a loop
that carries a throughput:

    on a hit:  radiance += throughput * emitted;  throughput *= albedo
    on a miss: radiance += throughput * background
    out of depth: nothing is added

which sums to the same value as the recursion.

Random numbers come from ti.random, seeded by init_backend(random_seed=...),
so renders are reproducible for a given seed and backend but do not match
the sampler-driven reference renderer draw for draw. Arithmetic is float32.

Example:
    >>> from pathtracer.core.film import init_backend
    >>> from pathtracer.core.integrator import RenderSettings
    >>> from pathtracer.core.kernel_integrator import render_kernel
    >>> from pathtracer.scene import create_cornell_box_scene
    >>> from pathtracer.scene.cornell_box import CornellBoxParams
    >>>
    >>> init_backend("cpu", random_seed=7)
    >>> scene, camera = create_cornell_box_scene(CornellBoxParams(width=32, height=24))
    >>> render_kernel(camera, scene, RenderSettings(samples=4)).shape
    (24, 32, 3)
"""

import logging
import time
from typing import NamedTuple, Optional

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from pathtracer.camera.pinhole import JitterPattern, PinholeCamera
from pathtracer.core.film import image_rows, init_backend, is_backend_initialized, resolve
from pathtracer.core.integrator import (
    T_MIN,
    ConstantBackground,
    GradientBackground,
    ProgressCallback,
    RenderSettings,
)
from pathtracer.core.ray import NEAR_ZERO_EPSILON
from pathtracer.geometry.hit import PrimitiveType
from pathtracer.geometry.rect import PARALLEL_EPSILON
from pathtracer.materials import MaterialType
from pathtracer.scene.intersection import Scene

logger = logging.getLogger(__name__)

vec3 = tm.vec3

# =============================================================================
# Constants
# =============================================================================

# Stand-in for an unbounded hit interval in float32
T_FAR = 1.0e30

# Packed geometry row: sphere = center, radius; rect = origin, u, v, normal, d
GEOMETRY_WIDTH = 13
# Packed material row: albedo, fuzz, emission
MATERIAL_WIDTH = 7

BACKGROUND_CONSTANT = 0
BACKGROUND_GRADIENT = 1


# =============================================================================
# Scene Packing
# =============================================================================


class PackedScene(NamedTuple):
    """Scene primitives flattened into arrays for the kernel.

    Row i of every array describes primitive i, in scene order. Arrays hold
    at least one row so an empty scene still has valid kernel arguments;
    count is the number of real primitives.
    """

    count: int
    kinds: npt.NDArray[np.int32]
    geometry: npt.NDArray[np.float32]
    material_kinds: npt.NDArray[np.int32]
    materials: npt.NDArray[np.float32]


def pack_scene(scene: Scene) -> PackedScene:
    """Flatten a scene's spheres, rects and their materials into arrays.

    Raises:
        ValueError: If a primitive or material kind is unknown.
    """
    count = len(scene)
    rows = max(count, 1)
    kinds = np.zeros(rows, dtype=np.int32)
    geometry = np.zeros((rows, GEOMETRY_WIDTH), dtype=np.float32)
    material_kinds = np.zeros(rows, dtype=np.int32)
    materials = np.zeros((rows, MATERIAL_WIDTH), dtype=np.float32)

    for i, primitive in enumerate(scene):
        kinds[i] = int(primitive.kind)
        if primitive.kind == PrimitiveType.SPHERE:
            geometry[i, 0:3] = primitive.center
            geometry[i, 3] = primitive.radius
        elif primitive.kind == PrimitiveType.RECT:
            geometry[i, 0:3] = primitive.origin
            geometry[i, 3:6] = primitive.u
            geometry[i, 6:9] = primitive.v
            geometry[i, 9:12] = primitive.normal
            geometry[i, 12] = primitive.d
        else:
            raise ValueError(f"Unknown primitive type: {primitive.kind}")

        material = primitive.material
        material_kinds[i] = int(material.kind)
        if material.kind == MaterialType.DIFFUSE_LIGHT:
            materials[i, 0:3] = 1.0
            materials[i, 4:7] = material.emission
        elif material.kind in (MaterialType.DIFFUSE, MaterialType.LAMBERTIAN):
            materials[i, 0:3] = material.albedo
        elif material.kind == MaterialType.METAL:
            materials[i, 0:3] = material.albedo
            materials[i, 3] = material.fuzz
        else:
            raise ValueError(f"Unknown material type: {material.kind}")

    return PackedScene(count, kinds, geometry, material_kinds, materials)


def pack_background(background) -> tuple[int, npt.NDArray[np.float32]]:
    """Encode a background as a kind tag and two colors.

    Returns:
        A tuple (kind, colors) where colors has shape (2, 3). A constant
        background stores its color twice; a gradient stores horizon then
        zenith.

    Raises:
        ValueError: If the background type is unknown.
    """
    if isinstance(background, ConstantBackground):
        return BACKGROUND_CONSTANT, np.array([background.color] * 2, dtype=np.float32)
    if isinstance(background, GradientBackground):
        return BACKGROUND_GRADIENT, np.array(
            [background.horizon, background.zenith], dtype=np.float32
        )
    raise ValueError(f"Unknown background type: {type(background).__name__}")


def pack_camera(camera: PinholeCamera) -> npt.NDArray[np.float32]:
    """Rows: center, pixel origin, pixel delta u, pixel delta v."""
    return np.array(
        [camera.center, camera.pixel_origin, camera.pixel_delta_u, camera.pixel_delta_v],
        dtype=np.float32,
    )


# =============================================================================
# Sampling and Intersection
# =============================================================================


@ti.func
def random_unit_vector() -> vec3:
    """Project a point of [-1, 1)^3 onto the unit sphere; the origin maps to +z."""
    p = vec3(
        ti.random(ti.f32) * 2.0 - 1.0,
        ti.random(ti.f32) * 2.0 - 1.0,
        ti.random(ti.f32) * 2.0 - 1.0,
    )
    n2 = p.dot(p)
    result = vec3(0.0, 0.0, 1.0)
    if n2 > 0.0:
        result = p / ti.sqrt(n2)
    return result


@ti.func
def safe_direction(direction: vec3, normal: vec3) -> vec3:
    """Renormalize a near-zero scatter direction, or fall back to the normal."""
    result = direction
    if (
        ti.abs(direction.x) < NEAR_ZERO_EPSILON
        and ti.abs(direction.y) < NEAR_ZERO_EPSILON
        and ti.abs(direction.z) < NEAR_ZERO_EPSILON
    ):
        n2 = direction.dot(direction)
        if n2 > 0.0:
            result = direction / ti.sqrt(n2)
        else:
            result = normal
    return result


@ti.func
def hit_sphere_t(
    origin: vec3,
    direction: vec3,
    center: vec3,
    radius: ti.f32,
    t_min: ti.f32,
    t_max: ti.f32,
) -> ti.f32:
    """Ray parameter of the nearest sphere hit in (t_min, t_max), or -1 on a miss."""
    center_to_origin = origin - center
    direction_length_squared = direction.dot(direction)
    half_p = direction.dot(center_to_origin) / direction_length_squared
    q = (center_to_origin.dot(center_to_origin) - radius * radius) / direction_length_squared

    t = -1.0
    discriminant = half_p * half_p - q
    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        near = -half_p - sqrt_d
        far = -half_p + sqrt_d
        if t_min < near and near < t_max:
            t = near
        elif t_min < far and far < t_max:
            t = far
    return t


@ti.func
def hit_rect_t(
    origin: vec3,
    direction: vec3,
    corner: vec3,
    u: vec3,
    v: vec3,
    normal: vec3,
    d: ti.f32,
    t_min: ti.f32,
    t_max: ti.f32,
) -> ti.f32:
    """Ray parameter of a front-side rect hit in (t_min, t_max), or -1 on a miss."""
    t = -1.0
    divisor = normal.dot(direction)
    # Rects are only visible from the side their normal faces
    if divisor >= PARALLEL_EPSILON:
        candidate = (d - normal.dot(origin)) / divisor
        if t_min < candidate and candidate < t_max:
            local = origin + candidate * direction - corner
            alpha = local.dot(u) / u.dot(u)
            beta = local.dot(v) / v.dot(v)
            if 0.0 <= alpha and alpha <= 1.0 and 0.0 <= beta and beta <= 1.0:
                t = candidate
    return t


@ti.func
def background_radiance(kind: ti.i32, first: vec3, second: vec3, direction: vec3) -> vec3:
    result = first
    if kind == BACKGROUND_GRADIENT:
        t = tm.clamp(direction.normalized().y, 0.0, 1.0)
        result = (1.0 - t) * first + t * second
    return result


# =============================================================================
# Rendering Kernel
# =============================================================================


@ti.kernel
def _render_one_spp(
    count: ti.i32,
    kinds: ti.types.ndarray(dtype=ti.i32, ndim=1),
    geometry: ti.types.ndarray(dtype=ti.f32, ndim=2),
    material_kinds: ti.types.ndarray(dtype=ti.i32, ndim=1),
    materials: ti.types.ndarray(dtype=ti.f32, ndim=2),
    view: ti.types.ndarray(dtype=ti.f32, ndim=2),
    pixel_area: ti.i32,
    background_kind: ti.i32,
    background: ti.types.ndarray(dtype=ti.f32, ndim=2),
    max_depth: ti.i32,
    samples_done: ti.i32,
    image: ti.types.ndarray(dtype=ti.f32, ndim=3),
):
    """Trace one path per pixel and fold it into the running average.

    Args:
        count: Number of packed primitives.
        kinds, geometry, material_kinds, materials: Arrays from pack_scene().
        view: Camera rows from pack_camera().
        pixel_area: 1 to jitter along both pixel axes, 0 for horizontal only.
        background_kind, background: Values from pack_background().
        max_depth: Maximum number of ray segments per path.
        samples_done: Samples already averaged into image.
        image: Running average of shape (height, width, 3), row 0 at the bottom.
    """
    for y, x in ti.ndrange(image.shape[0], image.shape[1]):
        center = vec3(view[0, 0], view[0, 1], view[0, 2])
        pixel_origin = vec3(view[1, 0], view[1, 1], view[1, 2])
        delta_u = vec3(view[2, 0], view[2, 1], view[2, 2])
        delta_v = vec3(view[3, 0], view[3, 1], view[3, 2])

        # Jittered camera ray
        second_delta = delta_u
        if pixel_area == 1:
            second_delta = delta_v
        target = (
            pixel_origin
            + ti.cast(x, ti.f32) * delta_u
            + ti.cast(y, ti.f32) * delta_v
            + (-0.5 + ti.random(ti.f32)) * delta_u
            + (-0.5 + ti.random(ti.f32)) * second_delta
        )
        origin = center
        direction = target - center

        radiance = vec3(0.0, 0.0, 0.0)
        throughput = vec3(1.0, 1.0, 1.0)

        # Active flag for path continuation (no break in Taichi loops)
        active = 1

        for _ in range(max_depth):
            if active == 1:
                closest_t = T_FAR
                closest = -1
                for i in range(count):
                    t = -1.0
                    if kinds[i] == int(PrimitiveType.SPHERE):
                        t = hit_sphere_t(
                            origin,
                            direction,
                            vec3(geometry[i, 0], geometry[i, 1], geometry[i, 2]),
                            geometry[i, 3],
                            T_MIN,
                            closest_t,
                        )
                    else:
                        t = hit_rect_t(
                            origin,
                            direction,
                            vec3(geometry[i, 0], geometry[i, 1], geometry[i, 2]),
                            vec3(geometry[i, 3], geometry[i, 4], geometry[i, 5]),
                            vec3(geometry[i, 6], geometry[i, 7], geometry[i, 8]),
                            vec3(geometry[i, 9], geometry[i, 10], geometry[i, 11]),
                            geometry[i, 12],
                            T_MIN,
                            closest_t,
                        )
                    if t > 0.0:
                        closest_t = t
                        closest = i

                if closest < 0:
                    sky = background_radiance(
                        background_kind,
                        vec3(background[0, 0], background[0, 1], background[0, 2]),
                        vec3(background[1, 0], background[1, 1], background[1, 2]),
                        direction,
                    )
                    radiance += throughput * sky
                    active = 0
                else:
                    position = origin + closest_t * direction
                    outward = vec3(
                        geometry[closest, 9], geometry[closest, 10], geometry[closest, 11]
                    )
                    if kinds[closest] == int(PrimitiveType.SPHERE):
                        sphere_center = vec3(
                            geometry[closest, 0], geometry[closest, 1], geometry[closest, 2]
                        )
                        outward = (position - sphere_center).normalized()
                    normal = outward
                    if outward.dot(direction) >= 0.0:
                        normal = -outward

                    material_kind = material_kinds[closest]
                    albedo = vec3(
                        materials[closest, 0], materials[closest, 1], materials[closest, 2]
                    )
                    emission = vec3(
                        materials[closest, 4], materials[closest, 5], materials[closest, 6]
                    )

                    scattered = vec3(0.0, 0.0, 0.0)
                    if material_kind == int(MaterialType.LAMBERTIAN):
                        scattered = safe_direction(normal + random_unit_vector(), normal)
                    elif material_kind == int(MaterialType.METAL):
                        reflected = direction - 2.0 * direction.dot(normal) * normal
                        fuzz = materials[closest, 3]
                        scattered = safe_direction(
                            reflected.normalized() + fuzz * random_unit_vector(), normal
                        )
                    else:
                        scattered = random_unit_vector()
                        if scattered.dot(normal) <= 0.0:
                            scattered = -scattered

                    radiance += throughput * emission
                    throughput *= albedo
                    origin = position
                    direction = scattered

        for c in ti.static(range(3)):
            if tm.isnan(radiance[c]) or tm.isinf(radiance[c]):
                radiance[c] = 0.0

        # Running average: avg_n = avg_{n-1} + (x_n - avg_{n-1}) / n
        n = ti.cast(samples_done + 1, ti.f32)
        for c in ti.static(range(3)):
            image[y, x, c] += (radiance[c] - image[y, x, c]) / n


# =============================================================================
# Public Rendering API
# =============================================================================


def render_kernel(
    camera: PinholeCamera,
    scene: Scene,
    settings: Optional[RenderSettings] = None,
    callback: Optional[ProgressCallback] = None,
) -> npt.NDArray[np.float32]:
    """Render the averaged linear radiance of every pixel with Taichi.

    Initializes Taichi on the CPU if no Taichi runtime exists yet.

    Args:
        camera: The camera defining image size and viewport.
        scene: The scene to render.
        settings: Sampling configuration. Defaults to RenderSettings().
        callback: Optional function called after each pass over the image
            with (samples_done, total_samples).

    Returns:
        float32 array of shape (height, width, 3), row 0 at the bottom.

    Raises:
        ValueError: If the scene holds an unknown primitive or material, or
            the background type is unknown.
    """
    if settings is None:
        settings = RenderSettings()
    if not is_backend_initialized():
        init_backend()

    packed = pack_scene(scene)
    background_kind, background = pack_background(settings.background)
    view = pack_camera(camera)
    pixel_area = 1 if camera.jitter == JitterPattern.PIXEL_AREA else 0
    image = np.zeros((camera.height, camera.width, 3), dtype=np.float32)

    logger.info(
        "Rendering %dx%d with Taichi, %d samples per pixel, depth %d, %d primitives",
        camera.width,
        camera.height,
        settings.samples,
        settings.max_depth,
        packed.count,
    )
    start_time = time.perf_counter()

    for sample in range(settings.samples):
        _render_one_spp(
            packed.count,
            packed.kinds,
            packed.geometry,
            packed.material_kinds,
            packed.materials,
            view,
            pixel_area,
            background_kind,
            background,
            settings.max_depth,
            sample,
            image,
        )
        if callback is not None:
            callback(sample + 1, settings.samples)

    logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
    return image


def render_kernel_image(
    camera: PinholeCamera,
    scene: Scene,
    settings: Optional[RenderSettings] = None,
    callback: Optional[ProgressCallback] = None,
) -> list[bytes]:
    """Render with Taichi to rows of blue-green-red bytes, bottom row first."""
    return image_rows(resolve(render_kernel(camera, scene, settings, callback)))
