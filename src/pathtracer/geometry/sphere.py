"""Sphere primitive with ray-sphere intersection.

The intersection solves |origin + t * direction - center|^2 = radius^2 in
normalized ("pq") form. Dividing through by |direction|^2 gives

    t^2 + 2 * half_p * t + q = 0

with

    half_p = direction . (origin - center) / |direction|^2
    q = (|origin - center|^2 - radius^2) / |direction|^2

so the roots are -half_p -/+ sqrt(half_p^2 - q). Working with half of the
linear coefficient avoids the factor-of-four cancellation of the textbook
formula.

Example:
    >>> from pathtracer.core.interval import Interval
    >>> from pathtracer.core.ray import Ray, vec3
    >>> from pathtracer.core.sampler import SequenceSampler
    >>> from pathtracer.geometry.sphere import Sphere, hit_sphere
    >>> from pathtracer.materials import Lambertian
    >>> sphere = Sphere(vec3(0, 0, -1), 0.5, Lambertian((0.5, 0.5, 0.5)))
    >>> ray = Ray(vec3(0, 0, 0), vec3(0, 0, -1))
    >>> hit_sphere(sphere, SequenceSampler([0.3]), ray, Interval(0.001, 10.0)).t
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray, Vec3, as_vec3, dot, length_squared, normalize
from pathtracer.core.sampler import Sampler
from pathtracer.materials import Material

from .hit import Hit, PrimitiveType, make_hit


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: The material owned by this sphere.
    """

    kind: ClassVar[PrimitiveType] = PrimitiveType.SPHERE

    center: Vec3
    radius: float
    material: Material

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center))
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "radius", float(self.radius))


def sphere_normal(sphere: Sphere, point: Vec3) -> Vec3:
    """Outward unit normal of the sphere at a surface point."""
    return normalize(point - sphere.center)


def hit_sphere(
    sphere: Sphere,
    sampler: Sampler,
    ray: Ray,
    hit_interval: Interval,
) -> Hit | None:
    """Test for ray-sphere intersection.

    The nearer root is tried first. If it lies outside the open hit
    interval, the farther root is tried, which finds the back face when the
    ray starts inside the sphere.

    Args:
        sphere: The sphere to test.
        sampler: Uniform random source for the material bounce.
        ray: The ray to test (direction need not be normalized).
        hit_interval: Valid ray parameters, bounds excluded.

    Returns:
        The intersection record, or None if the ray misses.
    """
    center_to_origin = ray.origin - sphere.center
    direction_length_squared = length_squared(ray.direction)
    half_p = dot(ray.direction, center_to_origin) / direction_length_squared
    q = (
        length_squared(center_to_origin) - sphere.radius * sphere.radius
    ) / direction_length_squared

    discriminant = half_p * half_p - q
    # No real roots
    if discriminant < 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    t = -half_p - sqrt_d
    if not hit_interval.surrounds(t):
        t = -half_p + sqrt_d
        if not hit_interval.surrounds(t):
            return None

    position = ray.pos(t)
    outward_normal = sphere_normal(sphere, position)
    return make_hit(sampler, ray, t, position, outward_normal, sphere.material)
