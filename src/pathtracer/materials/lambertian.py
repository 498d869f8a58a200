"""Lambertian (ideal diffuse) material implementation.

The scattered direction is ``normal + random_unit_vector``. The endpoint of
that sum lies on a unit sphere tangent to the surface at the hit point, which
gives a cosine-weighted distribution around the normal.

Because the distribution already follows cos(theta), the attenuation is just
the albedo: no BRDF or pdf term appears in the integrator.

Example:
    >>> from pathtracer.core.ray import vec3
    >>> from pathtracer.core.sampler import SequenceSampler
    >>> from pathtracer.materials.lambertian import bounce_lambertian
    >>> ray = bounce_lambertian(SequenceSampler([0.5, 0.5, 0.75]),
    ...                         vec3(0, 0, 0), vec3(0, 1, 0))
    >>> ray.direction
    array([0., 1., 1.])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from pathtracer.core.ray import (
    Color,
    Ray,
    Vec3,
    length_squared,
    near_zero,
    normalize,
    random_unit_vector,
)
from pathtracer.core.sampler import Sampler

from .base import MaterialType, validate_albedo


@dataclass(frozen=True, eq=False)
class Lambertian:
    """Lambertian (ideal diffuse) material properties.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
            Represents the fraction of light reflected for each color channel.
    """

    kind: ClassVar[MaterialType] = MaterialType.LAMBERTIAN

    albedo: Color

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))


def safe_direction(direction: Vec3, normal: Vec3) -> Vec3:
    """Guard against a degenerate, nearly zero-length scatter direction.

    When every component of direction is close to zero, the direction is
    renormalized to unit length. An exactly zero vector falls back to the
    surface normal.

    Args:
        direction: The candidate scatter direction.
        normal: The front-facing surface normal.

    Returns:
        A direction that is safe to trace.
    """
    if near_zero(direction):
        if length_squared(direction) == 0.0:
            return normal.copy()
        return normalize(direction)
    return direction


def bounce_lambertian(sampler: Sampler, position: Vec3, normal: Vec3) -> Ray:
    """Sample a cosine-weighted outgoing ray around the normal.

    Args:
        sampler: Uniform random source (3 draws).
        position: The hit point the new ray starts from.
        normal: The front-facing surface normal.

    Returns:
        The scattered ray. Its direction is not normalized.
    """
    direction = normal + random_unit_vector(sampler)
    return Ray(position, safe_direction(direction, normal))
