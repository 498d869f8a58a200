"""Uniform-hemisphere diffuse material.

The scattered direction is a random unit vector flipped into the hemisphere
of the surface normal. This takes a single unit-vector sample per bounce and
is not cosine weighted, so it is slightly brighter at grazing angles than a
true Lambertian surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from pathtracer.core.ray import Color, Ray, Vec3, random_on_hemisphere
from pathtracer.core.sampler import Sampler

from .base import MaterialType, validate_albedo


@dataclass(frozen=True, eq=False)
class Diffuse:
    """Diffuse material with uniform hemisphere scattering.

    Attributes:
        albedo: Reflectance per channel (RGB, each component in [0, 1]).
    """

    kind: ClassVar[MaterialType] = MaterialType.DIFFUSE

    albedo: Color

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))


def bounce_diffuse(sampler: Sampler, position: Vec3, normal: Vec3) -> Ray:
    """Sample an outgoing ray on the hemisphere around the normal.

    Args:
        sampler: Uniform random source (3 draws).
        position: The hit point the new ray starts from.
        normal: The front-facing surface normal.

    Returns:
        The scattered ray.
    """
    return Ray(position, random_on_hemisphere(sampler, normal))
