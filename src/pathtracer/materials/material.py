"""Material union and scattering dispatch.

The set of materials is closed: Diffuse, Lambertian, Metal and DiffuseLight.
Each carries a ``kind`` tag, and the functions here switch on that tag
instead of relying on per-class virtual methods.

Each material answers four questions for the integrator:
    - bounce(): sample the outgoing ray from a hit point
    - albedo(): per-channel reflectance applied to the recursive radiance
    - is_emitter(): whether the surface emits light
    - emit(): the emitted radiance (black unless the material is a light)
"""

from __future__ import annotations

from typing import Union

from pathtracer.core.ray import Color, Ray, Vec3
from pathtracer.core.sampler import Sampler

from .base import BLACK, WHITE, MaterialType
from .diffuse import Diffuse, bounce_diffuse
from .diffuse_light import DiffuseLight
from .lambertian import Lambertian, bounce_lambertian
from .metal import Metal, bounce_metal

Material = Union[Diffuse, Lambertian, Metal, DiffuseLight]


def bounce(
    material: Material,
    sampler: Sampler,
    incoming: Ray,
    position: Vec3,
    normal: Vec3,
) -> Ray:
    """Sample the outgoing ray for a material.

    Args:
        material: The material of the hit surface.
        sampler: Uniform random source. Every variant draws exactly 3 floats.
        incoming: The ray that hit the surface.
        position: The hit point.
        normal: The front-facing surface normal (unit length).

    Returns:
        The scattered ray starting at position.

    Raises:
        ValueError: If the material kind is unknown.
    """
    kind = material.kind
    if kind == MaterialType.LAMBERTIAN:
        return bounce_lambertian(sampler, position, normal)
    if kind == MaterialType.METAL:
        return bounce_metal(material.fuzz, sampler, incoming, position, normal)
    if kind == MaterialType.DIFFUSE or kind == MaterialType.DIFFUSE_LIGHT:
        return bounce_diffuse(sampler, position, normal)
    raise ValueError(f"Unknown material type: {kind}")


def albedo(material: Material) -> Color:
    """Get the per-channel reflectance of a material."""
    kind = material.kind
    if kind == MaterialType.DIFFUSE_LIGHT:
        return WHITE
    if kind in (MaterialType.DIFFUSE, MaterialType.LAMBERTIAN, MaterialType.METAL):
        return material.albedo
    raise ValueError(f"Unknown material type: {kind}")


def is_emitter(material: Material) -> bool:
    return material.kind == MaterialType.DIFFUSE_LIGHT


def emit(material: Material) -> Color:
    """Get the radiance emitted by a material (black for non-emitters)."""
    if material.kind == MaterialType.DIFFUSE_LIGHT:
        return material.emission
    return BLACK
