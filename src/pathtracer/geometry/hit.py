"""Intersection records shared by all primitives."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from pathtracer.core.ray import Color, Ray, Vec3, dot
from pathtracer.core.sampler import Sampler
from pathtracer.materials import Material, albedo, bounce, emit, is_emitter


class PrimitiveType(IntEnum):
    """Enumeration of supported primitive shapes."""

    SPHERE = 0
    RECT = 1


@dataclass(frozen=True, eq=False)
class Hit:
    """Record of a ray-primitive intersection.

    Created by a primitive's intersection test and consumed straight away by
    the integrator.

    Attributes:
        t: The ray parameter where the intersection occurred.
        position: The 3D point where the ray hit the surface.
        normal: The unit surface normal, always facing against the incoming
            ray.
        front_face: Whether the geometric normal already opposed the ray
            (the ray hit the outside of the surface).
        albedo: Reflectance of the surface material.
        outgoing: The ray scattered by the material.
        is_emitter: Whether the surface emits light.
        emitted: Radiance emitted by the surface.
    """

    t: float
    position: Vec3
    normal: Vec3
    front_face: bool
    albedo: Color
    outgoing: Ray
    is_emitter: bool
    emitted: Color


def face_normal(ray: Ray, outward_normal: Vec3) -> tuple[Vec3, bool]:
    """Orient a geometric normal against the ray.

    Args:
        ray: The incoming ray.
        outward_normal: The primitive's geometric unit normal.

    Returns:
        A tuple (normal, front_face) where normal opposes the ray direction
        and front_face tells whether outward_normal already did.
    """
    front_face = dot(outward_normal, ray.direction) < 0.0
    if front_face:
        return outward_normal, True
    return -outward_normal, False


def make_hit(
    sampler: Sampler,
    ray: Ray,
    t: float,
    position: Vec3,
    outward_normal: Vec3,
    material: Material,
) -> Hit:
    """Assemble a Hit, letting the material scatter the ray.

    Args:
        sampler: Uniform random source passed on to the material.
        ray: The incoming ray.
        t: The accepted ray parameter.
        position: The hit point, ray.pos(t).
        outward_normal: The primitive's geometric unit normal at position.
        material: The primitive's material.

    Returns:
        The complete intersection record.
    """
    normal, front_face = face_normal(ray, outward_normal)
    outgoing = bounce(material, sampler, ray, position, normal)
    return Hit(
        t=t,
        position=position,
        normal=normal,
        front_face=front_face,
        albedo=albedo(material),
        outgoing=outgoing,
        is_emitter=is_emitter(material),
        emitted=emit(material),
    )
