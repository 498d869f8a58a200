"""Primitive union and intersection dispatch."""

from __future__ import annotations

from typing import Union

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray, Vec3
from pathtracer.core.sampler import Sampler

from .hit import Hit, PrimitiveType
from .rect import Rect, hit_rect, rect_normal
from .sphere import Sphere, hit_sphere, sphere_normal

Primitive = Union[Sphere, Rect]


def intersect(
    primitive: Primitive,
    sampler: Sampler,
    ray: Ray,
    hit_interval: Interval,
) -> Hit | None:
    """Intersect a ray with any primitive.

    Raises:
        ValueError: If the primitive kind is unknown.
    """
    kind = primitive.kind
    if kind == PrimitiveType.SPHERE:
        return hit_sphere(primitive, sampler, ray, hit_interval)
    if kind == PrimitiveType.RECT:
        return hit_rect(primitive, sampler, ray, hit_interval)
    raise ValueError(f"Unknown primitive type: {kind}")


def normal(primitive: Primitive, point: Vec3) -> Vec3:
    """Geometric unit normal of a primitive at a surface point."""
    kind = primitive.kind
    if kind == PrimitiveType.SPHERE:
        return sphere_normal(primitive, point)
    if kind == PrimitiveType.RECT:
        return rect_normal(primitive, point)
    raise ValueError(f"Unknown primitive type: {kind}")
