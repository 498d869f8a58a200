"""Rect primitive: a single-sided parallelogram.

A rect is defined by:
- origin: A corner point
- u: Edge vector from origin to an adjacent corner
- v: Edge vector from origin to the other adjacent corner

The plane normal is normalize(v x u) and the plane offset is
d = normal . origin, so every point P on the plane satisfies normal . P = d.

Ray-rect intersection:
1. Solve t = (d - normal . ray.origin) / (normal . ray.direction)
2. Express the hit point in planar coordinates
       alpha = (P - origin) . u / |u|^2
       beta = (P - origin) . v / |v|^2
3. Accept the hit when both lie in [0, 1]

Rays are only accepted when normal . direction >= 1e-6, i.e. when they
travel along the plane normal. Rays near-parallel to the plane and rays
arriving from the other side are both rejected, so each rect is visible from
one side only. Build rects with their edges ordered so that v x u points away
from the viewer.

Example:
    >>> from pathtracer.core.ray import vec3
    >>> from pathtracer.geometry.rect import Rect
    >>> from pathtracer.materials import Lambertian
    >>> floor = Rect(vec3(0, 0, 0), vec3(1, 0, 0), vec3(0, 0, -1),
    ...              Lambertian((0.8, 0.8, 0.8)))
    >>> floor.normal
    array([ 0., -1.,  0.])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from pathtracer.core.interval import UNIT, Interval
from pathtracer.core.ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    length_squared,
    normalize,
)
from pathtracer.core.sampler import Sampler
from pathtracer.materials import Material

from .hit import Hit, PrimitiveType, make_hit

# Minimum normal . direction for a ray to count as hitting the rect
PARALLEL_EPSILON = 1e-6


@dataclass(frozen=True, eq=False)
class Rect:
    """A parallelogram defined by a corner point and two edge vectors.

    The rect has vertices at origin, origin+u, origin+v and origin+u+v.

    Attributes:
        origin: The corner point of the rect.
        u: Edge vector from origin to an adjacent corner.
        v: Edge vector from origin to the other adjacent corner.
        material: The material owned by this rect.
        normal: Unit plane normal, normalize(v x u). Derived.
        d: Plane offset, normal . origin. Derived.
    """

    kind: ClassVar[PrimitiveType] = PrimitiveType.RECT

    origin: Vec3
    u: Vec3
    v: Vec3
    material: Material
    normal: Vec3 = field(init=False)
    d: float = field(init=False)

    def __post_init__(self) -> None:
        origin = as_vec3(self.origin)
        u = as_vec3(self.u)
        v = as_vec3(self.v)
        n = cross(v, u)
        if length_squared(n) == 0.0:
            raise ValueError("Rect edges u and v must not be parallel or zero-length")
        normal = normalize(n)
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "u", u)
        object.__setattr__(self, "v", v)
        object.__setattr__(self, "normal", normal)
        object.__setattr__(self, "d", dot(normal, origin))


def rect_normal(rect: Rect, point: Vec3) -> Vec3:
    """Unit plane normal of the rect (the same at every point)."""
    return rect.normal


def rect_coordinates(rect: Rect, point: Vec3) -> tuple[float, float]:
    """Planar coordinates (alpha, beta) of a point on the rect's plane.

    Args:
        rect: The rect.
        point: A point on the rect's plane.

    Returns:
        A tuple (alpha, beta) with point = origin + alpha * u + beta * v
        when u and v are orthogonal.
    """
    local = point - rect.origin
    alpha = dot(local, rect.u) / length_squared(rect.u)
    beta = dot(local, rect.v) / length_squared(rect.v)
    return alpha, beta


def hit_rect(
    rect: Rect,
    sampler: Sampler,
    ray: Ray,
    hit_interval: Interval,
) -> Hit | None:
    """Test for ray-rect intersection.

    Args:
        rect: The rect to test.
        sampler: Uniform random source for the material bounce.
        ray: The ray to test (direction need not be normalized).
        hit_interval: Valid ray parameters, bounds excluded.

    Returns:
        The intersection record, or None if the ray misses.
    """
    divisor = dot(rect.normal, ray.direction)
    # Near-parallel, or arriving from the invisible side
    if divisor < PARALLEL_EPSILON:
        return None

    t = (rect.d - dot(rect.normal, ray.origin)) / divisor
    if not hit_interval.surrounds(t):
        return None

    position = ray.pos(t)
    alpha, beta = rect_coordinates(rect, position)
    if not UNIT.contains(alpha) or not UNIT.contains(beta):
        return None

    return make_hit(sampler, ray, t, position, rect.normal, rect.material)
