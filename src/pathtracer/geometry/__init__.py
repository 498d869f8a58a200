"""Geometry module for shape primitives.

Components:
    hit: Intersection record and front-face orientation
    sphere: Sphere primitive with ray-sphere intersection
    rect: Single-sided parallelogram with ray-plane intersection
    primitive: Primitive union and intersection dispatch

Every primitive owns exactly one material. On a hit, the primitive asks its
material to scatter the ray and returns the complete record:
    hit = intersect(primitive, sampler, ray, hit_interval)
"""

from .hit import Hit, PrimitiveType, face_normal, make_hit
from .primitive import Primitive, intersect, normal
from .rect import PARALLEL_EPSILON, Rect, hit_rect, rect_coordinates, rect_normal
from .sphere import Sphere, hit_sphere, sphere_normal

__all__ = [
    "Hit",
    "PrimitiveType",
    "face_normal",
    "make_hit",
    "Primitive",
    "intersect",
    "normal",
    "Sphere",
    "hit_sphere",
    "sphere_normal",
    "Rect",
    "hit_rect",
    "rect_normal",
    "rect_coordinates",
    "PARALLEL_EPSILON",
]
