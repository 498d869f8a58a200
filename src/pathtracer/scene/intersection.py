"""Scene container and closest-hit queries.

A scene is an ordered list of primitives with no spatial acceleration
structure. Intersection is a linear scan that narrows the search window to
the closest hit found so far, so the nearest surface wins regardless of scan
order.

Example:
    >>> from pathtracer.materials import Lambertian
    >>> from pathtracer.scene.intersection import Scene
    >>> scene = Scene()
    >>> sphere = scene.add_sphere((0, 0, -1), 0.5, Lambertian((0.8, 0.3, 0.3)))
    >>> floor = scene.add_rect((-1, -0.5, -2), (2, 0, 0), (0, 0, 2), Lambertian((0.5, 0.5, 0.5)))
    >>> len(scene)
    2
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.sampler import Sampler
from pathtracer.geometry import Hit, Primitive, Rect, Sphere, intersect
from pathtracer.materials import Material


class Scene:
    """Ordered collection of primitives.

    The scene owns its primitives. It is built before rendering and is not
    changed while a render is running.

    Args:
        primitives: Optional initial primitives, kept in order.
    """

    def __init__(self, primitives: Iterable[Primitive] = ()) -> None:
        self._primitives: list[Primitive] = list(primitives)

    def add(self, primitive: Primitive) -> Primitive:
        """Append a primitive to the scene and return it."""
        self._primitives.append(primitive)
        return primitive

    def add_sphere(self, center, radius: float, material: Material) -> Sphere:
        """Create a sphere and add it to the scene.

        Args:
            center: The center point as (x, y, z).
            radius: The radius of the sphere (positive).
            material: The material of the sphere.

        Returns:
            The new sphere.

        Raises:
            ValueError: If the radius is not positive.
        """
        return self.add(Sphere(center, radius, material))

    def add_rect(self, origin, u, v, material: Material) -> Rect:
        """Create a rect and add it to the scene.

        Args:
            origin: The corner point as (x, y, z).
            u: Edge vector from origin to an adjacent corner.
            v: Edge vector from origin to the other adjacent corner.
            material: The material of the rect.

        Returns:
            The new rect.

        Raises:
            ValueError: If u and v are parallel.
        """
        return self.add(Rect(origin, u, v, material))

    def clear(self) -> None:
        """Remove all primitives from the scene."""
        self._primitives.clear()

    @property
    def primitives(self) -> tuple[Primitive, ...]:
        return tuple(self._primitives)

    def __len__(self) -> int:
        return len(self._primitives)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self._primitives)

    def closest_intersection(
        self,
        sampler: Sampler,
        ray: Ray,
        hit_interval: Interval,
    ) -> Hit | None:
        """Test a ray against all primitives and return the closest hit.

        Each accepted hit shrinks the upper bound of the window, so later
        primitives only count if they are strictly closer. On equal t the
        primitive scanned later does not replace the earlier one.

        Args:
            sampler: Uniform random source for material bounces.
            ray: The ray to test.
            hit_interval: Valid ray parameters, bounds excluded.

        Returns:
            The closest intersection, or None if the ray hits nothing.
        """
        return closest_intersection(self._primitives, sampler, ray, hit_interval)

    def __repr__(self) -> str:
        return f"Scene(primitives={len(self._primitives)})"


def closest_intersection(
    primitives: Iterable[Primitive],
    sampler: Sampler,
    ray: Ray,
    hit_interval: Interval,
) -> Hit | None:
    """Linear closest-hit scan over a sequence of primitives."""
    closest_hit = None
    window = hit_interval
    for primitive in primitives:
        hit = intersect(primitive, sampler, ray, window)
        if hit is not None:
            closest_hit = hit
            window = window.with_max(hit.t)
    return closest_hit
