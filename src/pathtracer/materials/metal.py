"""Metal (specular reflective) material implementation.

Perfect metals (fuzz = 0) reflect like a mirror. Rougher metals perturb the
reflected direction by a random unit vector scaled by the fuzz factor:

    R = normalize(I - 2(I . N)N) + fuzz * random_unit_vector

where I is the incident direction and N is the surface normal.

The random vector is drawn even when fuzz is 0, so every material bounce
consumes the same number of random numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from pathtracer.core.ray import (
    Color,
    Ray,
    Vec3,
    normalize,
    random_unit_vector,
    reflect,
)
from pathtracer.core.sampler import Sampler

from .base import MaterialType, validate_albedo
from .lambertian import safe_direction


@dataclass(frozen=True, eq=False)
class Metal:
    """Metal (specular reflective) material properties.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: The surface roughness in [0, 1].
            0 = perfect mirror, 1 = maximum fuzziness.
    """

    kind: ClassVar[MaterialType] = MaterialType.METAL

    albedo: Color
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))
        if self.fuzz < 0.0 or self.fuzz > 1.0:
            raise ValueError(
                f"Fuzz = {self.fuzz} is outside [0, 1]. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )


def bounce_metal(
    fuzz: float,
    sampler: Sampler,
    incoming: Ray,
    position: Vec3,
    normal: Vec3,
) -> Ray:
    """Reflect the incoming ray about the normal, with optional fuzz.

    Args:
        fuzz: The surface roughness in [0, 1].
        sampler: Uniform random source (3 draws).
        incoming: The ray that hit the surface.
        position: The hit point the new ray starts from.
        normal: The front-facing surface normal (unit length).

    Returns:
        The reflected ray. With fuzz = 0 its direction is the unit mirror
        direction.
    """
    reflected = normalize(reflect(incoming.direction, normal))
    direction = reflected + fuzz * random_unit_vector(sampler)
    return Ray(position, safe_direction(direction, normal))
