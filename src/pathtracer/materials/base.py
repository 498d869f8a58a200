"""Shared material tags and parameter validation."""

from enum import IntEnum

from pathtracer.core.ray import Color, as_vec3, vec3


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    Used as the tag of the material union so scattering can be dispatched
    with a plain switch.
    """

    DIFFUSE = 0
    LAMBERTIAN = 1
    METAL = 2
    DIFFUSE_LIGHT = 3


BLACK = vec3(0.0, 0.0, 0.0)
WHITE = vec3(1.0, 1.0, 1.0)


def validate_albedo(albedo) -> Color:
    """Convert an (R, G, B) albedo to a vector, checking each component.

    Raises:
        ValueError: If any component is outside [0, 1].
    """
    color = as_vec3(albedo)
    for i, component in enumerate(color):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return color
