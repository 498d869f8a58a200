"""Emissive diffuse material for area and sphere lights.

A light scatters like ``Diffuse`` with a white albedo and adds its emission
to whatever the recursion returns. Emission is not attenuated by albedo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from pathtracer.core.ray import Color, as_vec3

from .base import MaterialType


@dataclass(frozen=True, eq=False)
class DiffuseLight:
    """Light-emitting material.

    Attributes:
        emission: Emitted radiance (RGB). Components may exceed 1.0.
    """

    kind: ClassVar[MaterialType] = MaterialType.DIFFUSE_LIGHT

    emission: Color

    def __post_init__(self) -> None:
        emission = as_vec3(self.emission)
        for i, component in enumerate(emission):
            if component < 0.0:
                raise ValueError(f"Emission component {i} = {component} is negative.")
        object.__setattr__(self, "emission", emission)
