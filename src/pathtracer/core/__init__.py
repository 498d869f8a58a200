"""Core rendering module.

Components:
    interval: Numeric ranges for hit distances and clamping
    ray: Ray data structure and vector utilities
    sampler: Injected uniform random sources
    integrator: Recursive radiance estimation and the pixel sampling loop
    kernel_integrator: The same estimator as a parallel Taichi kernel
    film: Gamma correction and byte quantization of the accumulated image

The integrators and film are NOT imported here to avoid circular imports.
Import them directly from their modules.
"""

from .interval import EMPTY, UNIT, UNIVERSE, Interval
from .ray import (
    Color,
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    length,
    length_squared,
    near_zero,
    normalize,
    random_on_hemisphere,
    random_unit_vector,
    reflect,
    vec3,
)
from .sampler import NumpySampler, Sampler, SequenceSampler

__all__ = [
    "Interval",
    "UNIT",
    "EMPTY",
    "UNIVERSE",
    "Ray",
    "Vec3",
    "Color",
    "vec3",
    "as_vec3",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "near_zero",
    "reflect",
    "random_unit_vector",
    "random_on_hemisphere",
    "Sampler",
    "NumpySampler",
    "SequenceSampler",
]
