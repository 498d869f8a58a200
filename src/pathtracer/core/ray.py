"""Ray data structure and vector utilities.

This module provides the Ray dataclass and the small set of vector helpers
the renderer uses. Vectors and colors are NumPy float64 arrays of shape (3,).

Sampling helpers take an explicit sampler so that every random draw can be
replayed in tests.

Example:
    >>> from pathtracer.core.ray import Ray, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -2.0))
    >>> ray.pos(0.5)  # Point halfway along the (unnormalized) direction
    array([ 0.,  0., -1.])
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from .sampler import Sampler

Vec3 = npt.NDArray[np.float64]
Color = Vec3

# Components below this magnitude count as zero for degenerate directions
NEAR_ZERO_EPSILON = 1e-6


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3-component float64 vector."""
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(values) -> Vec3:
    """Convert a tuple, list or array of three numbers to a vector."""
    v = np.asarray(values, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {v.shape}")
    return v.copy()


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be unit
            length, so the ray parameter t is measured in multiples of
            ``|direction|``.
    """

    origin: Vec3
    direction: Vec3

    def pos(self, t: float) -> Vec3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. No bounds are checked.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + self.direction * t


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    return np.cross(a, b)


def length_squared(v: Vec3) -> float:
    return float(np.dot(v, v))


def length(v: Vec3) -> float:
    return float(np.sqrt(np.dot(v, v)))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    The caller must make sure v is not zero-length.
    """
    return v / length(v)


def near_zero(v: Vec3) -> bool:
    """Check if every component of v is within NEAR_ZERO_EPSILON of zero."""
    return bool(np.all(np.abs(v) < NEAR_ZERO_EPSILON))


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a unit normal.

    Computes incident - 2 * (incident . normal) * normal, scaling the normal
    by the dot product first.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The surface normal (unit length).

    Returns:
        The mirrored direction, with the same length as incident.
    """
    scaled_normal = normal * (2.0 * dot(incident, normal))
    return incident - scaled_normal


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_unit_vector(sampler: Sampler) -> Vec3:
    """Generate a random unit vector from exactly three uniform draws.

    Each draw is mapped to [-1, 1) and the resulting point is projected onto
    the unit sphere. There is no rejection loop, so the stream position after
    the call is always known. An all-zero point falls back to +z.

    Args:
        sampler: Uniform random source.

    Returns:
        A unit vector.
    """
    p = vec3(
        sampler.random() * 2.0 - 1.0,
        sampler.random() * 2.0 - 1.0,
        sampler.random() * 2.0 - 1.0,
    )
    n2 = length_squared(p)
    if n2 == 0.0:
        return vec3(0.0, 0.0, 1.0)
    return p / np.sqrt(n2)


def random_on_hemisphere(sampler: Sampler, normal: Vec3) -> Vec3:
    """Generate a random unit vector on the hemisphere around a normal.

    Draws a single unit vector and flips it when it points below the surface.

    Args:
        sampler: Uniform random source.
        normal: The surface normal defining the hemisphere orientation.

    Returns:
        A unit vector whose dot product with normal is positive.
    """
    on_sphere = random_unit_vector(sampler)
    if dot(on_sphere, normal) > 0.0:
        return on_sphere
    return -on_sphere
