"""Materials module for surface scattering models.

Components:
    diffuse: Uniform hemisphere scattering
    lambertian: Cosine-weighted diffuse scattering
    metal: Mirror reflection with optional fuzz
    diffuse_light: Emissive surfaces
    material: Material union and dispatch (bounce, albedo, emission)

Materials are immutable after construction. Randomness is supplied by the
caller through a sampler argument.
"""

from .base import BLACK, WHITE, MaterialType, validate_albedo
from .diffuse import Diffuse, bounce_diffuse
from .diffuse_light import DiffuseLight
from .lambertian import Lambertian, bounce_lambertian, safe_direction
from .material import Material, albedo, bounce, emit, is_emitter
from .metal import Metal, bounce_metal

__all__ = [
    "MaterialType",
    "Material",
    "BLACK",
    "WHITE",
    "validate_albedo",
    # Variants
    "Diffuse",
    "Lambertian",
    "Metal",
    "DiffuseLight",
    # Per-variant scattering
    "bounce_diffuse",
    "bounce_lambertian",
    "bounce_metal",
    "safe_direction",
    # Dispatch
    "bounce",
    "albedo",
    "is_emitter",
    "emit",
]
