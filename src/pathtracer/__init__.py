"""Recursive Monte Carlo path tracer.

This package renders a scene of spheres and quads with a pinhole camera,
recursively sampling material scattering and averaging several jittered
samples per pixel.

Subpackages:
    core: Vectors, rays, intervals, samplers, the integrator and the film
    geometry: Shape primitives and intersection algorithms
    materials: Scattering models (diffuse, Lambertian, metal, light)
    scene: Primitive collections and the reference Cornell box
    camera: Pinhole camera with jittered ray generation
    output: Raster encoders (TGA, BMP, PNG) and preview display
"""

__version__ = "0.1.0"
