"""Camera module for view and ray generation.

Components:
    pinhole: Pinhole (perspective) camera with jittered sub-pixel sampling

Pixel coordinates start at the lower-left corner of the image:
    x in [0, width): left to right
    y in [0, height): bottom to top
"""

from .pinhole import (
    MAX_IMAGE_DIMENSION,
    JitterPattern,
    PinholeCamera,
    get_ray,
    get_ray_jittered,
    pixel_center,
    sample_offset,
)

__all__ = [
    "PinholeCamera",
    "JitterPattern",
    "MAX_IMAGE_DIMENSION",
    "get_ray",
    "get_ray_jittered",
    "pixel_center",
    "sample_offset",
]
