"""Film: turns averaged linear radiance into 8-bit blue-green-red pixels.

The conversion runs as a Taichi kernel over the whole image:
    1. sqrt gamma correction (gamma = 2)
    2. clamp to [0, 1]
    3. quantize with round(255 * value), halves rounding up
    4. store channels in blue-green-red order for the raster encoders

Rows keep the render order: row 0 is the bottom of the image.

Example:
    >>> import numpy as np
    >>> from pathtracer.core.film import init_backend, resolve
    >>> init_backend("cpu")
    >>> resolve(np.full((1, 1, 3), 0.25, dtype=np.float32))[0, 0]
    array([128, 128, 128], dtype=uint8)
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm
from taichi.lang import impl

logger = logging.getLogger(__name__)

_ARCHES = {
    "cpu": ti.cpu,
    "gpu": ti.gpu,
}


def init_backend(arch: str = "cpu", **kwargs) -> None:
    """Initialize Taichi for the film kernels.

    Args:
        arch: "cpu" or "gpu".
        **kwargs: Extra keyword arguments passed to ti.init().

    Raises:
        ValueError: If arch is not a known backend name.
    """
    if arch not in _ARCHES:
        raise ValueError(f"Unknown Taichi arch {arch!r}, expected one of {sorted(_ARCHES)}")
    ti.init(arch=_ARCHES[arch], **kwargs)
    logger.debug("Taichi initialized (arch=%s)", arch)


def is_backend_initialized() -> bool:
    """Whether a Taichi runtime exists, from init_backend() or a direct ti.init()."""
    return impl.get_runtime().prog is not None


@ti.kernel
def _resolve_kernel(
    radiance: ti.types.ndarray(dtype=ti.f32, ndim=3),
    out: ti.types.ndarray(dtype=ti.u8, ndim=3),
):
    for y, x in ti.ndrange(radiance.shape[0], radiance.shape[1]):
        for c in ti.static(range(3)):
            value = radiance[y, x, c]
            value = tm.clamp(ti.sqrt(ti.max(value, 0.0)), 0.0, 1.0)
            # RGB in, BGR out
            out[y, x, 2 - c] = ti.cast(ti.floor(255.0 * value + 0.5), ti.u8)


def resolve(radiance: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Gamma-correct and quantize an averaged radiance image.

    Initializes Taichi on the CPU only if no Taichi runtime exists yet, so a
    caller's own ti.init() (arch, fields) is left untouched.

    Args:
        radiance: Linear RGB radiance of shape (height, width, 3).

    Returns:
        uint8 array of shape (height, width, 3) in blue-green-red order.

    Raises:
        ValueError: If the array does not have shape (height, width, 3).
    """
    if radiance.ndim != 3 or radiance.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (height, width, 3), got {radiance.shape}")
    if not is_backend_initialized():
        init_backend()

    # NaN samples count as black; infinities saturate
    src = np.nan_to_num(np.asarray(radiance, dtype=np.float32), nan=0.0)
    src = np.ascontiguousarray(src)
    out = np.zeros(src.shape, dtype=np.uint8)
    _resolve_kernel(src, out)
    return out


def image_rows(bgr: npt.NDArray[np.uint8]) -> list[bytes]:
    """Split a resolved image into the row byte strings encoders expect.

    Args:
        bgr: uint8 array of shape (height, width, 3), row 0 at the bottom.

    Returns:
        One bytes object of length 3 * width per row, bottom row first.
    """
    return [row.tobytes() for row in np.ascontiguousarray(bgr, dtype=np.uint8)]
