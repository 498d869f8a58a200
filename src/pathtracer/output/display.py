"""Matplotlib-based preview of rendered images.

Example:
    >>> from pathtracer.output.display import show_preview
    >>> show_preview(rows, title="Cornell box")  # doctest: +SKIP
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import numpy as np
import numpy.typing as npt

from pathtracer.output.export import Rows, rows_to_rgb_array

if TYPE_CHECKING:
    from matplotlib.figure import Figure

Raster = Union[Rows, npt.NDArray[np.uint8]]


def to_display_array(image: Raster) -> npt.NDArray[np.uint8]:
    """Convert render output to a top-down RGB array for imshow.

    Args:
        image: Either bottom-up rows of blue-green-red bytes, or a resolved
            uint8 array of shape (height, width, 3) in the same layout.

    Returns:
        uint8 array of shape (height, width, 3), top row first, RGB.
    """
    if isinstance(image, np.ndarray):
        if image.ndim != 3 or image.shape[2] != 3:
            raise ValueError(f"Expected an image of shape (height, width, 3), got {image.shape}")
        return np.ascontiguousarray(np.flipud(image)[:, :, ::-1], dtype=np.uint8)
    return rows_to_rgb_array(image)


def show_preview(
    image: Raster,
    title: str | None = None,
    *,
    block: bool = True,
) -> Figure:
    """Display a rendered image in a Matplotlib window.

    Args:
        image: Bottom-up blue-green-red rows or resolved array.
        title: Optional axes title. Defaults to "<width>x<height>".
        block: Whether plt.show() blocks until the window is closed.

    Returns:
        The Matplotlib figure.
    """
    import matplotlib.pyplot as plt

    rgb = to_display_array(image)
    height, width = rgb.shape[:2]

    fig, ax = plt.subplots()
    ax.imshow(rgb, interpolation="nearest")
    ax.set_axis_off()
    ax.set_title(title if title is not None else f"{width}x{height}")
    plt.show(block=block)
    return fig
