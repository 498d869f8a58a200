"""Output module for encoding and previewing rendered images.

Components:
    export: TGA, BMP and PNG encoders for rows of blue-green-red bytes
    display: Matplotlib preview window

Example:
    >>> from pathtracer.output import save_image
    >>> save_image(rows, "render.bmp")  # doctest: +SKIP
"""

from pathtracer.output.display import show_preview, to_display_array
from pathtracer.output.export import (
    BMP_HEADER_SIZE,
    TGA_HEADER_SIZE,
    ImageFormat,
    bmp_header,
    bmp_row_padding,
    encode_bmp,
    encode_tga,
    image_dimensions,
    rows_to_rgb_array,
    save_image,
    save_png,
    tga_header,
    write_bmp,
    write_tga,
)

__all__ = [
    "ImageFormat",
    "save_image",
    "write_tga",
    "write_bmp",
    "save_png",
    "encode_tga",
    "encode_bmp",
    "tga_header",
    "bmp_header",
    "bmp_row_padding",
    "image_dimensions",
    "rows_to_rgb_array",
    "TGA_HEADER_SIZE",
    "BMP_HEADER_SIZE",
    "show_preview",
    "to_display_array",
]
