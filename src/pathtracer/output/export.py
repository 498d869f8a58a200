"""Raster encoders for rendered images.

Encoders take the image as an ordered sequence of rows, bottom row first,
each a flat byte string of 3 bytes per pixel in blue-green-red order.

Supported formats:
    - TGA: uncompressed 24-bit true color, 18-byte header
    - BMP: 24-bit bitmap with a 12-byte BITMAPCOREHEADER (26-byte header in
      total), each row zero-padded to a multiple of 4 bytes
    - PNG: 8-bit RGB via Pillow

Both TGA and BMP store rows bottom-up, so render rows are written as-is.

Example:
    >>> from pathtracer.output.export import save_image
    >>> rows = [bytes([255, 0, 0]), bytes([0, 0, 255])]  # blue over red, 1x2
    >>> save_image(rows, "tiny.bmp")
    PosixPath('tiny.bmp')
"""

from __future__ import annotations

import logging
import struct
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)

Rows = Sequence[bytes]

# =============================================================================
# Format Constants
# =============================================================================

TGA_HEADER_SIZE = 18
TGA_WIDTH_OFFSET = 12
TGA_HEIGHT_OFFSET = 14
TGA_IMAGE_TYPE_TRUE_COLOR = 2

BMP_HEADER_SIZE = 26
BMP_FILESIZE_OFFSET = 2
BMP_WIDTH_OFFSET = 18
BMP_HEIGHT_OFFSET = 20
BMP_CORE_HEADER_SIZE = 12

BITS_PER_PIXEL = 24
MAX_DIMENSION = 0xFFFF


class ImageFormat(str, Enum):
    """Supported output formats, valued by file suffix."""

    TGA = "tga"
    BMP = "bmp"
    PNG = "png"

    @classmethod
    def from_path(cls, path: str | Path) -> ImageFormat:
        """Infer the format from a file suffix.

        Raises:
            ValueError: If the suffix is missing or not supported.
        """
        suffix = Path(path).suffix.lower().lstrip(".")
        try:
            return cls(suffix)
        except ValueError:
            raise ValueError(
                f"Cannot infer image format from {str(path)!r}; "
                f"expected one of {[f.value for f in cls]}"
            ) from None


def image_dimensions(rows: Rows) -> tuple[int, int]:
    """Validate rows and return (width, height).

    Raises:
        ValueError: If there are no rows, rows differ in length, a row is not
            a whole number of pixels, or a dimension exceeds 65535.
    """
    if len(rows) == 0 or len(rows[0]) == 0:
        raise ValueError("Image has no pixels")
    row_length = len(rows[0])
    if row_length % 3 != 0:
        raise ValueError(f"Row length {row_length} is not a multiple of 3 bytes")
    for i, row in enumerate(rows):
        if len(row) != row_length:
            raise ValueError(f"Row {i} has {len(row)} bytes, expected {row_length}")
    width = row_length // 3
    height = len(rows)
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise ValueError(f"Image {width}x{height} exceeds {MAX_DIMENSION} pixels per side")
    return width, height


def tga_header(width: int, height: int) -> bytes:
    """Build the 18-byte TGA header for an uncompressed 24-bit image."""
    return struct.pack(
        "<BBB5s4sHHBB",
        0,  # ID length: no ID field
        0,  # Color map type: none
        TGA_IMAGE_TYPE_TRUE_COLOR,
        bytes(5),  # Color map specification
        bytes(4),  # (x, y) origin
        width,
        height,
        BITS_PER_PIXEL,
        0,  # Descriptor: bottom-left origin, no alpha
    )


def bmp_row_padding(width: int) -> int:
    """Number of zero bytes that pad a row of width pixels to a multiple of 4."""
    return -(width * 3) % 4


def bmp_header(width: int, height: int) -> bytes:
    """Build the 26-byte BMP file header plus BITMAPCOREHEADER."""
    row_size = width * 3 + bmp_row_padding(width)
    filesize = BMP_HEADER_SIZE + row_size * height
    return struct.pack(
        "<2sIIIIHHHH",
        b"BM",
        filesize,
        0,  # Reserved
        BMP_HEADER_SIZE,  # Pixel data offset
        BMP_CORE_HEADER_SIZE,
        width,
        height,
        1,  # Color planes
        BITS_PER_PIXEL,
    )


def encode_tga(rows: Rows) -> bytes:
    width, height = image_dimensions(rows)
    return tga_header(width, height) + b"".join(bytes(row) for row in rows)


def encode_bmp(rows: Rows) -> bytes:
    width, height = image_dimensions(rows)
    padding = bytes(bmp_row_padding(width))
    return bmp_header(width, height) + b"".join(bytes(row) + padding for row in rows)


def write_tga(rows: Rows, filepath: str | Path) -> None:
    """Write rows as an uncompressed 24-bit TGA file.

    Raises:
        OSError: If the file cannot be written.
        ValueError: If the rows do not form a valid image.
    """
    data = encode_tga(rows)
    with open(filepath, "wb") as f:
        f.write(data)


def write_bmp(rows: Rows, filepath: str | Path) -> None:
    """Write rows as a 24-bit BMP file with 4-byte aligned rows.

    Raises:
        OSError: If the file cannot be written.
        ValueError: If the rows do not form a valid image.
    """
    data = encode_bmp(rows)
    with open(filepath, "wb") as f:
        f.write(data)


def rows_to_rgb_array(rows: Rows) -> npt.NDArray[np.uint8]:
    """Convert bottom-up BGR rows to a top-down RGB array of shape (H, W, 3)."""
    width, height = image_dimensions(rows)
    bgr = np.frombuffer(b"".join(bytes(row) for row in rows), dtype=np.uint8)
    bgr = bgr.reshape(height, width, 3)
    return np.ascontiguousarray(np.flipud(bgr)[:, :, ::-1])


def save_png(rows: Rows, filepath: str | Path) -> None:
    """Write rows as an 8-bit RGB PNG using Pillow.

    Raises:
        OSError: If the file cannot be written.
        ValueError: If the rows do not form a valid image.
    """
    pil_image = PILImage.fromarray(rows_to_rgb_array(rows))
    pil_image.save(filepath, format="PNG")


_WRITERS = {
    ImageFormat.TGA: write_tga,
    ImageFormat.BMP: write_bmp,
    ImageFormat.PNG: save_png,
}


def save_image(
    rows: Rows,
    filepath: str | Path,
    image_format: ImageFormat | None = None,
) -> Path:
    """Write rows with the encoder for the given (or inferred) format.

    Args:
        rows: Bottom-up rows of blue-green-red bytes.
        filepath: Output file path.
        image_format: Output format. Inferred from the suffix when None.

    Returns:
        The path that was written.

    Raises:
        OSError: If the file cannot be written.
        ValueError: If the format is unknown or the rows are invalid.
    """
    path = Path(filepath)
    if image_format is None:
        image_format = ImageFormat.from_path(path)
    writer = _WRITERS[ImageFormat(image_format)]
    writer(rows, path)
    logger.info("Wrote %s (%s, %d rows)", path, ImageFormat(image_format).value, len(rows))
    return path
