# image_processing.py
"""
Point-processing methods for 8-bit and 24-bit BMP images.
Every operation works in place on the image's pixel buffer, one byte at a time.
"""

import logging
from typing import Union

from bmp8 import Image8
from bmp24 import Image24
from bmp_errors import InvalidStateError, UnsupportedDepthError

logger = logging.getLogger(__name__)

AnyImage = Union[Image8, Image24]


def clamp_u8(x: int) -> int:
    return 0 if x < 0 else (255 if x > 255 else x)


def pixel_buffer(img: AnyImage) -> bytearray:
    """The raw byte buffer behind either image type."""
    if isinstance(img, Image8):
        return img.require_pixels()
    if isinstance(img, Image24):
        return img.require_pixels().data
    raise InvalidStateError(f"Not a BMP image: {img!r}")


# ---------------------------------------------------------------------
# 1. Negative Transformation
# ---------------------------------------------------------------------
def negative(img: AnyImage) -> None:
    """s = 255 - r for every channel byte."""
    buf = pixel_buffer(img)
    buf[:] = buf.translate(bytes(255 - i for i in range(256)))
    logger.info("Negative filter applied.")


# ---------------------------------------------------------------------
# 2. Brightness
# ---------------------------------------------------------------------
def brightness(img: AnyImage, delta: int) -> None:
    """s = clamp(r + delta) for every channel byte."""
    buf = pixel_buffer(img)
    lut = bytes(clamp_u8(i + delta) for i in range(256))
    buf[:] = buf.translate(lut)
    logger.info("Brightness adjusted by %d.", delta)


# ---------------------------------------------------------------------
# 3. Threshold (Black/White), 8-bit only
# ---------------------------------------------------------------------
def threshold(img: Image8, t: int) -> None:
    """255 where the byte is >= t (t clamped to [0..255]), else 0."""
    if not isinstance(img, Image8):
        raise UnsupportedDepthError("Threshold is only defined for 8-bit images")
    buf = pixel_buffer(img)
    if t < 0 or t > 255:
        logger.warning("Threshold value %d is outside [0, 255]. Clamping.", t)
        t = clamp_u8(t)
    buf[:] = buf.translate(bytes(255 if i >= t else 0 for i in range(256)))
    logger.info("Threshold filter applied with threshold %d.", t)


# ---------------------------------------------------------------------
# 4. Grayscale Transformation, 24-bit only
# ---------------------------------------------------------------------
def luminance_u8(r: int, g: int, b: int) -> int:
    return clamp_u8(int(0.299 * r + 0.587 * g + 0.114 * b + 0.5))


def grayscale(img: Image24) -> None:
    """gray = round(0.299R + 0.587G + 0.114B) written to all three channels."""
    if not isinstance(img, Image24):
        raise UnsupportedDepthError("Grayscale conversion is only defined for 24-bit images")
    buf = pixel_buffer(img)
    for i in range(0, len(buf), 3):
        s = luminance_u8(buf[i + 2], buf[i + 1], buf[i])
        buf[i] = buf[i + 1] = buf[i + 2] = s
    logger.info("Grayscale filter applied.")
