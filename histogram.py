# histogram.py
"""
Histogram equalization for 8-bit and 24-bit BMP images.

8-bit images are equalized directly through a 256-entry lookup table.
24-bit images are converted to YUV, only the luminance (Y) is equalized,
and the original chrominance (U, V) is kept for the conversion back to RGB.
"""

import logging
from typing import List, Sequence, Tuple, Union

from bmp8 import Image8
from bmp24 import Image24
from bmp_errors import InvalidStateError

logger = logging.getLogger(__name__)

AnyImage = Union[Image8, Image24]

# RGB -> YUV (BT.601 analog form) and back
Y_COEF = (0.299, 0.587, 0.114)
U_COEF = (-0.14713, -0.28886, 0.436)
V_COEF = (0.615, -0.51499, -0.10001)
R_FROM_V = 1.13983
G_FROM_U, G_FROM_V = -0.39465, -0.58060
B_FROM_U = 2.03211


def clamp_round_u8(v: float) -> int:
    if v < 0.0:
        return 0
    if v > 255.0:
        return 255
    return int(v + 0.5)


def compute_histogram(pixel_bytes: Sequence[int]) -> List[int]:
    """Count of each byte value 0..255."""
    hist = [0] * 256
    for v in pixel_bytes:
        hist[v] += 1
    return hist


def compute_cdf(hist: Sequence[int]) -> List[int]:
    cdf = []
    csum = 0
    for h in hist:
        csum += h
        cdf.append(csum)
    return cdf


def compute_equalization_lut(hist: Sequence[int], num_pixels: int) -> List[int]:
    """
    Mapping original level -> equalized level:
        lut[i] = round((cdf[i] - cdf_min) * 255 / (num_pixels - cdf_min))
    where cdf_min is the first nonzero cumulative count. A single-valued
    image (num_pixels == cdf_min) gets the identity mapping.
    """
    if hist is None or len(hist) != 256 or num_pixels <= 0:
        raise InvalidStateError("Histogram must have 256 bins and the image at least one pixel")

    cdf = compute_cdf(hist)
    cdf_min = next((c for c in cdf if c > 0), 0)

    denominator = num_pixels - cdf_min
    if denominator <= 0:
        logger.warning("Image has uniform color; applying identity transform.")
        return list(range(256))

    scale = 255.0 / denominator
    lut = []
    for c in cdf:
        numerator = c - cdf_min if c >= cdf_min else 0
        lut.append(min(255, int(numerator * scale + 0.5)))
    return lut


def equalize_8(img: Image8) -> None:
    pixels = img.require_pixels()
    hist = compute_histogram(pixels)
    lut = compute_equalization_lut(hist, img.num_pixels)
    pixels[:] = pixels.translate(bytes(lut))
    logger.info("Grayscale histogram equalization applied.")


def rgb_to_yuv(r: float, g: float, b: float) -> Tuple[float, float, float]:
    y = Y_COEF[0] * r + Y_COEF[1] * g + Y_COEF[2] * b
    u = U_COEF[0] * r + U_COEF[1] * g + U_COEF[2] * b
    v = V_COEF[0] * r + V_COEF[1] * g + V_COEF[2] * b
    return y, u, v


def yuv_to_rgb(y: float, u: float, v: float) -> Tuple[int, int, int]:
    r = y + R_FROM_V * v
    g = y + G_FROM_U * u + G_FROM_V * v
    b = y + B_FROM_U * u
    return clamp_round_u8(r), clamp_round_u8(g), clamp_round_u8(b)


def equalize_24(img: Image24) -> None:
    pixels = img.require_pixels()
    buf = pixels.data
    num_pixels = img.width * img.height

    # Step 1: YUV per pixel, plus the rounded Y byte for the histogram
    uv = []
    y_bytes = bytearray(num_pixels)
    for n in range(num_pixels):
        i = n * 3
        y, u, v = rgb_to_yuv(buf[i + 2], buf[i + 1], buf[i])
        uv.append((u, v))
        y_bytes[n] = clamp_round_u8(y)

    # Step 2: LUT over luminance only
    lut = compute_equalization_lut(compute_histogram(y_bytes), num_pixels)

    # Step 3: back to RGB with the equalized Y and the original chrominance
    for n in range(num_pixels):
        u, v = uv[n]
        r, g, b = yuv_to_rgb(float(lut[y_bytes[n]]), u, v)
        i = n * 3
        buf[i], buf[i + 1], buf[i + 2] = b, g, r

    logger.info("Color histogram equalization applied.")


def equalize(img: AnyImage) -> None:
    if isinstance(img, Image8):
        equalize_8(img)
    elif isinstance(img, Image24):
        equalize_24(img)
    else:
        raise InvalidStateError(f"Not a BMP image: {img!r}")
