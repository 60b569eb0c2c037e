#!/usr/bin/env python3
"""
filters.py

Spatial convolution filters for 8-bit and 24-bit BMP images:
- Box blur (3x3, 1/9)
- Gaussian blur (3x3, 1-2-1 / 16)
- Sharpen
- Outline (8-neighbor Laplacian)
- Emboss

Every output pixel is computed from a snapshot taken before filtering.
Border handling differs per format: the 24-bit path replicates edge pixels
(coordinates clamped into the image), the 8-bit path leaves a border of
kernel_size // 2 pixels untouched.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from bmp8 import Image8
from bmp24 import Image24, PixelMatrix
from bmp_errors import InvalidKernelError, InvalidStateError

logger = logging.getLogger(__name__)

Kernel = Sequence[Sequence[float]]
AnyImage = Union[Image8, Image24]

# ------------------ Utility functions ------------------

def clip8(x: int) -> int:
    return 0 if x < 0 else (255 if x > 255 else x)

def round_u8(s: float) -> int:
    """Add 0.5 and truncate, then clip to [0..255]."""
    return clip8(int(s + 0.5))

def check_kernel(kernel: Optional[Kernel], kernel_size: int) -> None:
    if kernel is None or kernel_size <= 0 or kernel_size % 2 == 0:
        raise InvalidKernelError(f"Kernel size must be a positive odd number (got {kernel_size})")
    if len(kernel) != kernel_size or any(len(row) != kernel_size for row in kernel):
        raise InvalidKernelError(f"Kernel is not {kernel_size}x{kernel_size}")

# ------------------ Named kernels ------------------

def box_blur_kernel() -> List[List[float]]:
    return [[1 / 9.0] * 3 for _ in range(3)]

def gaussian_blur_kernel() -> List[List[float]]:
    k = [[1, 2, 1], [2, 4, 2], [1, 2, 1]]
    return [[v / 16.0 for v in row] for row in k]

def sharpen_kernel() -> List[List[float]]:
    return [[0.0, -1.0, 0.0], [-1.0, 5.0, -1.0], [0.0, -1.0, 0.0]]

def outline_kernel() -> List[List[float]]:
    return [[-1.0, -1.0, -1.0], [-1.0, 8.0, -1.0], [-1.0, -1.0, -1.0]]

def emboss_kernel() -> List[List[float]]:
    return [[-2.0, -1.0, 0.0], [-1.0, 1.0, 1.0], [0.0, 1.0, 2.0]]

KERNELS: Dict[str, Callable[[], List[List[float]]]] = {
    "box_blur": box_blur_kernel,
    "gaussian_blur": gaussian_blur_kernel,
    "sharpen": sharpen_kernel,
    "outline": outline_kernel,
    "emboss": emboss_kernel,
}

# ------------------ 8-bit: border left untouched ------------------

def apply_filter_8(img: Image8, kernel: Kernel, kernel_size: int) -> None:
    pixels = img.require_pixels()
    check_kernel(kernel, kernel_size)

    w, h = img.width, img.height
    original = bytes(pixels)
    r = kernel_size // 2

    for y in range(r, h - r):
        for x in range(r, w - r):
            s = 0.0
            for ky in range(-r, r + 1):
                base = (y + ky) * w + x
                krow = kernel[ky + r]
                for kx in range(-r, r + 1):
                    s += original[base + kx] * krow[kx + r]
            pixels[y * w + x] = round_u8(s)

    logger.info("Filter applied (kernel size %d). Edges ignored.", kernel_size)

# ------------------ 24-bit: edge-clamped neighbors ------------------

def convolve_24(img: Image24, x: int, y: int, kernel: Kernel, kernel_size: int,
                original: PixelMatrix) -> Tuple[int, int, int]:
    """New (b, g, r) for pixel (x, y), sampling the pre-filter snapshot."""
    r = kernel_size // 2
    w, h = img.width, img.height
    src = original.data
    stride = original.stride
    sb = sg = sr = 0.0
    for ky in range(-r, r + 1):
        ny = min(max(y + ky, 0), h - 1)
        krow = kernel[ky + r]
        for kx in range(-r, r + 1):
            nx = min(max(x + kx, 0), w - 1)
            k = krow[kx + r]
            i = ny * stride + nx * 3
            sb += src[i] * k
            sg += src[i + 1] * k
            sr += src[i + 2] * k
    return round_u8(sb), round_u8(sg), round_u8(sr)

def apply_filter_24(img: Image24, kernel: Kernel, kernel_size: int) -> None:
    pixels = img.require_pixels()
    check_kernel(kernel, kernel_size)

    original = pixels.copy()
    out = pixels.data
    for y in range(img.height):
        for x in range(img.width):
            i = y * pixels.stride + x * 3
            out[i:i + 3] = bytes(convolve_24(img, x, y, kernel, kernel_size, original))

    logger.info("Convolution filter applied (kernel size %d).", kernel_size)

# ------------------ Dispatch ------------------

def apply_filter(img: AnyImage, kernel: Kernel, kernel_size: int) -> None:
    if isinstance(img, Image8):
        apply_filter_8(img, kernel, kernel_size)
    elif isinstance(img, Image24):
        apply_filter_24(img, kernel, kernel_size)
    else:
        raise InvalidStateError(f"Not a BMP image: {img!r}")

def apply_named_filter(img: AnyImage, kind: str) -> None:
    try:
        make_kernel = KERNELS[kind]
    except KeyError:
        raise InvalidKernelError(
            f"Unknown filter '{kind}' (choose from {', '.join(KERNELS)})"
        ) from None
    kernel = make_kernel()
    apply_filter(img, kernel, len(kernel))

def box_blur(img: AnyImage) -> None:
    apply_named_filter(img, "box_blur")

def gaussian_blur(img: AnyImage) -> None:
    apply_named_filter(img, "gaussian_blur")

def sharpen(img: AnyImage) -> None:
    apply_named_filter(img, "sharpen")

def outline(img: AnyImage) -> None:
    apply_named_filter(img, "outline")

def emboss(img: AnyImage) -> None:
    apply_named_filter(img, "emboss")
