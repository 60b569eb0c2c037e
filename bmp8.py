#!/usr/bin/env python3
"""
bmp8.py — 8-bit indexed (grayscale) BMP codec

Layout handled:
- 54-byte header, kept verbatim and re-emitted unchanged on save
- 1024-byte palette (256 BGRA quads), kept verbatim
- one byte per pixel, starting at the header's pixel-data offset
Fields are pulled out of the raw header block at fixed offsets.
"""

from __future__ import annotations
import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from bmp_errors import (
    BadSignatureError,
    InvalidDimensionsError,
    InvalidStateError,
    ReadError,
    UnsupportedDepthError,
)
from rawio import open_binary, read_exact, write_exact

logger = logging.getLogger(__name__)

HEADER_SIZE = 54
PALETTE_SIZE = 1024
COLOR_DEPTH = 8

# Byte offsets inside the 54-byte header
OFFSET_SIGNATURE = 0
OFFSET_DATA_OFFSET = 10
OFFSET_WIDTH = 18
OFFSET_HEIGHT = 22
OFFSET_DEPTH = 28
OFFSET_DATA_SIZE = 34

# Full header, used only when building a new image from scratch
BMP_HEADER_FMT = "<2sIHHIIiiHHIIiiII"

PathLike = Union[str, Path]


@dataclass
class Image8:
    header: bytes
    palette: bytes
    pixels: Optional[bytearray]
    width: int
    height: int
    color_depth: int
    data_size: int

    @property
    def data_offset(self) -> int:
        return struct.unpack_from("<I", self.header, OFFSET_DATA_OFFSET)[0]

    @property
    def num_pixels(self) -> int:
        return self.width * self.height

    def require_pixels(self) -> bytearray:
        if self.pixels is None:
            raise InvalidStateError("8-bit image has no pixel data")
        return self.pixels


def grayscale_palette() -> bytes:
    """Standard ramp: entry i is (B=i, G=i, R=i, 0)."""
    return bytes(b for i in range(256) for b in (i, i, i, 0))


def parse_header(header: bytes) -> Dict[str, int]:
    """Read the fields the codec needs straight out of the header block."""
    return {
        "data_offset": struct.unpack_from("<I", header, OFFSET_DATA_OFFSET)[0],
        "width": struct.unpack_from("<I", header, OFFSET_WIDTH)[0],
        "height": struct.unpack_from("<I", header, OFFSET_HEIGHT)[0],
        "color_depth": struct.unpack_from("<H", header, OFFSET_DEPTH)[0],
        "data_size": struct.unpack_from("<I", header, OFFSET_DATA_SIZE)[0],
    }


def load_bmp8(path: PathLike) -> Image8:
    with open_binary(path, "rb") as fp:
        header = read_exact(fp, HEADER_SIZE, "BMP header")
        if header[OFFSET_SIGNATURE:OFFSET_SIGNATURE + 2] != b"BM":
            raise BadSignatureError(f"'{path}' is not a BMP file (signature {header[0:2]!r})")

        fields = parse_header(header)
        if fields["color_depth"] != COLOR_DEPTH:
            raise UnsupportedDepthError(
                f"Image color depth is not 8 bits ({fields['color_depth']})"
            )
        width, height = fields["width"], fields["height"]
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(f"Invalid image dimensions ({width} x {height})")

        palette = read_exact(fp, PALETTE_SIZE, "color table")

        # Missing data size: assume unpadded rows
        data_size = fields["data_size"] or width * height
        if data_size < width * height:
            raise InvalidDimensionsError(
                f"Pixel data size {data_size} is too small for {width} x {height}"
            )

        try:
            fp.seek(fields["data_offset"])
        except OSError as e:
            raise ReadError(f"Cannot seek to pixel data at {fields['data_offset']}: {e}") from e
        pixels = bytearray(read_exact(fp, data_size, "pixel data"))

    logger.info("8-bit image '%s' loaded (%dx%d, %d bytes)", path, width, height, data_size)
    return Image8(
        header=header,
        palette=palette,
        pixels=pixels,
        width=width,
        height=height,
        color_depth=fields["color_depth"],
        data_size=data_size,
    )


def save_bmp8(path: PathLike, img: Image8) -> None:
    pixels = img.require_pixels()
    with open_binary(path, "wb") as fp:
        write_exact(fp, img.header, "BMP header")
        write_exact(fp, img.palette, "color table")
        write_exact(fp, bytes(pixels[:img.data_size]), "pixel data")
    logger.info("8-bit image saved to '%s'", path)


def new_bmp8(width: int, height: int, fill: int = 0) -> Image8:
    """Build an 8-bit grayscale image in memory with a standard header."""
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"Invalid image dimensions ({width} x {height})")
    data_size = width * height
    offset = HEADER_SIZE + PALETTE_SIZE
    header = struct.pack(
        BMP_HEADER_FMT,
        b"BM", offset + data_size, 0, 0, offset,
        40, width, height, 1, COLOR_DEPTH, 0, data_size, 0, 0, 256, 0,
    )
    return Image8(
        header=header,
        palette=grayscale_palette(),
        pixels=bytearray([max(0, min(255, fill))]) * data_size,
        width=width,
        height=height,
        color_depth=COLOR_DEPTH,
        data_size=data_size,
    )


def free_bmp8(img: Image8) -> None:
    img.pixels = None


def header_info(img: Image8) -> Dict[str, object]:
    return {
        "Width": img.width,
        "Height": img.height,
        "Color Depth": img.color_depth,
        "Data Size": f"{img.data_size} bytes",
        "Data Offset": img.data_offset,
    }


def print_info(img: Optional[Image8]) -> None:
    if img is None:
        print("Image Info: NULL image")
        return
    print("Image Info:")
    print(f"  Width: {img.width}")
    print(f"  Height: {img.height}")
    print(f"  Color Depth: {img.color_depth}")
    print(f"  Data Size: {img.data_size} bytes")


if __name__ == "__main__":
    import sys
    if len(sys.argv) < 2:
        print("Usage: python bmp8.py <file.bmp>")
    else:
        print_info(load_bmp8(sys.argv[1]))
