#!/usr/bin/env python3
"""
bmp24.py — 24-bit true-color BMP codec

Reads:
- 14-byte file header and 40-byte info header (little-endian)
- pixel rows stored bottom-to-top, 3 bytes per pixel in B,G,R order,
  each row padded to a multiple of 4 bytes
Pixels are kept in memory top-to-bottom and unpadded, in a single flat
buffer addressed as [row, col].
"""

from __future__ import annotations
import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Tuple, Union

from bmp_errors import (
    AllocationError,
    BadSignatureError,
    InvalidDimensionsError,
    InvalidStateError,
    ReadError,
    UnsupportedCompressionError,
    UnsupportedDepthError,
    WriteError,
)
from rawio import open_binary, raw_read, raw_write, read_exact, write_exact

logger = logging.getLogger(__name__)

BMP_TYPE = 0x4D42  # 'BM'
BMP_FILE_HEADER_FMT = "<HIHHI"
BMP_INFO_HEADER_FMT = "<IiiHHIIiiII"
FILE_HEADER_SIZE = struct.calcsize(BMP_FILE_HEADER_FMT)  # 14
INFO_HEADER_SIZE = struct.calcsize(BMP_INFO_HEADER_FMT)  # 40
DEFAULT_COLOR_DEPTH = 24
BYTES_PER_PIXEL = 3

PathLike = Union[str, Path]
BGR = Tuple[int, int, int]


@dataclass
class BMPFileHeader:
    type: int = BMP_TYPE
    size: int = 0
    reserved1: int = 0
    reserved2: int = 0
    offset: int = FILE_HEADER_SIZE + INFO_HEADER_SIZE

    @classmethod
    def unpack(cls, data: bytes) -> "BMPFileHeader":
        return cls(*struct.unpack(BMP_FILE_HEADER_FMT, data))

    def pack(self) -> bytes:
        return struct.pack(BMP_FILE_HEADER_FMT, self.type, self.size,
                           self.reserved1, self.reserved2, self.offset)


@dataclass
class BMPInfoHeader:
    size: int = INFO_HEADER_SIZE
    width: int = 0
    height: int = 0
    planes: int = 1
    bits: int = DEFAULT_COLOR_DEPTH
    compression: int = 0
    imagesize: int = 0
    xresolution: int = 0
    yresolution: int = 0
    ncolors: int = 0
    importantcolors: int = 0

    @classmethod
    def unpack(cls, data: bytes) -> "BMPInfoHeader":
        return cls(*struct.unpack(BMP_INFO_HEADER_FMT, data))

    def pack(self) -> bytes:
        return struct.pack(
            BMP_INFO_HEADER_FMT,
            self.size, self.width, self.height, self.planes, self.bits,
            self.compression, self.imagesize, self.xresolution,
            self.yresolution, self.ncolors, self.importantcolors,
        )


class PixelMatrix:
    """Row-major BGR pixels in one flat buffer; ``m[y, x]`` is a (b, g, r) tuple."""

    def __init__(self, width: int, height: int, data: Optional[bytearray] = None):
        self.width = width
        self.height = height
        self.stride = width * BYTES_PER_PIXEL
        if data is None:
            data = bytearray(self.stride * height)
        elif len(data) != self.stride * height:
            raise ValueError(f"Pixel buffer is {len(data)} bytes, expected {self.stride * height}")
        self.data = data

    def _index(self, y: int, x: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.stride + x * BYTES_PER_PIXEL

    def __getitem__(self, pos: Tuple[int, int]) -> BGR:
        i = self._index(*pos)
        d = self.data
        return d[i], d[i + 1], d[i + 2]

    def __setitem__(self, pos: Tuple[int, int], bgr: BGR) -> None:
        i = self._index(*pos)
        self.data[i:i + 3] = bytes(bgr)

    def row(self, y: int) -> bytes:
        start = y * self.stride
        return bytes(self.data[start:start + self.stride])

    def set_row(self, y: int, row: bytes) -> None:
        start = y * self.stride
        self.data[start:start + self.stride] = row[:self.stride]

    def copy(self) -> "PixelMatrix":
        return PixelMatrix(self.width, self.height, bytearray(self.data))

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelMatrix):
            return NotImplemented
        return (self.width, self.height, self.data) == (other.width, other.height, other.data)


@dataclass
class Image24:
    header: BMPFileHeader
    info: BMPInfoHeader
    width: int
    height: int
    color_depth: int = DEFAULT_COLOR_DEPTH
    pixels: Optional[PixelMatrix] = field(default=None, repr=False)

    def require_pixels(self) -> PixelMatrix:
        if self.pixels is None:
            raise InvalidStateError("24-bit image has no pixel data")
        return self.pixels


def padded_row_size(width: int) -> int:
    return ((width * DEFAULT_COLOR_DEPTH + 31) // 32) * 4


def row_layout(width: int) -> Tuple[int, int]:
    """(unpadded row bytes, padding bytes) for a 24-bit row on disk."""
    unpadded = width * BYTES_PER_PIXEL
    return unpadded, (4 - unpadded % 4) % 4


def _sync_headers(img: Image24) -> None:
    """Derive every size/geometry field from the current width and height."""
    hdr, info = img.header, img.info
    hdr.type = BMP_TYPE
    hdr.reserved1 = hdr.reserved2 = 0
    hdr.offset = FILE_HEADER_SIZE + INFO_HEADER_SIZE
    info.size = INFO_HEADER_SIZE
    info.width = img.width
    info.height = img.height
    info.planes = 1
    info.bits = DEFAULT_COLOR_DEPTH
    info.compression = 0
    info.imagesize = padded_row_size(img.width) * abs(img.height)
    info.ncolors = 0
    info.importantcolors = 0
    hdr.size = hdr.offset + info.imagesize
    img.color_depth = DEFAULT_COLOR_DEPTH


def allocate_bmp24(width: int, height: int) -> Image24:
    """Zero-filled image with headers derived from the dimensions."""
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"Invalid image dimensions ({width} x {height})")
    try:
        pixels = PixelMatrix(width, height)
    except MemoryError as e:
        raise AllocationError(f"Cannot allocate {width}x{height} pixel buffer") from e
    img = Image24(header=BMPFileHeader(), info=BMPInfoHeader(),
                  width=width, height=height, pixels=pixels)
    _sync_headers(img)
    return img


def free_bmp24(img: Image24) -> None:
    img.pixels = None


# ------------------ Pixel data ------------------

def read_pixel_data(img: Image24, fp: BinaryIO) -> None:
    pixels = img.require_pixels()
    width, height = img.width, img.height

    bytes_per_pixel = img.info.bits // 8
    if bytes_per_pixel != BYTES_PER_PIXEL:
        logger.warning("Expected 3 bytes per pixel for 24-bit, got %d; reading as 3", bytes_per_pixel)
    row_unpadded, padding = row_layout(width)
    row_padded = row_unpadded + padding
    logger.debug("Reading %d rows of %d bytes (+%d padding) from offset %d",
                 height, row_unpadded, padding, img.header.offset)

    try:
        fp.seek(img.header.offset)
    except OSError as e:
        raise ReadError(f"Cannot seek to pixel data at {img.header.offset}: {e}") from e

    top_down = img.info.height < 0
    for k in range(height):
        row = read_exact(fp, row_padded, f"pixel data row {k}")
        y = k if top_down else height - 1 - k
        pixels.set_row(y, row[:row_unpadded])


def write_pixel_data(img: Image24, fp: BinaryIO) -> None:
    pixels = img.require_pixels()
    _, padding = row_layout(img.width)
    pad = bytes(padding)

    try:
        fp.seek(img.header.offset)
    except OSError as e:
        raise WriteError(f"Cannot seek to pixel data at {img.header.offset}: {e}") from e

    for y in range(img.height - 1, -1, -1):
        write_exact(fp, pixels.row(y) + pad, f"pixel data row {y}")


# ------------------ Load / Save ------------------

def load_bmp24(path: PathLike) -> Image24:
    with open_binary(path, "rb") as fp:
        header = BMPFileHeader.unpack(raw_read(0, FILE_HEADER_SIZE, 1, fp))
        if header.type != BMP_TYPE:
            raise BadSignatureError(f"'{path}' is not a BMP file (invalid signature 0x{header.type:X})")

        info = BMPInfoHeader.unpack(raw_read(FILE_HEADER_SIZE, INFO_HEADER_SIZE, 1, fp))
        if info.size != INFO_HEADER_SIZE:
            logger.warning("Unexpected DIB header size %d (expected %d) in '%s'",
                           info.size, INFO_HEADER_SIZE, path)
        if info.bits != DEFAULT_COLOR_DEPTH:
            raise UnsupportedDepthError(f"'{path}' is not a 24-bit BMP ({info.bits} bits)")
        if info.compression != 0:
            raise UnsupportedCompressionError(
                f"Compressed BMP files are not supported (compression type {info.compression})"
            )

        width, height = info.width, abs(info.height)
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(f"Invalid image dimensions ({width} x {height}) in '{path}'")

        img = allocate_bmp24(width, height)
        img.header = header
        img.info = info
        img.color_depth = info.bits
        read_pixel_data(img, fp)

    logger.info("24-bit image '%s' loaded (%dx%d)", path, width, height)
    return img


def save_bmp24(path: PathLike, img: Image24) -> None:
    pixels = img.require_pixels()
    if (pixels.width, pixels.height) != (img.width, img.height):
        raise InvalidStateError(
            f"Image is {img.width}x{img.height} but its pixel buffer is {pixels.width}x{pixels.height}"
        )
    _sync_headers(img)
    with open_binary(path, "wb") as fp:
        raw_write(0, img.header.pack(), fp)
        raw_write(FILE_HEADER_SIZE, img.info.pack(), fp)
        write_pixel_data(img, fp)
    logger.info("24-bit image saved to '%s'", path)


def header_info(img: Image24) -> Dict[str, object]:
    return {
        "Width": img.width,
        "Height": img.height,
        "Color Depth": img.color_depth,
        "File Size (header)": f"{img.header.size} bytes",
        "Data Offset (header)": img.header.offset,
        "Pixel Data Size (header)": f"{img.info.imagesize} bytes",
    }


if __name__ == "__main__":
    import sys
    if len(sys.argv) < 2:
        print("Usage: python bmp24.py <file.bmp>")
    else:
        for k, v in header_info(load_bmp24(sys.argv[1])).items():
            print(f"{k}: {v}")
