"""
Shared fixtures: BMP files assembled byte-by-byte with struct.
"""

import struct

import matplotlib
matplotlib.use("Agg")

import pytest


def bmp24_bytes(rows, xres=0, yres=0, top_down=False, bits=24, compression=0,
                info_size=40, signature=b"BM"):
    """rows: top-to-bottom list of rows of (b, g, r) tuples."""
    height = len(rows)
    width = len(rows[0])
    row_unpadded = width * 3
    padding = (4 - row_unpadded % 4) % 4
    ordered = rows if top_down else list(reversed(rows))
    data = b"".join(
        bytes(c for px in row for c in px) + bytes(padding) for row in ordered
    )
    offset = 54
    file_header = struct.pack("<2sIHHI", signature, offset + len(data), 0, 0, offset)
    info = struct.pack(
        "<IiiHHIIiiII",
        info_size, width, -height if top_down else height, 1, bits, compression,
        len(data), xres, yres, 0, 0,
    )
    return file_header + info + data


def bmp8_bytes(width, height, pixels, data_size=None, signature=b"BM", depth=8):
    """pixels: flat bytes exactly as stored on disk."""
    offset = 54 + 1024
    size_field = len(pixels) if data_size is None else data_size
    header = struct.pack(
        "<2sIHHIIiiHHIIiiII",
        signature, offset + len(pixels), 0, 0, offset,
        40, width, height, 1, depth, 0, size_field, 2835, 2835, 256, 0,
    )
    palette = bytes(b for i in range(256) for b in (i, i, i, 0))
    return header + palette + bytes(pixels)


@pytest.fixture
def write_file(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write


@pytest.fixture
def sample_rows():
    """3x2 image (width 3, height 2): 9 data bytes + 3 padding bytes per row."""
    return [
        [(1, 2, 3), (4, 5, 6), (7, 8, 9)],
        [(10, 20, 30), (40, 50, 60), (70, 80, 90)],
    ]


@pytest.fixture
def bmp24_file(write_file, sample_rows):
    return write_file("color.bmp", bmp24_bytes(sample_rows, xres=2835, yres=2835))


@pytest.fixture
def bmp8_file(write_file):
    return write_file("gray.bmp", bmp8_bytes(4, 4, range(0, 160, 10)))


@pytest.fixture
def make_bmp24():
    return bmp24_bytes


@pytest.fixture
def make_bmp8():
    return bmp8_bytes
