"""
rawio.py — positioned reads and writes of fixed-size records

Used for the BMP file header and info header. Bulk pixel transfer goes
through the row-oriented paths in bmp24.py.
"""

from typing import BinaryIO

from bmp_errors import OpenError, ReadError, WriteError


def open_binary(path, mode: str = "rb") -> BinaryIO:
    """open() in binary mode, reporting failures as OpenError."""
    try:
        return open(path, mode)
    except OSError as e:
        raise OpenError(f"Cannot open '{path}': {e.strerror or e}") from e


def raw_read(position: int, size: int, count: int, fp: BinaryIO) -> bytes:
    """Seek to ``position`` and read exactly ``count`` records of ``size`` bytes."""
    expected = size * count
    try:
        fp.seek(position)
        data = fp.read(expected)
    except (OSError, ValueError) as e:
        raise ReadError(f"Cannot read {expected} bytes at offset {position}: {e}") from e
    if len(data) != expected:
        raise ReadError(
            f"Unexpected end of file at offset {position} "
            f"(wanted {expected} bytes, got {len(data)})"
        )
    return data


def raw_write(position: int, data: bytes, fp: BinaryIO) -> None:
    """Seek to ``position`` and write all of ``data``."""
    try:
        fp.seek(position)
        written = fp.write(data)
    except (OSError, ValueError) as e:
        raise WriteError(f"Cannot write {len(data)} bytes at offset {position}: {e}") from e
    if written != len(data):
        raise WriteError(f"Short write at offset {position} ({written} of {len(data)} bytes)")


def read_exact(fp: BinaryIO, size: int, what: str = "data") -> bytes:
    try:
        data = fp.read(size)
    except OSError as e:
        raise ReadError(f"Error reading {what}: {e}") from e
    if len(data) != size:
        raise ReadError(f"Error reading {what}: unexpected end of file ({len(data)} of {size} bytes)")
    return data


def write_exact(fp: BinaryIO, data: bytes, what: str = "data") -> None:
    try:
        written = fp.write(data)
    except OSError as e:
        raise WriteError(f"Error writing {what}: {e}") from e
    if written != len(data):
        raise WriteError(f"Error writing {what}: {written} of {len(data)} bytes written")
