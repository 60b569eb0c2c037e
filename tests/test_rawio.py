import io

import pytest

from bmp_errors import OpenError, ReadError, WriteError
from rawio import open_binary, raw_read, raw_write, read_exact, write_exact


def test_raw_read_reads_records_at_position():
    fp = io.BytesIO(bytes(range(20)))
    assert raw_read(4, 2, 3, fp) == bytes([4, 5, 6, 7, 8, 9])


def test_raw_read_past_end_is_read_error():
    fp = io.BytesIO(bytes(10))
    with pytest.raises(ReadError):
        raw_read(8, 4, 1, fp)


def test_raw_write_places_data_at_position():
    fp = io.BytesIO(bytes(8))
    raw_write(3, b"\xff\xee", fp)
    assert fp.getvalue() == b"\x00\x00\x00\xff\xee\x00\x00\x00"


def test_raw_write_on_read_only_stream_is_write_error():
    fp = io.BufferedReader(io.BytesIO(bytes(4)))
    with pytest.raises(WriteError):
        raw_write(0, b"ab", fp)


def test_read_exact_short_read():
    with pytest.raises(ReadError, match="pixel data"):
        read_exact(io.BytesIO(b"abc"), 4, "pixel data")


def test_write_exact_writes_everything():
    fp = io.BytesIO()
    write_exact(fp, b"hello")
    assert fp.getvalue() == b"hello"


def test_open_missing_file_is_open_error(tmp_path):
    with pytest.raises(OpenError) as exc:
        open_binary(tmp_path / "missing.bmp")
    assert exc.value.kind == "IOOpenError"
    assert isinstance(exc.value, OSError)
