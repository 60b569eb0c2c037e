import pytest

from bmp8 import (
    Image8,
    free_bmp8,
    header_info,
    load_bmp8,
    new_bmp8,
    print_info,
    save_bmp8,
)
from bmp_errors import (
    BadSignatureError,
    InvalidDimensionsError,
    InvalidStateError,
    ReadError,
    UnsupportedDepthError,
)


def test_load_reads_header_fields(bmp8_file):
    img = load_bmp8(bmp8_file)
    assert isinstance(img, Image8)
    assert (img.width, img.height, img.color_depth) == (4, 4, 8)
    assert img.data_size == 16
    assert img.data_offset == 1078
    assert len(img.header) == 54
    assert len(img.palette) == 1024
    assert bytes(img.pixels) == bytes(range(0, 160, 10))


def test_save_round_trips_byte_for_byte(bmp8_file, tmp_path):
    out = tmp_path / "copy.bmp"
    save_bmp8(out, load_bmp8(bmp8_file))
    assert out.read_bytes() == bmp8_file.read_bytes()


def test_zero_data_size_is_derived_from_dimensions(write_file, make_bmp8):
    path = write_file("nosize.bmp", make_bmp8(3, 2, bytes(6), data_size=0))
    img = load_bmp8(path)
    assert img.data_size == 6
    assert len(img.pixels) == 6


@pytest.mark.parametrize("width,height,size", [(3, 3, 4), (4, 2, 7), (0, 2, 4), (2, 0, 4)])
def test_data_size_must_cover_every_pixel(write_file, make_bmp8, width, height, size):
    path = write_file("small.bmp", make_bmp8(width, height, bytes(size), data_size=size))
    with pytest.raises(InvalidDimensionsError):
        load_bmp8(path)


def test_bad_signature(write_file, make_bmp8):
    path = write_file("bad.bmp", make_bmp8(2, 2, bytes(4), signature=b"XX"))
    with pytest.raises(BadSignatureError) as exc:
        load_bmp8(path)
    assert exc.value.kind == "BadSignature"


def test_wrong_depth(write_file, make_bmp8):
    path = write_file("d4.bmp", make_bmp8(2, 2, bytes(4), depth=4))
    with pytest.raises(UnsupportedDepthError):
        load_bmp8(path)


def test_truncated_pixel_data(write_file, make_bmp8):
    data = make_bmp8(4, 4, bytes(16))[:-5]
    path = write_file("short.bmp", data)
    with pytest.raises(ReadError):
        load_bmp8(path)


def test_truncated_header(write_file):
    path = write_file("tiny.bmp", b"BM\x00\x00")
    with pytest.raises(ReadError):
        load_bmp8(path)


def test_new_image_saves_and_loads(tmp_path):
    img = new_bmp8(5, 3, fill=77)
    out = tmp_path / "new.bmp"
    save_bmp8(out, img)
    again = load_bmp8(out)
    assert (again.width, again.height, again.data_size) == (5, 3, 15)
    assert bytes(again.pixels) == bytes([77]) * 15
    assert again.palette[4 * 200:4 * 200 + 4] == bytes([200, 200, 200, 0])


def test_freed_image_cannot_be_saved(tmp_path):
    img = new_bmp8(2, 2)
    free_bmp8(img)
    with pytest.raises(InvalidStateError):
        save_bmp8(tmp_path / "x.bmp", img)


def test_info(bmp8_file, capsys):
    img = load_bmp8(bmp8_file)
    assert header_info(img)["Data Size"] == "16 bytes"
    print_info(img)
    out = capsys.readouterr().out
    assert "Width: 4" in out
    assert "Color Depth: 8" in out
    assert "Data Size: 16 bytes" in out
