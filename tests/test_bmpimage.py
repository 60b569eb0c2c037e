import pytest

from bmp8 import Image8
from bmp24 import Image24
from bmp_errors import (
    BadSignatureError,
    InvalidDimensionsError,
    OpenError,
    UnsupportedCompressionError,
    UnsupportedDepthError,
)
from bmpimage import default_save_path, image_depth, image_info, load_image, save_image
from filters import apply_named_filter
from histogram import equalize
from image_processing import negative


def test_load_picks_24_bit_codec(bmp24_file):
    img = load_image(bmp24_file)
    assert isinstance(img, Image24)
    assert image_depth(img) == 24


def test_load_falls_back_to_8_bit(bmp8_file):
    img = load_image(bmp8_file)
    assert isinstance(img, Image8)
    assert image_depth(img) == 8


def test_bad_signature_is_reported_without_fallback(write_file, make_bmp8):
    path = write_file("junk.bmp", make_bmp8(2, 2, bytes(4), signature=b"GI"))
    with pytest.raises(BadSignatureError):
        load_image(path)


def test_other_depths_fail_in_both_codecs(write_file, make_bmp8):
    path = write_file("d16.bmp", make_bmp8(2, 2, bytes(8), depth=16))
    with pytest.raises(UnsupportedDepthError):
        load_image(path)


def test_compressed_24_bit_reports_compression(write_file, make_bmp24, sample_rows):
    path = write_file("rle.bmp", make_bmp24(sample_rows, compression=1))
    with pytest.raises(UnsupportedCompressionError) as exc:
        load_image(path)
    assert exc.value.kind == "UnsupportedCompression"


def test_zero_width_24_bit_reports_dimensions(write_file, make_bmp24):
    path = write_file("empty.bmp", make_bmp24([[], []]))
    with pytest.raises(InvalidDimensionsError):
        load_image(path)


def test_missing_file(tmp_path):
    with pytest.raises(OpenError):
        load_image(tmp_path / "nope.bmp")


@pytest.mark.parametrize("fixture", ["bmp8_file", "bmp24_file"])
def test_load_edit_save_load(request, tmp_path, fixture):
    path = request.getfixturevalue(fixture)
    img = load_image(path)
    negative(img)
    apply_named_filter(img, "sharpen")
    equalize(img)
    out = tmp_path / "edited.bmp"
    save_image(out, img)
    again = load_image(out)
    assert type(again) is type(img)
    assert (again.width, again.height) == (img.width, img.height)


def test_image_info_includes_file_details(bmp24_file):
    info = image_info(load_image(bmp24_file), bmp24_file)
    assert info["Filename"] == "color.bmp"
    assert info["File Size"] == f"{bmp24_file.stat().st_size} bytes"
    assert info["Color Depth"] == 24


@pytest.mark.parametrize("path,expected", [
    ("photo.bmp", "photo_modified.bmp"),
    ("dir/img.BMP", "dir/img_modified.BMP"),
    ("noext", "noext_modified.bmp"),
])
def test_default_save_path(path, expected):
    assert default_save_path(path) == expected
