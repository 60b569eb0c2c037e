"""
bmpimage.py — format-independent entry points used by the viewer

load_image() tries the 24-bit codec first and falls back to the 8-bit one only
when the file has a different color depth; any other format error is final.
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Dict, Union

import bmp8
import bmp24
from bmp8 import Image8
from bmp24 import Image24
from bmp_errors import InvalidStateError, UnsupportedDepthError

logger = logging.getLogger(__name__)

AnyImage = Union[Image8, Image24]
PathLike = Union[str, Path]


def load_image(path: PathLike) -> AnyImage:
    try:
        return bmp24.load_bmp24(path)
    except UnsupportedDepthError as e:
        logger.debug("Not a 24-bit image (%s), trying 8-bit", e)
    return bmp8.load_bmp8(path)


def save_image(path: PathLike, img: AnyImage) -> None:
    if isinstance(img, Image8):
        bmp8.save_bmp8(path, img)
    elif isinstance(img, Image24):
        bmp24.save_bmp24(path, img)
    else:
        raise InvalidStateError(f"Not a BMP image: {img!r}")


def image_depth(img: AnyImage) -> int:
    return img.color_depth


def image_info(img: AnyImage, path: PathLike = None) -> Dict[str, object]:
    """Metadata for display, optionally prefixed with the file name and size."""
    info: Dict[str, object] = {}
    if path is not None:
        p = Path(path)
        info["Filename"] = os.path.basename(p)
        if p.exists():
            info["File Size"] = f"{p.stat().st_size} bytes"
    if isinstance(img, Image8):
        info.update(bmp8.header_info(img))
    elif isinstance(img, Image24):
        info.update(bmp24.header_info(img))
    else:
        raise InvalidStateError(f"Not a BMP image: {img!r}")
    return info


def default_save_path(path: PathLike) -> str:
    """'photo.bmp' -> 'photo_modified.bmp'."""
    root, ext = os.path.splitext(str(path))
    if not ext:
        return f"{root}_modified.bmp"
    return f"{root}_modified{ext}"
