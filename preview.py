"""
preview.py — turning decoded BMP images into things the viewer can show

- to_pil_image(): PIL RGB image, top row first
- histogram_for_display(): intensity histogram (8-bit) or luminance histogram (24-bit)
- plot_histogram_image(): bar chart rendered by matplotlib into a PIL image
"""

from io import BytesIO
from typing import List, Union

import numpy as np
import matplotlib.pyplot as plt
from PIL import Image

from bmp8 import Image8
from bmp24 import Image24
from bmp_errors import InvalidStateError
from histogram import compute_histogram
from image_processing import luminance_u8

AnyImage = Union[Image8, Image24]


def to_pil_image(img: AnyImage) -> Image.Image:
    if isinstance(img, Image8):
        pixels = img.require_pixels()
        w, h = img.width, img.height
        stride = max(w, len(pixels) // h)
        arr = np.frombuffer(bytes(pixels[:stride * h]), dtype=np.uint8).reshape(h, stride)[:, :w]
        # 8-bit buffers keep the file's bottom-up row order
        arr = np.flipud(arr)
        palette = np.frombuffer(img.palette, dtype=np.uint8).reshape(256, 4)[:, [2, 1, 0]]
        return Image.fromarray(np.ascontiguousarray(palette[arr]))

    if isinstance(img, Image24):
        pixels = img.require_pixels()
        arr = np.frombuffer(bytes(pixels.data), dtype=np.uint8).reshape(img.height, img.width, 3)
        return Image.fromarray(np.ascontiguousarray(arr[..., ::-1]))

    raise InvalidStateError(f"Not a BMP image: {img!r}")


def histogram_for_display(img: AnyImage) -> List[int]:
    if isinstance(img, Image8):
        return compute_histogram(img.require_pixels())
    if isinstance(img, Image24):
        d = img.require_pixels().data
        return compute_histogram(luminance_u8(d[i + 2], d[i + 1], d[i]) for i in range(0, len(d), 3))
    raise InvalidStateError(f"Not a BMP image: {img!r}")


def plot_histogram_image(hist, color="gray", width=256, height=128) -> Image.Image:
    fig, ax = plt.subplots(figsize=(width/100, height/100), dpi=100)
    ax.bar(range(256), hist, color=color)
    ax.set_xlim(0, 255)
    ax.set_ylim(0, max(hist)*1.1 if hist and max(hist) else 1)
    ax.axis('off')
    buf = BytesIO()
    plt.savefig(buf, format='png', bbox_inches='tight', pad_inches=0)
    plt.close(fig)
    buf.seek(0)
    return Image.open(buf)
