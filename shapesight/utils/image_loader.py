"""Image loading — any supported file or upload to an RGBA pixel array.

Raster formats go through Pillow. SVG documents are rasterized with CairoSVG
at their intrinsic size first.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

_WHITE = (255, 255, 255, 255)
_SVG_PREFIXES = (b"<svg", b"<?xml")


class ImageDecodeError(ValueError):
    """The bytes could not be turned into pixels."""


def _looks_like_svg(data: bytes, name: str | None) -> bool:
    if name and name.lower().endswith(".svg"):
        return True
    return data.lstrip()[:5].lower().startswith(_SVG_PREFIXES)


def _rasterize_svg(data: bytes) -> bytes:
    import cairosvg

    try:
        return cairosvg.svg2png(bytestring=data)
    except Exception as e:
        raise ImageDecodeError(f"Could not rasterize SVG: {e}") from e


def _flatten(img: Image.Image) -> Image.Image:
    """Composite onto white so transparent regions read as background.

    Transparent pixels of an uploaded file would otherwise carry their RGB
    (often black) into the luminance test and count as ink. Raw RGBA passed
    straight to ``detect_shapes`` is not flattened.
    """
    rgba = img.convert("RGBA")
    background = Image.new("RGBA", rgba.size, _WHITE)
    return Image.alpha_composite(background, rgba)


def decode_image(data: bytes, name: str | None = None) -> NDArray[np.uint8]:
    """Decode image bytes into an (height, width, 4) uint8 RGBA array."""
    if not data:
        raise ImageDecodeError("Empty image data")

    if _looks_like_svg(data, name):
        data = _rasterize_svg(data)

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            rgba = _flatten(img)
    except (UnidentifiedImageError, OSError) as e:
        label = name or "image"
        raise ImageDecodeError(f"Unsupported or corrupt {label}: {e}") from e

    arr = np.array(rgba, dtype=np.uint8)
    logger.debug("Decoded %s: %dx%d", name or "image", arr.shape[1], arr.shape[0])
    return arr


def decode_base64_image(text: str, name: str | None = None) -> NDArray[np.uint8]:
    """Decode a base64 payload or a ``data:image/...;base64,`` URL."""
    payload = text.strip()
    if payload.startswith("data:"):
        header, _, payload = payload.partition(",")
        if "svg" in header and name is None:
            name = "upload.svg"
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image data: {e}") from e
    return decode_image(raw, name)


def load_image(path: str | Path) -> NDArray[np.uint8]:
    """Read and decode an image file."""
    path = Path(path)
    return decode_image(path.read_bytes(), path.name)


def encode_png(pixels: NDArray[np.uint8]) -> bytes:
    """Encode an RGBA array as PNG bytes."""
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(buf, format="PNG")
    return buf.getvalue()
