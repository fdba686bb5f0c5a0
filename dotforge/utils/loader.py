"""Image decoding and encoding via Pillow.

All processing in this project happens on :class:`PixelBuffer` objects.
These helpers only convert between encoded images (files or bytes) and
RGBA buffers.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image

from ..buffer import PixelBuffer
from ..errors import InvalidConfiguration

logger = logging.getLogger(__name__)

# Pillow format names keyed by the extensions/aliases we accept.
FORMATS = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "webp": "WEBP",
}

# Formats that cannot store an alpha channel.
_OPAQUE_FORMATS = {"JPEG"}


def _resolve_format(fmt: str) -> str:
    key = fmt.lower().lstrip(".")
    if key.startswith("image/"):
        key = key[len("image/"):]
    try:
        return FORMATS[key]
    except KeyError:
        raise InvalidConfiguration(f"Unsupported output format: {fmt}") from None


def _from_pil(im: Image.Image) -> PixelBuffer:
    arr = np.array(im.convert("RGBA"), dtype=np.uint8)
    return PixelBuffer.from_array(arr)


def _to_pil(buffer: PixelBuffer, pil_format: str) -> Image.Image:
    im = Image.fromarray(buffer.to_array())
    if pil_format in _OPAQUE_FORMATS:
        im = im.convert("RGB")
    return im


def decode_image(data: bytes) -> PixelBuffer:
    """Decode encoded image bytes (PNG, JPEG, ...) into an RGBA buffer.

    Raises
    ------
    ValueError
        If Pillow cannot identify or fully read the data as an image.
    """
    try:
        with Image.open(io.BytesIO(data)) as im:
            return _from_pil(im)
    except OSError as e:
        raise ValueError(f"Failed to decode image: {e}") from e


def encode_image(buffer: PixelBuffer, fmt: str = "png", quality: Optional[int] = None) -> bytes:
    """Encode ``buffer`` to image bytes.

    Parameters
    ----------
    buffer : PixelBuffer
        Image to encode.
    fmt : str
        ``png``, ``jpeg``/``jpg`` or ``webp``; a MIME type such as
        ``image/png`` is accepted too.
    quality : int | None
        Lossy quality (1-100) for JPEG and WEBP. Ignored for PNG.
    """
    pil_format = _resolve_format(fmt)
    im = _to_pil(buffer, pil_format)
    params = {}
    if quality is not None and pil_format != "PNG":
        if not 1 <= quality <= 100:
            raise InvalidConfiguration(f"quality must be within 1..100, got {quality}")
        params["quality"] = quality

    out = io.BytesIO()
    im.save(out, format=pil_format, **params)
    return out.getvalue()


def load_image(path: Union[str, Path]) -> PixelBuffer:
    """Load an image file into an RGBA buffer."""
    p = Path(path)
    with Image.open(p) as im:
        buffer = _from_pil(im)
    logger.debug("Loaded %s (%dx%d)", p, buffer.width, buffer.height)
    return buffer


def save_image(buffer: PixelBuffer, path: Union[str, Path], quality: Optional[int] = None) -> None:
    """Save ``buffer`` to a file, inferring the format from the extension."""
    p = Path(path)
    data = encode_image(buffer, p.suffix or "png", quality=quality)
    p.write_bytes(data)
    logger.debug("Wrote %s (%d bytes)", p, len(data))


__all__ = ["decode_image", "encode_image", "load_image", "save_image", "FORMATS"]
