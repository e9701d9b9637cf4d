"""
Purpose:
- Turn arbitrary uploaded image bytes into base64 JPEG text for the inline_data field.

Notes:
- Everything happens in memory; no temp files.
- CPU-bound: callers on the event loop should run it via asyncio.to_thread.
"""

from __future__ import annotations
import base64
from io import BytesIO
from PIL import Image, UnidentifiedImageError

from ..core.errors import EncodingFailure, InvalidImage

JPEG_MIME_TYPE = "image/jpeg"

# Modes the JPEG encoder accepts as-is; anything else is flattened to RGB first.
_JPEG_MODES = ("RGB", "L")


def decode_image(raw: bytes) -> Image.Image:
    """
    Decode bytes into a fully loaded PIL image (first frame for animated formats).
    Raises InvalidImage if Pillow cannot read it.
    """
    if not raw:
        raise InvalidImage("Uploaded file is empty")
    try:
        img = Image.open(BytesIO(raw))
        # open() is lazy; load() catches truncated/corrupt pixel data here
        img.load()
    except (UnidentifiedImageError, OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise InvalidImage(f"Uploaded file is not a decodable image: {e}") from e
    return img


def encode_jpeg(img: Image.Image, quality: int = 85) -> bytes:
    try:
        if img.mode not in _JPEG_MODES:
            img = img.convert("RGB")
        buf = BytesIO()
        img.save(buf, format="JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise EncodingFailure(f"Failed to re-encode image as JPEG: {e}") from e
    return buf.getvalue()


def normalize_image(raw: bytes, quality: int = 85) -> str:
    jpeg = encode_jpeg(decode_image(raw), quality=quality)
    return base64.b64encode(jpeg).decode("ascii")
