"""Intrinsic pixel dimensions of encoded image bytes."""

from __future__ import annotations

from io import BytesIO

from PIL import Image, UnidentifiedImageError


def intrinsic_size(data: bytes) -> tuple[int, int] | None:
    """Return ``(width, height)`` in pixels, or ``None`` if *data* is not an image.

    ``Image.open`` only parses the header; pixel data is never decoded.
    """
    if not data:
        return None
    try:
        with Image.open(BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError):
        return None
