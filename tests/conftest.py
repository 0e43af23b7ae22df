"""Shared fixtures — small in-memory images."""

from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image


def make_image(width: int, height: int, fmt: str = "PNG") -> bytes:
    buf = BytesIO()
    Image.new("RGB", (width, height), (118, 185, 0)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_factory():
    return make_image


@pytest.fixture
def wide_png() -> bytes:
    """1000x500 PNG (2:1)."""
    return make_image(1000, 500)
