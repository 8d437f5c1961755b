"""Image payloads for upload and resize tests."""
import io
from typing import Tuple

import pytest
from PIL import Image

RED = (255, 0, 0)
BLACK = (0, 0, 0)


def make_image_bytes(
    width: int,
    height: int,
    fmt: str = "PNG",
    color: Tuple[int, ...] = RED,
    mode: str = "RGB",
) -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes(200, 100)


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes(2000, 3000, fmt="JPEG")
