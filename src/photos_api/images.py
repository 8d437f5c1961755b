"""Decode, resize and re-encode uploaded images."""

import io
import logging
from typing import Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_MAX_WIDTH = 1080
DEFAULT_MAX_HEIGHT = 1920
DEFAULT_OUTPUT_FORMAT = "PNG"

# Formats that cannot carry an alpha channel
_RGB_ONLY_FORMATS = {"JPEG", "BMP"}


class ImageDecodeError(ValueError):
    """Raised when an upload cannot be decoded as an image."""


def decode_image(data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e
    return image


def _pad_color(mode: str) -> Union[int, Tuple[int, ...]]:
    if mode == "RGBA":
        return (0, 0, 0, 255)
    if mode in ("L", "P", "1"):
        return 0
    return (0, 0, 0)


def contain(image: Image.Image, max_width: int, max_height: int) -> Image.Image:
    """
    Fit an image inside a ``max_width`` x ``max_height`` box without cropping.

    The image is scaled (up or down) until it touches the box on one axis,
    preserving aspect ratio, then centered on an opaque black canvas of
    exactly the box size.
    """
    if image.mode not in ("RGB", "RGBA", "L"):
        image = image.convert("RGBA" if "A" in image.getbands() or "transparency" in image.info else "RGB")
    return ImageOps.pad(
        image,
        (max_width, max_height),
        method=Image.Resampling.LANCZOS,
        color=_pad_color(image.mode),
        centering=(0.5, 0.5),
    )


def resize_image(
    data: bytes,
    max_width: int = DEFAULT_MAX_WIDTH,
    max_height: int = DEFAULT_MAX_HEIGHT,
) -> bytes:
    """
    Resize raw image bytes to the bounding box and re-encode them.

    The output keeps the source format where Pillow can write it.

    :raises ImageDecodeError: if ``data`` is not a decodable image.
    """
    image = decode_image(data)
    output_format = image.format or DEFAULT_OUTPUT_FORMAT
    original_size = image.size

    resized = contain(image, max_width, max_height)
    if output_format in _RGB_ONLY_FORMATS and resized.mode != "RGB":
        resized = resized.convert("RGB")

    buffer = io.BytesIO()
    try:
        resized.save(buffer, format=output_format)
    except (KeyError, OSError):
        # Pillow can read some formats (e.g. MPO variants) it cannot write
        logger.warning(f"Cannot encode {output_format}, falling back to {DEFAULT_OUTPUT_FORMAT}")
        buffer = io.BytesIO()
        resized.save(buffer, format=DEFAULT_OUTPUT_FORMAT)

    logger.debug(f"Resized {output_format} image from {original_size} to {resized.size}")
    return buffer.getvalue()
