"""Image encoding and inspection utilities."""

from __future__ import annotations

import base64
import io

from PIL import Image, UnidentifiedImageError


def image_to_base64(image_bytes: bytes) -> str:
    """Encode raw image bytes to a base64 string."""
    return base64.b64encode(image_bytes).decode("ascii")


def png_data_uri(image_bytes: bytes) -> str:
    return f"data:image/png;base64,{image_to_base64(image_bytes)}"


def describe_image(image_bytes: bytes) -> str:
    """Short human-readable summary of an image, e.g. ``PNG diagram, 120x80``.

    Raises ValueError if the bytes are not a decodable image.
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            width, height = img.size
            fmt = img.format or "image"
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Not a decodable image ({len(image_bytes)} bytes)") from e
    return f"{fmt} diagram, {width}x{height}"
