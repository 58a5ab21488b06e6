from __future__ import annotations

from io import BytesIO

from PIL import Image

from ..domain.models import DecodedImage


def decode_image(data: bytes) -> DecodedImage | None:
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            image_format = image.format or ""
            width, height = image.size
    except (OSError, ValueError, Image.DecompressionBombError):
        return None

    if width <= 0 or height <= 0:
        return None
    return DecodedImage(content=data, format=image_format, width=width, height=height)
