"""
Rendering of complex point clouds into raster images.

The complex plane is mapped onto the image so that the bounding box of
all points (always including the origin) fills the full width, with the
imaginary axis pointing up. Every point is drawn as a small black square
on a white background.
"""

import io
from typing import Iterable, Sequence, Tuple

import structlog
from PIL import Image, ImageDraw

logger = structlog.get_logger(__name__)

DEFAULT_WIDTH = 800
MAX_ASPECT = 4

SUPPORTED_FORMATS = {"png": "PNG", "gif": "GIF", "bmp": "BMP", "jpeg": "JPEG", "jpg": "JPEG"}

Bounds = Tuple[float, float, float, float]


def bounds(numbers: Iterable[complex]) -> Bounds:
    """
    Bounding box of the points and the origin.

    Args:
        numbers: Points in the complex plane

    Returns:
        ``(x, y, width, height)`` with ``(x, y)`` the lower left corner
    """
    r_min = r_max = i_min = i_max = 0.0

    for z in numbers:
        r_min = min(r_min, z.real)
        r_max = max(r_max, z.real)
        i_min = min(i_min, z.imag)
        i_max = max(i_max, z.imag)

    return r_min, i_min, r_max - r_min, i_max - i_min


def create_image(numbers: Sequence[complex], width: int = DEFAULT_WIDTH) -> Image.Image:
    """
    Draw the points into a new RGB image.

    The height follows the aspect ratio of the bounding box, capped at
    ``MAX_ASPECT`` times the width. A bounding box without extent in one
    direction gives a square image with a unit extent in that direction.

    Args:
        numbers: Points in the complex plane
        width: Image width in pixels

    Returns:
        The rendered image
    """
    x1, y1, rw, rh = bounds(numbers)

    if rw > 0 and rh > 0:
        height = int(width / (rw / rh))
        if height <= 0:
            height = width
        height = min(height, MAX_ASPECT * width)
    else:
        height = width
        rw = rw or 1.0
        rh = rh or 1.0

    x2 = x1 + rw
    y2 = y1 + rh

    mx = width / (x2 - x1)
    bx = -mx * x1
    my = height / (y1 - y2)
    by = -my * y2

    image = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(image)

    for z in numbers:
        x = int(mx * z.real + bx)
        y = int(my * z.imag + by)
        draw.rectangle((x, y, x + 1, y + 1), outline="black")

    logger.debug("fractal_image_drawn", points=len(numbers), width=width, height=height)
    return image


def as_bytes(image: Image.Image, fmt: str = "png") -> bytes:
    """
    Encode an image.

    Args:
        image: Image to encode
        fmt: File format name, e.g. "png"

    Returns:
        Encoded image bytes

    Raises:
        ValueError: Unsupported format
    """
    pil_format = SUPPORTED_FORMATS.get(fmt.lower())
    if pil_format is None:
        raise ValueError(f"Unsupported image format: {fmt}")

    buffer = io.BytesIO()
    image.save(buffer, format=pil_format)
    return buffer.getvalue()
