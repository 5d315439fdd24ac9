"""Resize screenshots and save them as WebP images."""

import logging
from io import BytesIO
from pathlib import Path
from typing import Union

from PIL import Image

from constants import HIRES_IMAGE_WIDTH, STANDARD_IMAGE_WIDTH

logger = logging.getLogger("showcase_scraper")

PathLike = Union[str, Path]


def resize_to_width(image: Image.Image, max_width: int) -> Image.Image:
    """Scale an image down to ``max_width``, keeping its aspect ratio.

    Images narrower than ``max_width`` are returned unscaled.
    """
    if image.width <= max_width:
        return image.copy()
    height = max(1, round(image.height * max_width / image.width))
    return image.resize((max_width, height), Image.Resampling.LANCZOS)


def save_webp(image: Image.Image, path: PathLike, max_width: int) -> Path:
    """Resize an image and write it to ``path`` as WebP."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    resize_to_width(image, max_width).save(path, format="WEBP")
    logger.info(f"Wrote {path}")
    return path


def save_screenshots(
    screenshot: bytes,
    hires_path: PathLike,
    standard_path: PathLike,
    hires_width: int = HIRES_IMAGE_WIDTH,
    standard_width: int = STANDARD_IMAGE_WIDTH,
) -> None:
    """Write the high density and standard density variants of a screenshot.

    Args:
        screenshot: PNG image buffer.
        hires_path: Destination for the high density (@2x) variant.
        standard_path: Destination for the standard density variant.
        hires_width: Maximum width of the high density variant.
        standard_width: Maximum width of the standard density variant.

    Raises:
        PIL.UnidentifiedImageError: If the buffer is not a readable image.
        OSError: If an image can't be written.
    """
    with Image.open(BytesIO(screenshot)) as image:
        image.load()
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA")
        save_webp(image, hires_path, hires_width)
        save_webp(image, standard_path, standard_width)
