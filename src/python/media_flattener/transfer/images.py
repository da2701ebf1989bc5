"""Pillow helpers for HEIC conversion and JPEG downsampling."""

import logging
import os
from pathlib import Path
from typing import Tuple

from PIL import Image
from pillow_heif import register_heif_opener

logger = logging.getLogger(__name__)

register_heif_opener()

DEFAULT_JPEG_QUALITY = 90
DEFAULT_RESIZE_WIDTH = 1920

# Everything Pillow raises for an unreadable or oversized image
IMAGE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)


def scaled_size(size: Tuple[int, int], target_width: int) -> Tuple[int, int]:
    """
    Size of an image scaled to a target width, keeping the aspect ratio.

    Images already at or below the target width keep their size; they are
    never upscaled.

    Example:
        >>> scaled_size((4000, 3000), 1920)
        (1920, 1440)
        >>> scaled_size((800, 600), 1920)
        (800, 600)
    """
    width, height = size
    if width <= target_width:
        return width, height
    new_height = max(1, round(height * target_width / width))
    return target_width, new_height


def _save_jpeg(img: Image.Image, destination: Path, quality: int, exif: bytes) -> None:
    if img.mode != "RGB":
        img = img.convert("RGB")

    # Write next to the destination, then swap, so a failure leaves no partial file
    temp_path = destination.with_name(destination.name + ".part")
    try:
        save_kwargs = {"quality": quality}
        if exif:
            save_kwargs["exif"] = exif
        img.save(temp_path, "JPEG", **save_kwargs)
        os.replace(temp_path, destination)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def convert_to_jpeg(source: Path, destination: Path, quality: int = DEFAULT_JPEG_QUALITY) -> None:
    """
    Decode an image (HEIC included) and write it as a JPEG.

    EXIF data is carried over when the source has any.
    """
    with Image.open(source) as img:
        img.load()
        _save_jpeg(img, destination, quality, img.info.get("exif", b""))


def resize_to_width(
    path: Path,
    target_width: int = DEFAULT_RESIZE_WIDTH,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> bool:
    """
    Downsample a JPEG in place so its width equals target_width.

    Args:
        path: JPEG file to overwrite
        target_width: Width in pixels after resizing
        quality: JPEG quality (1-100)

    Returns:
        True if the file was rewritten, False if it was already narrow enough
    """
    with Image.open(path) as img:
        new_size = scaled_size(img.size, target_width)
        if new_size == img.size:
            logger.debug("%s is %dpx wide, not resizing", path.name, img.width)
            return False

        exif = img.info.get("exif", b"")
        resized = img.resize(new_size, Image.Resampling.LANCZOS)

    _save_jpeg(resized, path, quality, exif)
    return True
