"""
Decode, resize and JPEG-encode a single page image.
"""

import logging
import os
import uuid
from typing import BinaryIO

from PIL import Image, ImageOps

from .errors import DecodeError, EncodeOrWriteError, ResizeError
from .models import ResizeTarget
from .sizing import scaled_size

logger = logging.getLogger(__name__)

RESAMPLE_METHOD = Image.Resampling.LANCZOS


def decode_image(stream: BinaryIO) -> Image.Image:
    """Decode an image stream, auto-detecting the format from its content."""
    try:
        img = Image.open(stream)
        img.load()
        img = ImageOps.exif_transpose(img)
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Cannot decode image: {e}") from e
    return img


def resize_image(img: Image.Image, height: int, width: int) -> Image.Image:
    """Resize to (height, width); a zero axis is computed from the aspect ratio.

    With both axes zero the image is returned unchanged.
    """
    target = ResizeTarget(height=height, width=width)
    if target.is_passthrough:
        return img

    try:
        return img.resize(scaled_size(img.size, target), RESAMPLE_METHOD)
    except (OSError, ValueError, ZeroDivisionError) as e:
        raise ResizeError(f"Cannot resize {img.size} to {height}x{width}: {e}") from e


def save_jpeg(img: Image.Image, quality: int, output_path: str) -> None:
    """Encode as JPEG into a temp file beside output_path, then move it into place.

    Readers never see a partially written file at output_path.
    """
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")

    dir_path, file_name = os.path.split(output_path)
    # Plain open() so the artifact gets umask-default permissions
    tmp_path = os.path.join(dir_path, f".{file_name}.{uuid.uuid4().hex}.tmp")
    try:
        out_file = open(tmp_path, "xb")
    except OSError as e:
        raise EncodeOrWriteError(output_path, str(e)) from e

    try:
        with out_file:
            img.save(out_file, format="JPEG", quality=quality)
        os.replace(tmp_path, output_path)
    except (OSError, ValueError) as e:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise EncodeOrWriteError(output_path, str(e)) from e


def render_resized_jpeg(stream: BinaryIO, height: int, width: int, quality: int, output_path: str) -> str:
    """Decode stream, resize it and write a JPEG to output_path."""
    img = decode_image(stream)
    resized = resize_image(img, height, width)
    save_jpeg(resized, quality, output_path)
    logger.debug("Wrote %s (%dx%d)", output_path, resized.width, resized.height)
    return output_path
