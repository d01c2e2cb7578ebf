"""Size-bounded JPEG re-encoding for images embedded in itinerary PDFs."""

from __future__ import annotations

import asyncio
import base64
import binascii
import io
import logging
import re
from typing import Iterable, List, Optional, Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from .config import get_settings
from .models import CompressionRequest, CompressionResult


logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^;,]*)*?),(?P<payload>.*)$", re.DOTALL)

ImageSource = Union[bytes, bytearray, str]


class ImageDecodeError(ValueError):
    """Raised when an uploaded image cannot be decoded."""


def _source_bytes(source: ImageSource) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if not isinstance(source, str):
        raise ImageDecodeError(f"Unsupported image source type: {type(source).__name__}")
    match = DATA_URL_PATTERN.match(source.strip())
    if not match:
        raise ImageDecodeError("Image source is not a data URL.")
    if ";base64" not in match.group("params"):
        raise ImageDecodeError("Only base64 data URLs are supported.")
    try:
        return base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError(f"Invalid base64 image payload: {exc}") from exc


def decode_image(source: ImageSource) -> Image.Image:
    """Decode raw bytes or a data URL into a fully loaded Pillow image."""

    raw = _source_bytes(source)
    if not raw:
        raise ImageDecodeError("Image payload is empty.")
    try:
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as exc:
        raise ImageDecodeError(f"Could not decode image: {exc}") from exc
    return ImageOps.exif_transpose(image)


def fit_dimensions(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """Scale to the width bound first, then to the height bound.

    The two passes are sequential rather than a single min-ratio scale, so
    extreme aspect ratios can still end up slightly over one bound.
    """

    w: float = width
    h: float = height
    if w > max_width:
        h = h * max_width / w
        w = max_width
    if h > max_height:
        w = w * max_height / h
        h = max_height
    return max(1, int(w)), max(1, int(h))


def _flatten(image: Image.Image) -> Image.Image:
    if image.mode == "P" and "transparency" in image.info:
        image = image.convert("RGBA")
    if image.mode in ("RGBA", "LA"):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


def encode_jpeg(image: Image.Image, quality: int) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def compress_image(
    source: ImageSource,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
    target_bytes: Optional[int] = None,
) -> CompressionResult:
    """Resize ``source`` and lower JPEG quality until it fits ``target_bytes``.

    Quality starts at 80 and drops by 10 per attempt. At the floor (10) the
    encoding is returned even if it is still over budget.
    """

    settings = get_settings()
    max_width = max_width or settings.image_max_width
    max_height = max_height or settings.image_max_height
    target_bytes = settings.image_target_bytes if target_bytes is None else target_bytes

    image = decode_image(source)
    width, height = fit_dimensions(image.width, image.height, max_width, max_height)
    canvas = _flatten(image)
    if canvas.size != (width, height):
        canvas = canvas.resize((width, height), Image.Resampling.LANCZOS)

    quality = settings.image_initial_quality
    while True:
        data = encode_jpeg(canvas, quality)
        size = len(data)
        logger.debug("JPEG attempt quality=%s size=%s target=%s", quality, size, target_bytes)
        if size <= target_bytes or quality <= settings.image_min_quality:
            break
        quality = max(quality - settings.image_quality_step, settings.image_min_quality)

    if size > target_bytes:
        logger.warning(
            "Quality floor reached at %s bytes, above target of %s bytes", size, target_bytes
        )
    logger.info(
        "Compressed %sx%s image to %sx%s at quality %s (%s bytes)",
        image.width,
        image.height,
        width,
        height,
        quality,
        size,
    )
    return CompressionResult(data=data, width=width, height=height, quality=quality, size_bytes=size)


def compress_request(request: CompressionRequest) -> CompressionResult:
    return compress_image(request.image, request.max_width, request.max_height, request.target_bytes)


async def compress_image_async(
    source: ImageSource,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
    target_bytes: Optional[int] = None,
) -> CompressionResult:
    """Run :func:`compress_image` in a worker thread."""

    return await asyncio.to_thread(compress_image, source, max_width, max_height, target_bytes)


async def compress_images(
    sources: Iterable[ImageSource],
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
    target_bytes: Optional[int] = None,
) -> List[CompressionResult]:
    """Compress images one after another, yielding to the loop between them."""

    results: List[CompressionResult] = []
    for source in sources:
        results.append(await compress_image_async(source, max_width, max_height, target_bytes))
        await asyncio.sleep(0)
    return results
