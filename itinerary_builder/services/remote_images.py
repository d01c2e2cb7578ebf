"""Download hotel and cover images that are stored as URLs."""

from __future__ import annotations

import base64
import logging
from typing import Optional

import httpx

from ..config import get_settings


logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "image/jpeg"


class RemoteImageError(RuntimeError):
    """Raised when a remote image cannot be downloaded."""


def _get(url: str, timeout: Optional[float]) -> httpx.Response:
    settings = get_settings()
    try:
        with httpx.Client(timeout=timeout or settings.remote_image_timeout, follow_redirects=True) as client:
            resp = client.get(url)
            resp.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Image download failed for %s: %s", url, exc)
        raise RemoteImageError(f"Could not fetch image from {url}: {exc}") from exc
    return resp


def fetch_image(url: str, timeout: Optional[float] = None) -> bytes:
    """Return the raw bytes of the image at ``url``."""

    resp = _get(url, timeout)
    if not resp.content:
        raise RemoteImageError(f"Empty response body from {url}")
    return resp.content


def fetch_as_data_url(url: str, timeout: Optional[float] = None) -> str:
    """Download ``url`` and wrap it as a base64 data URL."""

    resp = _get(url, timeout)
    if not resp.content:
        raise RemoteImageError(f"Empty response body from {url}")
    content_type = resp.headers.get("content-type", DEFAULT_CONTENT_TYPE).split(";")[0].strip()
    if not content_type.startswith("image/"):
        content_type = DEFAULT_CONTENT_TYPE
    encoded = base64.b64encode(resp.content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
