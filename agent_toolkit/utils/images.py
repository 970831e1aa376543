"""
Helpers for turning images into base64 payloads usable in multi-part messages.
"""

from __future__ import annotations

import base64
import binascii
from typing import Optional

import requests

from ..core.primitives.messages import ImagePart


class ImageError(RuntimeError):
    """Raised when image data cannot be fetched or decoded."""


def data_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_to_data(encoded: str) -> Optional[bytes]:
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return None


def fetch_image(url: str, *, timeout: float = 30.0, session: Optional[requests.Session] = None) -> bytes:
    if not url.startswith(("http://", "https://")):
        raise ImageError(f"Invalid image URL: {url}")
    getter = session or requests
    try:
        response = getter.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise ImageError(f"Could not fetch image from {url}: {exc}") from exc
    if not response.content:
        raise ImageError(f"Invalid image data returned by {url}")
    return response.content


def url_to_base64(url: str, *, timeout: float = 30.0, session: Optional[requests.Session] = None) -> str:
    return data_to_base64(fetch_image(url, timeout=timeout, session=session))


def data_url(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{data_to_base64(data)}"


def inline_image(data: bytes, *, mime_type: str = "image/png", detail: Optional[str] = None) -> ImagePart:
    """Embed raw image bytes as a ``data:`` URL image part."""
    return ImagePart(url=data_url(data, mime_type), detail=detail)
