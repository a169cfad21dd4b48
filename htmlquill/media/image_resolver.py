"""
Image source resolution.

The default resolver understands ``data:`` URIs and local file paths
(plain paths or ``file://`` URLs). Remote URLs are not fetched.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import unquote, urlparse

from PIL import Image, UnidentifiedImageError

from ..exceptions import MediaError

logger = logging.getLogger(__name__)

PX_TO_PT = 0.75


def resolve_image(src: str) -> Optional[bytes]:
    """
    Map an ``img`` source to image bytes.

    Args:
        src: Value of the ``src`` attribute

    Returns:
        Raw image bytes, or None for sources that are not handled (remote URLs)

    Raises:
        MediaError: A data URI is malformed or a local file cannot be read
    """
    src = (src or "").strip()
    if not src:
        return None

    if src.startswith("data:"):
        return _decode_data_uri(src)

    parsed = urlparse(src)
    if parsed.scheme in ("http", "https"):
        logger.debug(f"Remote image not fetched: {src}")
        return None

    path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(src)
    if not path.is_file():
        raise MediaError("Image file not found", str(path))
    try:
        return path.read_bytes()
    except OSError as exc:
        raise MediaError(f"Cannot read image {path}", str(exc)) from exc


def _decode_data_uri(src: str) -> bytes:
    header, sep, payload = src.partition(",")
    if not sep:
        raise MediaError("Malformed data URI", src[:40])
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as exc:
            raise MediaError("Invalid base64 payload in data URI", str(exc)) from exc
    return unquote(payload).encode("latin-1", errors="replace")


def image_size(data: bytes) -> Tuple[float, float]:
    """
    Intrinsic size of an image in points (pixels at 96 dpi).

    Raises:
        MediaError: The bytes are not a readable image
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            width_px, height_px = image.size
    except (UnidentifiedImageError, OSError) as exc:
        raise MediaError("Unreadable image data", str(exc)) from exc
    return width_px * PX_TO_PT, height_px * PX_TO_PT
