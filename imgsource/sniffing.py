"""MIME sniffing and image tagging.

The MIME type always comes from the bytes themselves (Pillow's format
identification), never from a filename, header or declared type.
"""

from __future__ import annotations

import logging
import os
from io import BytesIO
from pathlib import Path

import anyio
from PIL import Image as PilImage

from imgsource.errors import DecodeError
from imgsource.models import LoadedImage

logger = logging.getLogger("imgsource.loader")

# Pillow matches plugins against this many leading bytes.
SIGNATURE_LENGTH = 16


def sniff_mime(data: bytes) -> str | None:
    """Identify the image MIME type of ``data``.

    Args:
        data: Fully materialized image bytes

    Returns:
        MIME type such as ``image/png``, or None if the bytes are not a
        recognized image format
    """
    if not data:
        return None

    try:
        with PilImage.open(BytesIO(data)) as img:
            return img.get_format_mimetype() or None
    except PilImage.DecompressionBombError as exc:
        # Oversized but well-formed; the header was already recognized.
        logger.debug("Identifying oversized image by signature: %s", exc)
        return _mime_from_signature(data)
    except Exception as exc:
        logger.debug("Failed to identify image: %s", exc)
        return None


def _mime_from_signature(data: bytes) -> str | None:
    PilImage.init()
    prefix = data[:SIGNATURE_LENGTH]
    for fmt in PilImage.ID:
        _factory, accept = PilImage.OPEN[fmt]
        if accept is None:
            continue
        result = accept(prefix)
        if result and not isinstance(result, str):
            return PilImage.MIME.get(fmt)
    return None


async def create_image(data: bytes) -> LoadedImage:
    """Tag ``data`` with its sniffed MIME type.

    Raises:
        DecodeError: If no image format is recognized
    """
    mime = await anyio.to_thread.run_sync(sniff_mime, data)
    if not mime:
        raise DecodeError()
    return LoadedImage(data=data, mime=mime)


def export_pil_image(image: PilImage.Image) -> bytes:
    """Recover the encoded bytes behind a Pillow image.

    Images opened from a still-readable file yield that file's bytes.
    Anything else is re-encoded in its own format, PNG when unknown.
    """
    filename = getattr(image, "filename", "")
    if filename and os.access(filename, os.R_OK):
        return Path(filename).read_bytes()

    buffer = BytesIO()
    image.save(buffer, format=image.format or "PNG")
    return buffer.getvalue()


__all__ = ["create_image", "export_pil_image", "sniff_mime"]
