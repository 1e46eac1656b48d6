"""Inline ``data:`` URI decoding.

Only the payload matters: the declared media type is ignored and the MIME
type is sniffed from the decoded bytes later on.
"""

from __future__ import annotations

import base64
import re

from imgsource.constants import DATA_URI, DATA_URI_BASE64_MARKER

_NON_BASE64 = re.compile(r"[^A-Za-z0-9+/]")


def is_data_uri(value: str) -> bool:
    """Check whether ``value`` starts with ``data:`` (leading whitespace allowed)."""
    return DATA_URI.match(value) is not None


def _lenient_b64decode(payload: str) -> bytes:
    """Decode base64 the forgiving way browsers do.

    URL-safe characters are mapped to the standard alphabet, anything else
    outside the alphabet (whitespace, padding) is dropped and padding is
    recomputed. A dangling single character carries no full byte and is
    discarded.
    """
    normalized = _NON_BASE64.sub("", payload.replace("-", "+").replace("_", "/"))
    if len(normalized) % 4 == 1:
        normalized = normalized[:-1]
    normalized += "=" * (-len(normalized) % 4)
    return base64.b64decode(normalized)


def decode_data_uri(uri: str) -> bytes:
    """Decode the payload of a data URI.

    Everything after the first comma is the payload. It is treated as base64
    when the literal ``base64`` marker appears before that comma, otherwise
    as UTF-8 text. Without a comma the payload is empty.

    Args:
        uri: String matching ``^\\s*data:``

    Returns:
        Decoded payload bytes
    """
    comma = uri.find(",")
    if comma < 0:
        return b""

    payload = uri[comma + 1 :]
    if DATA_URI_BASE64_MARKER in uri[:comma]:
        return _lenient_b64decode(payload)
    return payload.encode("utf-8")


__all__ = ["decode_data_uri", "is_data_uri"]
