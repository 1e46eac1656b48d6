"""Image source constants.

All loader defaults in one place for consistency.
"""

from __future__ import annotations

import re

# Redirects
MAX_REDIRECTS = 20
REDIRECT_STATUSES = frozenset({301, 302})

# Inline sources
DATA_URI = re.compile(r"^\s*data:")
DATA_URI_BASE64_MARKER = "base64"

# Stream draining
STREAM_CHUNK_SIZE = 64 * 1024  # bytes

# Tag used by JSON-serialized buffers: {"type": "Buffer", "data": [...]}
BUFFER_TYPE_TAG = "Buffer"

# HTTP headers for image requests
IMAGE_REQUEST_HEADERS = {
    "Accept": "image/*",
}

__all__ = [
    "BUFFER_TYPE_TAG",
    "DATA_URI",
    "DATA_URI_BASE64_MARKER",
    "IMAGE_REQUEST_HEADERS",
    "MAX_REDIRECTS",
    "REDIRECT_STATUSES",
    "STREAM_CHUNK_SIZE",
]
