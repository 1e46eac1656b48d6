"""Remote location validation."""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import ParseResult, SplitResult

import httpx

from imgsource.errors import UnsupportedSourceError

REMOTE_SCHEMES = frozenset({"http", "https"})


def is_valid_remote_url(url: httpx.URL) -> bool:
    """Ensure the URL uses http(s) and has a host."""
    return url.scheme in REMOTE_SCHEMES and bool(url.host)


def to_remote_url(location: Any) -> httpx.URL:
    """Parse a location that is not a local file as a remote URL.

    Raises:
        UnsupportedSourceError: If the location is not an http(s) URL
    """
    if isinstance(location, (ParseResult, SplitResult)):
        text = location.geturl()
    elif isinstance(location, os.PathLike):
        text = os.fspath(location)
    else:
        text = str(location)

    try:
        url = httpx.URL(text.strip())
    except httpx.InvalidURL as exc:
        raise UnsupportedSourceError(f"unsupported image source: {text!r}") from exc

    if not is_valid_remote_url(url):
        raise UnsupportedSourceError(
            f"unsupported image source: {text!r} is neither a readable file "
            "nor an http(s) URL"
        )
    return url


__all__ = ["REMOTE_SCHEMES", "is_valid_remote_url", "to_remote_url"]
