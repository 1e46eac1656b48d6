"""Local file access for path-like sources."""

from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import ParseResult, SplitResult, unquote, urlsplit

import anyio
import httpx

logger = logging.getLogger("imgsource.loader")


def to_local_path(location: Any) -> str | None:
    """Map a location to a filesystem path, if it can name one.

    Plain strings and path objects are used as-is. Parsed URLs only name a
    local file when their scheme is ``file``.
    """
    if isinstance(location, (str, os.PathLike)):
        return os.fspath(location)

    if isinstance(location, httpx.URL):
        parts = urlsplit(str(location))
    elif isinstance(location, (ParseResult, SplitResult)):
        parts = location
    else:
        return None

    if parts.scheme != "file":
        return None
    return unquote(parts.path)


def _is_readable(location: Any) -> bool:
    try:
        path = to_local_path(location)
        return path is not None and os.access(path, os.R_OK)
    except (OSError, TypeError, ValueError) as exc:
        logger.debug("Existence check failed for %r: %s", location, exc)
        return False


async def exists(location: Any) -> bool:
    """Check that ``location`` names a readable local file.

    Missing files, permission problems and malformed paths all yield False.
    """
    return await anyio.to_thread.run_sync(_is_readable, location)


async def read_file(location: Any) -> bytes:
    """Read the whole file behind ``location``.

    Errors are not swallowed: a file that vanished after :func:`exists`
    returned True surfaces as the underlying ``OSError``.
    """
    path = to_local_path(location)
    if path is None:
        raise FileNotFoundError(f"Not a local path: {location!r}")
    return await anyio.Path(path).read_bytes()


__all__ = ["exists", "read_file", "to_local_path"]
