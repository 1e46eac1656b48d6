"""Stream draining.

Every stream is read to its end before anything looks at the bytes. Chunks
are collected in arrival order and joined once at end-of-stream.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, Iterable
from typing import Any

import anyio

from imgsource.constants import STREAM_CHUNK_SIZE
from imgsource.errors import UnsupportedSourceError


def _as_chunk(chunk: Any) -> bytes:
    if isinstance(chunk, (bytes, bytearray, memoryview)):
        return bytes(chunk)
    raise UnsupportedSourceError(
        f"stream produced {type(chunk).__name__} chunk, expected bytes"
    )


def _drain_sync(stream: Any) -> bytes:
    chunks: list[bytes] = []
    if callable(getattr(stream, "read", None)):
        while True:
            chunk = stream.read(STREAM_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(_as_chunk(chunk))
    else:
        iterable: Iterable[Any] = stream
        for chunk in iterable:
            chunks.append(_as_chunk(chunk))
    return b"".join(chunks)


async def consume_stream(stream: Any) -> bytes:
    """Read a stream to its end and return the concatenated bytes.

    Args:
        stream: An async iterable of byte chunks (httpx/anyio streams), a
            file-like object with ``read``, or an iterator of byte chunks.
            Blocking sources are drained in a worker thread.

    Returns:
        All bytes in the order they were received
    """
    if isinstance(stream, AsyncIterable):
        chunks: list[bytes] = []
        async for chunk in stream:
            chunks.append(_as_chunk(chunk))
        return b"".join(chunks)

    return await anyio.to_thread.run_sync(_drain_sync, stream)


__all__ = ["consume_stream"]
