"""Source classification.

Turns an arbitrary input value into a :class:`SourceKind` by evaluating a
fixed, ordered table of shape predicates. The first predicate that matches
wins, so the order of ``SOURCE_PREDICATES`` is the dispatch policy.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterable, Callable, Iterator, Mapping
from typing import Any
from urllib.parse import ParseResult, SplitResult

import httpx
from PIL import Image as PilImage

from imgsource.constants import BUFFER_TYPE_TAG
from imgsource.data_uri import is_data_uri
from imgsource.errors import UnsupportedSourceError
from imgsource.models import LoadedImage, SourceKind

_TEXT_OR_BYTES = (str, bytes, bytearray, memoryview)


def is_loaded_image(value: Any) -> bool:
    return isinstance(value, LoadedImage)


def is_stream(value: Any) -> bool:
    """File-like objects, async iterables and iterators of byte chunks."""
    if isinstance(value, _TEXT_OR_BYTES):
        return False
    if callable(getattr(value, "read", None)):
        return True
    return isinstance(value, (AsyncIterable, Iterator))


def is_bytes(value: Any) -> bool:
    return isinstance(value, bytes)


def _is_byte_sequence(items: Any) -> bool:
    return isinstance(items, (list, tuple)) and all(
        isinstance(item, int) and not isinstance(item, bool) and 0 <= item <= 255
        for item in items
    )


def is_buffer_like(value: Any) -> bool:
    """Values convertible to ``bytes`` without loss."""
    if isinstance(value, (str, bytes)):
        return False
    if isinstance(value, Mapping):
        return value.get("type") == BUFFER_TYPE_TAG and _is_byte_sequence(
            value.get("data")
        )
    if isinstance(value, (list, tuple)):
        return _is_byte_sequence(value)
    try:
        with memoryview(value):
            return True
    except TypeError:
        return False


def is_pil_image(value: Any) -> bool:
    return isinstance(value, PilImage.Image)


def is_inline_data(value: Any) -> bool:
    return isinstance(value, str) and is_data_uri(value)


def is_location(value: Any) -> bool:
    return isinstance(value, (str, os.PathLike, httpx.URL, ParseResult, SplitResult))


SOURCE_PREDICATES: tuple[tuple[SourceKind, Callable[[Any], bool]], ...] = (
    (SourceKind.LOADED_IMAGE, is_loaded_image),
    (SourceKind.STREAM, is_stream),
    (SourceKind.BYTES, is_bytes),
    (SourceKind.BUFFER_LIKE, is_buffer_like),
    (SourceKind.PIL_IMAGE, is_pil_image),
    (SourceKind.DATA_URI, is_inline_data),
    (SourceKind.LOCATION, is_location),
)


def classify(value: Any) -> SourceKind:
    """Return the kind of ``value``.

    Raises:
        UnsupportedSourceError: If no predicate matches
    """
    for kind, predicate in SOURCE_PREDICATES:
        if predicate(value):
            return kind
    raise UnsupportedSourceError(
        f"unsupported image source: {type(value).__name__}"
    )


def to_bytes(value: Any) -> bytes:
    """Copy a buffer-like value into a new ``bytes`` object.

    Buffer-protocol objects are copied as raw memory, so a multi-byte
    numeric array contributes all of its bytes in native order.
    """
    if isinstance(value, Mapping):
        return bytes(value["data"])
    if isinstance(value, (list, tuple)):
        return bytes(value)
    with memoryview(value) as view:
        return view.tobytes()


__all__ = [
    "SOURCE_PREDICATES",
    "classify",
    "is_buffer_like",
    "is_bytes",
    "is_inline_data",
    "is_loaded_image",
    "is_location",
    "is_pil_image",
    "is_stream",
    "to_bytes",
]
