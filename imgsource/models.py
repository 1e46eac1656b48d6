"""Core data models and types for image loading.

These models describe what flows through the loader: the source kinds it
recognizes, the retrieval options for remote sources, and the loaded image
it hands back.
"""

from __future__ import annotations

import array
import base64
import os
from collections.abc import AsyncIterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
from enum import Enum, auto
from io import BytesIO
from typing import IO, Any, Union
from urllib.parse import ParseResult, SplitResult

import httpx
from PIL import Image as PilImage

from imgsource.config import config


class SourceKind(Enum):
    """Kinds of image sources, in classification priority order."""

    LOADED_IMAGE = auto()
    STREAM = auto()
    BYTES = auto()
    BUFFER_LIKE = auto()
    PIL_IMAGE = auto()
    DATA_URI = auto()
    LOCATION = auto()


@dataclass(frozen=True)
class LoadedImage:
    """Image bytes tagged with the MIME type sniffed from their content."""

    data: bytes = field(repr=False)
    mime: str

    @property
    def size(self) -> int:
        """Payload size in bytes."""
        return len(self.data)

    def to_data_uri(self) -> str:
        """Encode the image as a base64 data URI."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime};base64,{encoded}"

    def open(self) -> PilImage.Image:
        """Open the payload with Pillow.

        The caller owns the returned image and should close it.
        """
        return PilImage.open(BytesIO(self.data))


ImageSource = Union[
    LoadedImage,
    bytes,
    bytearray,
    memoryview,
    array.array,
    Sequence[int],
    Mapping[str, Any],
    IO[bytes],
    AsyncIterable[bytes],
    Iterator[bytes],
    PilImage.Image,
    str,
    "os.PathLike[str]",
    httpx.URL,
    ParseResult,
    SplitResult,
]


OPTION_ALIASES = {"maxRedirects": "max_redirects", "requestOptions": "request_options"}


@dataclass
class RetrievalOptions:
    """Options applied when a source has to be fetched over HTTP.

    Attributes:
        headers: Extra headers for every outbound request
        max_redirects: Redirect budget for the manual redirect loop; anything
            other than a non-negative int falls back to the configured default
        request_options: Transport passthrough. ``headers`` is merged into
            the request headers, every other key goes to ``httpx.AsyncClient``.
            A fetcher given its own client only applies ``headers``; the
            other keys are ignored (and logged at debug level)
        native_fetch: Delegate redirects to httpx instead of following them
            manually; ``None`` defers to ``config.NATIVE_FETCH``
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    max_redirects: Any = None
    request_options: dict[str, Any] = field(default_factory=dict)
    native_fetch: bool | None = None

    @classmethod
    def coerce(
        cls,
        options: RetrievalOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> RetrievalOptions:
        """Build options from an instance, a mapping, or nothing.

        Mappings and overrides may use ``maxRedirects``/``requestOptions`` as
        aliases. Unrecognized keys are ignored.
        """
        if isinstance(options, cls):
            if not overrides:
                return options
            names = {f.name for f in fields(cls)}
            changes = {}
            for key, value in overrides.items():
                key = OPTION_ALIASES.get(key, key)
                if key in names:
                    changes[key] = value
            return replace(options, **changes)

        values: dict[str, Any] = dict(options or {})
        values.update(overrides)

        max_redirects = values.get("max_redirects", values.get("maxRedirects"))
        request_options = values.get(
            "request_options", values.get("requestOptions")
        )
        return cls(
            headers=dict(values.get("headers") or {}),
            max_redirects=max_redirects,
            request_options=dict(request_options or {}),
            native_fetch=values.get("native_fetch"),
        )

    @property
    def redirect_budget(self) -> int:
        """Number of redirects the manual loop may follow."""
        value = self.max_redirects
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
        return config.MAX_REDIRECTS

    def request_headers(self) -> dict[str, str]:
        """Default headers merged with transport and explicit headers."""
        headers = config.default_headers()
        headers.update(self.request_options.get("headers") or {})
        headers.update(self.headers or {})
        return headers

    def client_options(self) -> dict[str, Any]:
        """Keyword arguments for constructing an ``httpx.AsyncClient``."""
        kwargs: dict[str, Any] = {"timeout": config.HTTP_TIMEOUT}
        kwargs.update(
            {
                key: value
                for key, value in self.request_options.items()
                if key != "headers"
            }
        )
        return kwargs


__all__ = [
    "ImageSource",
    "LoadedImage",
    "RetrievalOptions",
    "SourceKind",
]
