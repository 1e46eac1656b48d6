"""Resolve any supported image source into a :class:`LoadedImage`.

Example:
    from imgsource import load_image

    image = await load_image("https://example.com/cat.png", max_redirects=5)
    print(image.mime, image.size)
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from typing import Any

import anyio
import httpx

from imgsource.classification import classify, to_bytes
from imgsource.data_uri import decode_data_uri
from imgsource.fetchers import ImageFetcher, select_fetcher
from imgsource.filesystem import exists, read_file
from imgsource.models import LoadedImage, RetrievalOptions, SourceKind
from imgsource.sniffing import create_image, export_pil_image
from imgsource.streams import consume_stream
from imgsource.validator import to_remote_url

logger = logging.getLogger("imgsource.loader")


class SourceResolver:
    """Classify an image source and turn it into a loaded image.

    Sources are dispatched by kind, in this order: loaded images pass
    through untouched, streams are drained, ``bytes`` are used as-is,
    buffer-like values are copied, Pillow images are re-exported, data URIs
    are decoded, and locations are read from disk when readable or fetched
    over HTTP otherwise.
    """

    def __init__(
        self,
        *,
        fetcher: ImageFetcher | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            fetcher: Fixed fetcher for remote sources. Without one, a fetcher
                is selected per call from the retrieval options.
            client: Shared httpx client handed to selected fetchers
        """
        self.fetcher = fetcher
        self.client = client

    async def resolve(
        self,
        source: Any,
        options: RetrievalOptions | Mapping[str, Any] | None = None,
    ) -> LoadedImage:
        """Load ``source`` and tag it with its sniffed MIME type.

        Raises:
            UnsupportedSourceError: If the source kind is not supported
            TransportError: If a remote fetch fails at the connection level
            RemoteRejectedError: If a remote fetch ends with a non-2xx status
            DecodeError: If the bytes are not a recognized image
        """
        kind = classify(source)
        logger.debug("Resolving %s source", kind.name)

        if kind is SourceKind.LOADED_IMAGE:
            return source
        if kind is SourceKind.STREAM:
            return await create_image(await consume_stream(source))
        if kind is SourceKind.BYTES:
            return await create_image(source)
        if kind is SourceKind.BUFFER_LIKE:
            return await create_image(to_bytes(source))
        if kind is SourceKind.PIL_IMAGE:
            data = await anyio.to_thread.run_sync(export_pil_image, source)
            return await create_image(data)
        if kind is SourceKind.DATA_URI:
            return await create_image(decode_data_uri(source))

        options = RetrievalOptions.coerce(options)
        return await self._resolve_location(source, options)

    async def _resolve_location(
        self, location: Any, options: RetrievalOptions
    ) -> LoadedImage:
        if await exists(location):
            logger.debug("Reading local file %s", location)
            return await create_image(await read_file(location))

        url = to_remote_url(location)
        fetcher = self.fetcher or select_fetcher(options, client=self.client)
        data = await fetcher.fetch(url, options)
        return await create_image(data)


async def load_image(
    source: Any,
    options: RetrievalOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> LoadedImage:
    """Load an image source with a default resolver.

    Keyword arguments override fields of ``options``.
    """
    return await SourceResolver().resolve(
        source, RetrievalOptions.coerce(options, **overrides)
    )


def load_image_sync(
    source: Any,
    options: RetrievalOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> LoadedImage:
    """Blocking variant of :func:`load_image` for synchronous callers."""
    return anyio.run(functools.partial(load_image, source, options, **overrides))


__all__ = ["SourceResolver", "load_image", "load_image_sync"]
