"""Fetcher that delegates redirect handling to httpx."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from imgsource.errors import RemoteRejectedError, TransportError
from imgsource.fetchers import ImageFetcher

if TYPE_CHECKING:
    from imgsource.models import RetrievalOptions

logger = logging.getLogger("imgsource.fetch")


class DelegatingFetcher(ImageFetcher):
    """Single GET with ``follow_redirects=True``.

    ``max_redirects`` is ignored; only httpx's own redirect limit applies,
    and exceeding it is reported as ``TransportError``.
    """

    @property
    def enforces_redirect_limit(self) -> bool:
        return False

    async def fetch(self, url: httpx.URL, options: RetrievalOptions) -> bytes:
        logger.debug("GET %s (redirects delegated)", url)

        async with self._open_client(options) as client:
            try:
                response = await client.get(
                    url,
                    headers=options.request_headers(),
                    follow_redirects=True,
                )
            except (httpx.RequestError, httpx.InvalidURL) as exc:
                raise TransportError(
                    f"Failed to fetch {url}: {exc}", url=str(url)
                ) from exc

        if not response.is_success:
            raise RemoteRejectedError(response.status_code, str(response.url))

        logger.info("Fetched %s bytes from %s", len(response.content), response.url)
        return response.content


__all__ = ["DelegatingFetcher"]
