"""Remote image fetchers.

Two strategies retrieve the bytes behind an http(s) URL:

* :class:`RedirectingFetcher` follows 301/302 redirects itself and enforces
  the ``max_redirects`` budget.
* :class:`DelegatingFetcher` lets httpx follow redirects in a single call.
  The ``max_redirects`` option does not apply there.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx

from imgsource.config import config

if TYPE_CHECKING:
    from imgsource.models import RetrievalOptions

logger = logging.getLogger("imgsource.fetch")


class ImageFetcher(ABC):
    """Abstract base class for remote image fetchers.

    A fetcher turns one URL into the complete response body, or raises
    ``TransportError`` / ``RemoteRejectedError``.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """Initialize the fetcher.

        Args:
            client: Shared client to issue requests with. Without one, each
                fetch opens and closes its own client built from the
                retrieval options.
        """
        self.client = client

    @property
    @abstractmethod
    def enforces_redirect_limit(self) -> bool:
        """Whether ``RetrievalOptions.max_redirects`` is honored."""
        pass

    @abstractmethod
    async def fetch(self, url: httpx.URL, options: RetrievalOptions) -> bytes:
        """Fetch the full body behind ``url``.

        Raises:
            TransportError: On connection-level failures
            RemoteRejectedError: On a final status outside [200, 300)
        """
        pass

    @asynccontextmanager
    async def _open_client(
        self, options: RetrievalOptions
    ) -> AsyncIterator[httpx.AsyncClient]:
        if self.client is not None:
            ignored = sorted(
                key for key in options.request_options if key != "headers"
            )
            if ignored:
                logger.debug(
                    "Injected client in use, ignoring request options %s", ignored
                )
            yield self.client
            return
        async with httpx.AsyncClient(**options.client_options()) as client:
            yield client


def select_fetcher(
    options: RetrievalOptions,
    *,
    client: httpx.AsyncClient | None = None,
) -> ImageFetcher:
    """Pick the fetcher for ``options``.

    ``options.native_fetch`` wins when set, otherwise ``config.NATIVE_FETCH``.
    With neither set, the manual :class:`RedirectingFetcher` is the default:
    httpx is always present, so there is no transport capability to detect,
    and only the manual loop honors ``max_redirects``.
    """
    from imgsource.fetchers.delegating import DelegatingFetcher
    from imgsource.fetchers.redirecting import RedirectingFetcher

    native = options.native_fetch
    if native is None:
        native = config.NATIVE_FETCH
    if native:
        return DelegatingFetcher(client)
    return RedirectingFetcher(client)


__all__ = ["ImageFetcher", "select_fetcher"]
