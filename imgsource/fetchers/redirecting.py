"""Fetcher that follows redirects manually within a fixed budget."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from imgsource.constants import REDIRECT_STATUSES
from imgsource.errors import RemoteRejectedError, TransportError
from imgsource.fetchers import ImageFetcher
from imgsource.streams import consume_stream

if TYPE_CHECKING:
    from imgsource.models import RetrievalOptions

logger = logging.getLogger("imgsource.fetch")


class RedirectingFetcher(ImageFetcher):
    """Issue GET requests hop by hop, following 301/302 responses.

    Each hop reuses the same headers and transport options. When the budget
    is spent, the redirect response itself goes through the status check
    and surfaces as ``RemoteRejectedError`` with its 3xx code.
    """

    @property
    def enforces_redirect_limit(self) -> bool:
        return True

    async def fetch(self, url: httpx.URL, options: RetrievalOptions) -> bytes:
        budget = options.redirect_budget
        headers = options.request_headers()
        current = httpx.URL(str(url))

        async with self._open_client(options) as client:
            while True:
                logger.debug("GET %s (%s redirects left)", current, budget)
                try:
                    async with client.stream(
                        "GET",
                        current,
                        headers=headers,
                        follow_redirects=False,
                    ) as response:
                        status = response.status_code
                        location = response.headers.get("location")
                        if (
                            status in REDIRECT_STATUSES
                            and location is not None
                            and budget > 0
                        ):
                            logger.debug(
                                "Redirect %s from %s to %s", status, current, location
                            )
                            current = current.join(location)
                            budget -= 1
                            continue

                        if status < 200 or status >= 300:
                            raise RemoteRejectedError(status, str(current))

                        data = await consume_stream(response.aiter_bytes())
                except (httpx.RequestError, httpx.InvalidURL) as exc:
                    raise TransportError(
                        f"Failed to fetch {current}: {exc}", url=str(current)
                    ) from exc

                logger.info("Fetched %s bytes from %s", len(data), current)
                return data


__all__ = ["RedirectingFetcher"]
