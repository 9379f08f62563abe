"""Consumer – FeedReader.

Reads pages from a running publisher, undoing envelope encryption when
the publisher has it enabled, and can walk the ``prev-archive`` chain
back to the oldest archive.
"""
from __future__ import annotations

from typing import Any, AsyncIterator

import httpx

from es_atompub.feed import RECENT_FEED_ID, FeedPage, LinkRel, parse_feed
from es_atompub.kernel.errors import EnvelopeFormatError, ExternalServiceError
from es_atompub.observability.logging import get_logger
from es_atompub.security.encryption import EnvelopeDecrypter

logger = get_logger(__name__)


class FeedReader:
    """Thin async httpx reader for ``/notifications/*`` resources.

    Parameters
    ----------
    base_url:
        Publisher root, e.g. ``https://feed.example.com``.
    decrypter:
        Needed only when the publisher encrypts its responses.
    client:
        Optional pre-built :class:`httpx.AsyncClient` (tests pass one with a
        mock transport).
    """

    def __init__(
        self,
        base_url: str,
        decrypter: EnvelopeDecrypter | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._decrypter = decrypter
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "FeedReader":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self, url: str) -> bytes:
        """GET *url* and return the plaintext body."""
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service=url, message=str(exc), cause=exc) from exc
        if response.status_code != 200:
            raise ExternalServiceError(
                service=url,
                message=f"HTTP {response.status_code} from GET {url}",
                status_code=response.status_code,
            )
        return await self._plaintext(response.content)

    async def _plaintext(self, body: bytes) -> bytes:
        if not EnvelopeDecrypter.is_envelope(body):
            return body
        if self._decrypter is None:
            raise EnvelopeFormatError("response is encrypted but no decrypter is configured")
        return await self._decrypter.decrypt(body)

    async def read(self, feed_id: str = RECENT_FEED_ID) -> FeedPage:
        return parse_feed(await self.fetch(f"{self._base_url}/notifications/{feed_id}"))

    async def walk_archives(self) -> AsyncIterator[FeedPage]:
        """Yield the recent page, then each archive from newest to oldest."""
        page = await self.read()
        yield page
        href = page.link(LinkRel.PREV_ARCHIVE)
        while href:
            logger.debug("following prev-archive", href=href)
            page = parse_feed(await self.fetch(href))
            yield page
            href = page.link(LinkRel.PREV_ARCHIVE)


__all__ = ["FeedReader"]
