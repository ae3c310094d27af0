"""Jina Reader adapter: fetches a web page as plain text."""

import logging

import httpx

from rag_tutorial.application.interfaces.content_fetcher import ContentFetcher
from rag_tutorial.infrastructure.jina.jina_client import JinaServiceClient

logger = logging.getLogger(__name__)


class JinaReader(JinaServiceClient, ContentFetcher):
    """Infrastructure adapter: ``GET {base_url}/{target_url}`` returns the page text."""

    service_name = "jina-reader"

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://r.jina.ai",
        *,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, timeout=timeout, http_client=http_client)
        self._base_url = base_url.rstrip("/")

    def reader_url(self, url: str) -> str:
        return f"{self._base_url}/{url}"

    async def fetch(self, url: str) -> str:
        async with self._client() as client:
            try:
                response = await client.get(
                    self.reader_url(url), headers=self._get_headers(accept="text/plain")
                )
            except httpx.HTTPError as exc:
                raise self._transport_error(exc) from exc

        if response.status_code != 200:
            self._raise_service_error(response)

        logger.info("Fetched %d characters from %s", len(response.text), url)
        return response.text
