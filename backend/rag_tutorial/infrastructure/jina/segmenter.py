"""Jina Segmenter adapter: splits text into chunks via segment.jina.ai."""

import logging
from typing import Any

import httpx

from rag_tutorial.application.interfaces.segmenter import Segmenter
from rag_tutorial.domain.entities import SegmentationResult
from rag_tutorial.infrastructure.jina.jina_client import JinaServiceClient

logger = logging.getLogger(__name__)


class JinaSegmenter(JinaServiceClient, Segmenter):
    """Infrastructure adapter for the Jina Segmenter API."""

    service_name = "jina-segmenter"

    def __init__(
        self,
        api_key: str = "",
        url: str = "https://segment.jina.ai/",
        *,
        max_chunk_length: int = 1000,
        return_tokens: bool = False,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, timeout=timeout, http_client=http_client)
        self._url = url
        self._max_chunk_length = max_chunk_length
        self._return_tokens = return_tokens

    async def segment(
        self,
        content: str,
        *,
        max_chunk_length: int | None = None,
    ) -> SegmentationResult:
        payload: dict[str, Any] = {
            "content": content,
            "return_tokens": self._return_tokens,
            "return_chunks": True,
            "max_chunk_length": max_chunk_length or self._max_chunk_length,
        }
        data = await self._post_json(self._url, payload)

        chunks = [c for c in data.get("chunks", []) if isinstance(c, str)]
        result = SegmentationResult(
            num_tokens=int(data.get("num_tokens", 0)),
            num_chunks=int(data.get("num_chunks", len(chunks))),
            chunks=chunks,
            chunk_positions=[list(p) for p in data.get("chunk_positions", [])],
        )
        logger.info(
            "Segmented %d characters into %d chunks (%d tokens)",
            len(content),
            result.num_chunks,
            result.num_tokens,
        )
        return result
