"""Jina reranker adapter: calls the /rerank endpoint."""

import logging
from typing import Any

import httpx

from rag_tutorial.application.interfaces.reranker import Reranker
from rag_tutorial.domain.entities import RerankResult
from rag_tutorial.domain.exceptions import ExternalServiceError
from rag_tutorial.infrastructure.jina.jina_client import JinaServiceClient

logger = logging.getLogger(__name__)


class JinaReranker(JinaServiceClient, Reranker):
    """Infrastructure adapter for the Jina Reranker API."""

    service_name = "jina-reranker"

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://api.jina.ai/v1",
        model: str = "jina-reranker-v2-base-multilingual",
        top_n: int = 5,
        *,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, timeout=timeout, http_client=http_client)
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._top_n = top_n

    async def rerank(
        self,
        query: str,
        documents: list[str],
        *,
        top_n: int | None = None,
    ) -> list[RerankResult]:
        if not documents:
            return []

        limit = top_n or self._top_n
        payload: dict[str, Any] = {
            "model": self._model,
            "query": query,
            "top_n": limit,
            "documents": documents,
        }
        data = await self._post_json(f"{self._base_url}/rerank", payload)

        results = []
        for item in data.get("results", []):
            index = item.get("index")
            if not isinstance(index, int) or not 0 <= index < len(documents):
                raise ExternalServiceError(
                    service=self.service_name,
                    status_code=200,
                    message=f"Rerank result with out-of-range index {index!r}",
                )
            document = item.get("document") or {}
            text = document.get("text") if isinstance(document, dict) else None
            if text is None:
                text = documents[index]
            results.append(
                RerankResult(
                    index=index,
                    text=text or "",
                    relevance_score=float(item.get("relevance_score", 0.0)),
                )
            )

        results.sort(key=lambda r: r.relevance_score, reverse=True)
        results = results[: min(limit, len(documents))]
        logger.info("Reranked %d documents, kept %d", len(documents), len(results))
        return results
