"""Jina embeddings adapter: calls the /embeddings endpoint.

Passage and query embeddings use different task tags. Passage batches are
sent with late chunking so each chunk's vector sees the surrounding text.
"""

import logging
from typing import Any

import httpx

from rag_tutorial.application.interfaces.embedding_provider import EmbeddingProvider
from rag_tutorial.domain.exceptions import EmbeddingDimensionError, ExternalServiceError
from rag_tutorial.infrastructure.jina.jina_client import JinaServiceClient

logger = logging.getLogger(__name__)

_PASSAGE_TASK = "retrieval.passage"
_QUERY_TASK = "retrieval.query"


class JinaEmbeddingProvider(JinaServiceClient, EmbeddingProvider):
    """Infrastructure adapter: generates embeddings via the Jina embeddings API."""

    service_name = "jina-embeddings"

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://api.jina.ai/v1",
        model: str = "jina-embeddings-v3",
        model_dimensions: int = 768,
        *,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, timeout=timeout, http_client=http_client)
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._dimensions = model_dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of passages, returned in input order."""
        if not texts:
            return []
        return await self._embed(texts, task=_PASSAGE_TASK, late_chunking=True)

    async def generate_query_embedding(self, query: str) -> list[float]:
        """Generate a single embedding for a search query."""
        results = await self._embed([query], task=_QUERY_TASK, late_chunking=False)
        return results[0]

    async def _embed(
        self, texts: list[str], *, task: str, late_chunking: bool
    ) -> list[list[float]]:
        payload: dict[str, Any] = {
            "model": self._model,
            "task": task,
            "dimensions": self._dimensions,
            "embedding_type": "float",
            "input": texts,
        }
        if late_chunking:
            payload["late_chunking"] = True

        data = await self._post_json(f"{self._base_url}/embeddings", payload)

        # The response order is not guaranteed; place each vector by its index
        ordered: list[list[float] | None] = [None] * len(texts)
        for item in data.get("data", []):
            index = item.get("index")
            if not isinstance(index, int) or not 0 <= index < len(texts):
                raise ExternalServiceError(
                    service=self.service_name,
                    status_code=200,
                    message=f"Embedding with out-of-range index {index!r}",
                )
            embedding = item.get("embedding") or []
            if len(embedding) != self._dimensions:
                raise EmbeddingDimensionError(self._dimensions, len(embedding))
            ordered[index] = [float(v) for v in embedding]

        missing = [i for i, vector in enumerate(ordered) if vector is None]
        if missing:
            raise ExternalServiceError(
                service=self.service_name,
                status_code=200,
                message=f"No embedding returned for input(s) {missing}",
            )

        logger.info(
            "Generated %d embeddings (model=%s, task=%s, dims=%d)",
            len(ordered),
            self._model,
            task,
            self._dimensions,
        )
        return ordered  # type: ignore[return-value]
