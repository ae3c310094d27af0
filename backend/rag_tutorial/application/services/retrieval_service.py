"""Retrieval service: vector search over stored chunks plus reranking."""

import logging

from rag_tutorial.application.interfaces.document_store import DocumentStore
from rag_tutorial.application.interfaces.embedding_provider import EmbeddingProvider
from rag_tutorial.application.interfaces.reranker import Reranker
from rag_tutorial.domain.entities import NearestDocument, RerankResult

logger = logging.getLogger(__name__)


class RetrievalService:
    """Application service for the querying and reranking steps."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        reranker: Reranker,
        *,
        query_limit: int = 50,
        top_n: int = 5,
    ):
        self._embedding_provider = embedding_provider
        self._reranker = reranker
        self._query_limit = query_limit
        self._top_n = top_n

    async def query_documents(
        self,
        query: str,
        store: DocumentStore,
        *,
        limit: int | None = None,
    ) -> list[NearestDocument]:
        """Embed ``query`` and return the nearest stored chunks, closest first."""
        embedding = await self._embedding_provider.generate_query_embedding(query)
        results = await store.nearest(embedding, limit or self._query_limit)
        logger.info("Query %r matched %d chunks", query, len(results))
        return results

    async def rerank(
        self,
        query: str,
        documents: list[str],
        *,
        top_n: int | None = None,
    ) -> list[RerankResult]:
        """Reorder candidate texts by relevance to ``query``, best first."""
        return await self._reranker.rerank(query, documents, top_n=top_n or self._top_n)
