"""Abstract interface (port) for relevance reranking."""

from abc import ABC, abstractmethod

from rag_tutorial.domain.entities import RerankResult


class Reranker(ABC):
    """Port for reordering candidate documents by relevance to a query."""

    @abstractmethod
    async def rerank(
        self,
        query: str,
        documents: list[str],
        *,
        top_n: int | None = None,
    ) -> list[RerankResult]:
        """Score ``documents`` against ``query``.

        Returns:
            At most ``top_n`` results ordered by descending relevance score.
        """
        ...
