"""Domain entity for reranking output."""

from dataclasses import dataclass


@dataclass
class RerankResult:
    """A candidate document scored for relevance to a query."""

    index: int  # position in the candidate list that was sent
    text: str
    relevance_score: float  # 0.0 – 1.0
