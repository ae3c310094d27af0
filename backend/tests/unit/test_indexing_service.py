"""Unit tests for IndexingService using in-memory fakes."""

import dataclasses

import pytest

from rag_tutorial.application.interfaces.content_fetcher import ContentFetcher
from rag_tutorial.application.interfaces.document_store import DocumentStore
from rag_tutorial.application.interfaces.embedding_provider import EmbeddingProvider
from rag_tutorial.application.interfaces.segmenter import Segmenter
from rag_tutorial.application.services import IndexingService
from rag_tutorial.application.services.indexing_service import SAMPLE_TEXT
from rag_tutorial.domain.entities import DocumentChunk, NearestDocument, SegmentationResult
from rag_tutorial.domain.exceptions import EmbeddingDimensionError, ExternalServiceError


# ── Fakes ──


class FakeFetcher(ContentFetcher):
    def __init__(self, content: str = "page text"):
        self.content = content
        self.calls: list[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        return self.content


class FakeSegmenter(Segmenter):
    def __init__(self, chunks: list[str]):
        self.chunks = chunks
        self.received: list[str] = []

    async def segment(self, content: str, *, max_chunk_length: int | None = None) -> SegmentationResult:
        self.received.append(content)
        return SegmentationResult(
            num_tokens=len(content.split()),
            num_chunks=len(self.chunks),
            chunks=list(self.chunks),
        )


class FakeEmbeddingProvider(EmbeddingProvider):
    def __init__(self, dims: int = 768, returned_dims: int | None = None):
        self._dims = dims
        self._returned_dims = returned_dims or dims
        self.batches: list[list[str]] = []

    @property
    def dimensions(self) -> int:
        return self._dims

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        self.batches.append(texts)
        return [[float(i + 1)] * self._returned_dims for i in range(len(texts))]

    async def generate_query_embedding(self, query: str) -> list[float]:
        return [1.0] * self._returned_dims


class InMemoryStore(DocumentStore):
    def __init__(self):
        self.rows: list[DocumentChunk] = []

    async def ensure_schema(self) -> None:
        return None

    async def count_by_url(self, url: str) -> int:
        return sum(1 for row in self.rows if row.url == url)

    async def insert_many(self, url: str, rows: list[tuple[str, list[float]]]) -> int:
        self.rows.extend(DocumentChunk(url=url, content=c, embedding=e) for c, e in rows)
        return len(rows)

    async def nearest(self, query_embedding: list[float], limit: int) -> list[NearestDocument]:
        return []


class FailingFetcher(ContentFetcher):
    async def fetch(self, url: str) -> str:
        raise ExternalServiceError("jina-reader", 503, "unavailable")


_URL = "https://example.com/pgvector"


# ── Tests ──


@pytest.mark.asyncio
async def test_index_url_stores_one_row_per_chunk():
    store = InMemoryStore()
    service = IndexingService(FakeFetcher(), FakeSegmenter(["c1", "c2", "c3"]), FakeEmbeddingProvider())

    outcome = await service.index_url(_URL, store)

    assert outcome.status == "indexed"
    assert outcome.chunks == 3
    assert not outcome.already_indexed
    assert [row.content for row in store.rows] == ["c1", "c2", "c3"]
    assert {row.url for row in store.rows} == {_URL}
    assert all(len(row.embedding) == 768 for row in store.rows)


@pytest.mark.asyncio
async def test_embeddings_stay_paired_with_their_chunks():
    store = InMemoryStore()
    service = IndexingService(FakeFetcher(), FakeSegmenter(["a", "b"]), FakeEmbeddingProvider())

    await service.index_url(_URL, store)

    assert store.rows[0].embedding[0] == 1.0
    assert store.rows[1].embedding[0] == 2.0


@pytest.mark.asyncio
async def test_reindexing_same_url_adds_nothing():
    store = InMemoryStore()
    fetcher = FakeFetcher()
    service = IndexingService(fetcher, FakeSegmenter(["c1", "c2"]), FakeEmbeddingProvider())

    await service.index_url(_URL, store)
    second = await service.index_url(_URL, store)

    assert second.already_indexed
    assert second.chunks == 0
    assert len(store.rows) == 2
    assert fetcher.calls == [_URL]


@pytest.mark.asyncio
async def test_passages_are_embedded_in_one_batch():
    embedder = FakeEmbeddingProvider()
    service = IndexingService(FakeFetcher(), FakeSegmenter(["x", "y", "z"]), embedder)

    await service.index_url(_URL, InMemoryStore())

    assert embedder.batches == [["x", "y", "z"]]


@pytest.mark.asyncio
async def test_page_without_chunks_stores_nothing():
    store = InMemoryStore()
    embedder = FakeEmbeddingProvider()
    service = IndexingService(FakeFetcher(""), FakeSegmenter([]), embedder)

    outcome = await service.index_url(_URL, store)

    assert outcome.status == "indexed"
    assert outcome.chunks == 0
    assert store.rows == []
    assert embedder.batches == []


@pytest.mark.asyncio
async def test_wrong_embedding_width_aborts_before_storing():
    store = InMemoryStore()
    service = IndexingService(
        FakeFetcher(), FakeSegmenter(["c1"]), FakeEmbeddingProvider(returned_dims=512)
    )

    with pytest.raises(EmbeddingDimensionError):
        await service.index_url(_URL, store)

    assert store.rows == []


@pytest.mark.asyncio
async def test_fetch_failure_propagates_and_stores_nothing():
    store = InMemoryStore()
    service = IndexingService(FailingFetcher(), FakeSegmenter(["c1"]), FakeEmbeddingProvider())

    with pytest.raises(ExternalServiceError):
        await service.index_url(_URL, store)

    assert store.rows == []


@pytest.mark.asyncio
async def test_segment_defaults_to_sample_text():
    segmenter = FakeSegmenter(["one", "two"])
    service = IndexingService(FakeFetcher(), segmenter, FakeEmbeddingProvider())

    result = await service.segment()
    await service.segment("custom text")

    assert segmenter.received == [SAMPLE_TEXT, "custom text"]
    assert result.chunks == ["one", "two"]


def test_document_chunk_carries_only_stored_columns():
    chunk = DocumentChunk(url=_URL, content="c1", embedding=[0.0] * 768)

    assert [f.name for f in dataclasses.fields(chunk)] == ["url", "content", "embedding"]
