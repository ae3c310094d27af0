"""Indexing service: orchestrates fetching, segmentation, embedding and storage.

Coordinates:
1. Skipping URLs that already have stored chunks
2. Fetching the page text via the ContentFetcher
3. Splitting it via the Segmenter
4. Embedding every chunk via the EmbeddingProvider
5. Storing all chunks in one transaction via the DocumentStore
"""

import time

from rag_tutorial.application.interfaces.content_fetcher import ContentFetcher
from rag_tutorial.application.interfaces.document_store import DocumentStore
from rag_tutorial.application.interfaces.embedding_provider import EmbeddingProvider
from rag_tutorial.application.interfaces.segmenter import Segmenter
from rag_tutorial.domain.entities import IndexingOutcome, SegmentationResult
from rag_tutorial.domain.exceptions import EmbeddingDimensionError
from rag_tutorial.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

SAMPLE_TEXT = (
    "PostgreSQL with the pgvector extension can store embeddings next to the "
    "rows they describe. A column declared as VECTOR(768) holds one "
    "768-dimensional vector per row, and operators such as <=> compute the "
    "cosine distance between two vectors directly in SQL.\n\n"
    "Because the vectors live in the same database as the source text, a "
    "single query can both find the most similar chunks and return their "
    "content. An HNSW index keeps these nearest-neighbour searches fast as "
    "the table grows, trading a little recall for much lower latency.\n\n"
    "Retrieval-augmented generation builds on this: the question is embedded "
    "with the same model as the documents, the closest chunks are retrieved, "
    "and they are handed to a language model as context for its answer."
)

plog = PipelineLogger("IndexingService")


class IndexingService:
    """Application service for turning web pages into searchable chunks."""

    def __init__(
        self,
        content_fetcher: ContentFetcher,
        segmenter: Segmenter,
        embedding_provider: EmbeddingProvider,
    ):
        self._fetcher = content_fetcher
        self._segmenter = segmenter
        self._embedding_provider = embedding_provider

    async def segment(self, content: str | None = None) -> SegmentationResult:
        """Segment ``content``, or the built-in sample paragraph when omitted."""
        text = content if content and content.strip() else SAMPLE_TEXT
        with plog.timed_step(PipelineStage.SEGMENT, "Segmenting text", characters=len(text)):
            return await self._segmenter.segment(text)

    async def index_url(self, url: str, store: DocumentStore) -> IndexingOutcome:
        """Index one URL unless it already has stored chunks.

        Returns:
            ``status="already_indexed"`` with ``chunks=0`` when skipped,
            otherwise ``status="indexed"`` with the number of stored chunks.
        """
        plog.step_start(PipelineStage.PIPELINE, f"Indexing {url}")
        start = time.monotonic()

        existing = await store.count_by_url(url)
        if existing > 0:
            plog.detail("Already indexed, skipping", existing_chunks=existing)
            return IndexingOutcome(url=url, status="already_indexed")

        with plog.timed_step(PipelineStage.FETCH, "Fetching page text"):
            content = await self._fetcher.fetch(url)
        plog.detail(f"{len(content)} characters fetched")

        with plog.timed_step(PipelineStage.SEGMENT, "Segmenting page"):
            segmentation = await self._segmenter.segment(content)
        chunks = segmentation.chunks
        plog.detail(
            f"{len(chunks)} chunks",
            num_tokens=segmentation.num_tokens,
            num_chunks=segmentation.num_chunks,
        )

        if not chunks:
            plog.step_complete(PipelineStage.COMPLETE, f"Nothing to index for {url}")
            return IndexingOutcome(url=url, status="indexed", num_tokens=segmentation.num_tokens)

        with plog.timed_step(PipelineStage.EMBED, f"Embedding {len(chunks)} chunks"):
            embeddings = await self._embedding_provider.generate_embeddings(chunks)

        if len(embeddings) != len(chunks):
            raise ValueError(
                f"Embedding count {len(embeddings)} does not match chunk count {len(chunks)}"
            )
        expected = self._embedding_provider.dimensions
        for vector in embeddings:
            if len(vector) != expected:
                raise EmbeddingDimensionError(expected, len(vector))

        with plog.timed_step(PipelineStage.STORE, f"Storing {len(chunks)} chunks"):
            stored = await store.insert_many(url, list(zip(chunks, embeddings, strict=True)))

        duration_ms = int((time.monotonic() - start) * 1000)
        plog.stats(url=url, chunks=stored, tokens=segmentation.num_tokens, duration_ms=duration_ms)
        plog.step_complete(PipelineStage.COMPLETE, f"Indexed {url}")
        return IndexingOutcome(
            url=url,
            status="indexed",
            chunks=stored,
            num_tokens=segmentation.num_tokens,
        )
