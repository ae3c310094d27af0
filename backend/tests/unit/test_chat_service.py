"""Unit tests for ChatService and RagChatService."""

import asyncio
from collections.abc import AsyncIterator

import pytest

from rag_tutorial.application.interfaces.chat_provider import ChatProvider
from rag_tutorial.application.interfaces.document_store import DocumentStore
from rag_tutorial.application.interfaces.embedding_provider import EmbeddingProvider
from rag_tutorial.application.interfaces.reranker import Reranker
from rag_tutorial.application.services import ChatService, RagChatService, RetrievalService
from rag_tutorial.application.services.chat_service import build_rag_prompt
from rag_tutorial.domain.entities import ChatMode, NearestDocument, RerankResult
from rag_tutorial.domain.exceptions import DocumentStoreError, ExternalServiceError


# ── Fakes ──


class ScriptedProvider(ChatProvider):
    """Streams a fixed list of chunks, optionally failing afterwards."""

    def __init__(self, chunks: list[str], fail_after: bool = False):
        self.chunks = chunks
        self.fail_after = fail_after
        self.prompts: list[str] = []

    @property
    def provider_name(self) -> str:
        return "scripted"

    @property
    def model(self) -> str:
        return "test-model"

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        self.prompts.append(prompt)
        for chunk in self.chunks:
            yield chunk
        if self.fail_after:
            raise ExternalServiceError("scripted", 500, "stream broke")


class RendezvousProvider(ChatProvider):
    """Each stream waits until every expected stream has started."""

    def __init__(self, expected: int):
        self.expected = expected
        self.started = 0
        self.all_started = asyncio.Event()

    @property
    def provider_name(self) -> str:
        return "rendezvous"

    @property
    def model(self) -> str:
        return "test-model"

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        self.started += 1
        if self.started >= self.expected:
            self.all_started.set()
        await asyncio.wait_for(self.all_started.wait(), timeout=1.0)
        yield "rag" if prompt.startswith("Based on") else "direct"


class ConstantEmbeddingProvider(EmbeddingProvider):
    @property
    def dimensions(self) -> int:
        return 768

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        return [[0.1] * 768 for _ in texts]

    async def generate_query_embedding(self, query: str) -> list[float]:
        return [0.1] * 768


class FixedStore(DocumentStore):
    def __init__(self, contents: list[str], error: Exception | None = None):
        self.contents = contents
        self.error = error

    async def ensure_schema(self) -> None:
        return None

    async def count_by_url(self, url: str) -> int:
        return 0

    async def insert_many(self, url: str, rows: list[tuple[str, list[float]]]) -> int:
        return 0

    async def nearest(self, query_embedding: list[float], limit: int) -> list[NearestDocument]:
        if self.error is not None:
            raise self.error
        return [
            NearestDocument(url="https://example.com", content=c, distance=i * 0.1)
            for i, c in enumerate(self.contents)
        ][:limit]


class ReversingReranker(Reranker):
    async def rerank(self, query: str, documents: list[str], *, top_n: int | None = None) -> list[RerankResult]:
        ranked = [
            RerankResult(index=i, text=d, relevance_score=(i + 1) / len(documents))
            for i, d in enumerate(documents)
        ]
        ranked.sort(key=lambda r: r.relevance_score, reverse=True)
        return ranked[: top_n or 5]


def _rag_service(provider: ChatProvider) -> RagChatService:
    retrieval = RetrievalService(ConstantEmbeddingProvider(), ReversingReranker())
    return RagChatService(ChatService(provider), retrieval)


# ── ChatService ──


@pytest.mark.asyncio
async def test_collect_accumulates_chunks_in_order():
    service = ChatService(ScriptedProvider(["The ", "answer ", "is 42."]))

    answer = await service.collect("question")

    assert answer.mode == ChatMode.DIRECT
    assert answer.chunks == ["The ", "answer ", "is 42."]
    assert answer.content == "The answer is 42."
    assert answer.done is True
    assert answer.error is None


@pytest.mark.asyncio
async def test_collect_records_stream_failure_and_keeps_partial_text():
    service = ChatService(ScriptedProvider(["partial"], fail_after=True))

    answer = await service.collect("question")

    assert answer.content == "partial"
    assert answer.done is False
    assert "stream broke" in answer.error


@pytest.mark.asyncio
async def test_stream_passes_chunks_through_unchanged():
    service = ChatService(ScriptedProvider(["a", "b"]))

    assert [c async for c in service.stream("hi")] == ["a", "b"]
    assert service.model == "test-model"


# ── Prompt building ──


def test_rag_prompt_joins_passages_with_blank_lines():
    prompt = build_rag_prompt("What is HNSW?", ["first passage", "second passage"])

    assert prompt == (
        "Based on following context, answer the question: What is HNSW?"
        "\n\nContext: first passage\n\nsecond passage"
    )


def test_rag_prompt_caps_context_at_ten_passages():
    passages = [f"p{i}" for i in range(15)]

    prompt = build_rag_prompt("q", passages)

    assert "p9" in prompt
    assert "p10" not in prompt


# ── RagChatService ──


@pytest.mark.asyncio
async def test_retrieve_context_returns_reranked_texts():
    service = _rag_service(ScriptedProvider([]))

    context = await service.retrieve_context("q", FixedStore(["a", "b", "c"]))

    assert context == ["c", "b", "a"]


@pytest.mark.asyncio
async def test_stream_rag_sends_context_prompt():
    provider = ScriptedProvider(["ok"])
    service = _rag_service(provider)

    chunks = [c async for c in service.stream_rag("What?", FixedStore(["ctx"]))]

    assert chunks == ["ok"]
    assert provider.prompts == [build_rag_prompt("What?", ["ctx"])]


@pytest.mark.asyncio
async def test_ask_both_runs_answers_concurrently():
    service = _rag_service(RendezvousProvider(expected=2))

    direct, rag = await asyncio.wait_for(
        service.ask_both("question", FixedStore(["ctx"])), timeout=2.0
    )

    assert direct.mode == ChatMode.DIRECT
    assert rag.mode == ChatMode.RAG
    assert direct.content == "direct"
    assert rag.content == "rag"
    assert direct.done and rag.done


@pytest.mark.asyncio
async def test_ask_both_keeps_direct_answer_when_retrieval_fails():
    service = _rag_service(ScriptedProvider(["hello"]))
    store = FixedStore([], error=DocumentStoreError("relation \"documents\" does not exist"))

    direct, rag = await service.ask_both("question", store)

    assert direct.content == "hello"
    assert direct.done is True
    assert rag.error is not None
    assert "documents" in rag.error
    assert rag.content == ""


@pytest.mark.asyncio
async def test_answer_with_rag_records_context():
    service = _rag_service(ScriptedProvider(["answer"]))

    rag = await service.answer_with_rag("question", FixedStore(["x", "y"]))

    assert rag.context == ["y", "x"]
    assert rag.content == "answer"
