"""Chat use cases: direct and retrieval-augmented answers from a streaming LLM.

Each answer is produced by draining the provider's stream into its own
ChatAnswer accumulator, so a direct and a RAG answer can run side by side
without sharing state.
"""

import asyncio
import logging
from collections.abc import AsyncIterator

from rag_tutorial.application.interfaces.chat_provider import ChatProvider
from rag_tutorial.application.interfaces.document_store import DocumentStore
from rag_tutorial.application.services.retrieval_service import RetrievalService
from rag_tutorial.domain.entities import ChatAnswer, ChatMode
from rag_tutorial.domain.exceptions import (
    DocumentStoreError,
    EmbeddingDimensionError,
    ExternalServiceError,
)
from rag_tutorial.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("RagChatService")

HELLO_PROMPT = "Hello, world!"
MAX_CONTEXT_PASSAGES = 10

_RAG_PROMPT_TEMPLATE = (
    "Based on following context, answer the question: {question}\n\nContext: {context}"
)

# Failures that end one answer without affecting a concurrently running one
_ANSWER_ERRORS = (ExternalServiceError, DocumentStoreError, EmbeddingDimensionError)


def build_rag_prompt(question: str, passages: list[str]) -> str:
    context = "\n\n".join(passages[:MAX_CONTEXT_PASSAGES])
    return _RAG_PROMPT_TEMPLATE.format(question=question, context=context)


class ChatService:
    """Streams completions from a ChatProvider and accumulates them."""

    def __init__(self, provider: ChatProvider):
        self._provider = provider

    @property
    def model(self) -> str:
        return self._provider.model

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        """Yield the provider's chunks unchanged."""
        count = 0
        async for chunk in self._provider.stream(prompt):
            count += 1
            yield chunk
        logger.debug("Streamed %d chunks from %s", count, self._provider.provider_name)

    async def collect(
        self,
        prompt: str,
        mode: ChatMode = ChatMode.DIRECT,
        answer: ChatAnswer | None = None,
    ) -> ChatAnswer:
        """Drain the stream for ``prompt`` into a ChatAnswer.

        Provider failures are recorded on the answer rather than raised;
        text received before the failure is kept.
        """
        answer = answer or ChatAnswer(mode=mode)
        try:
            async for chunk in self.stream(prompt):
                answer.append(chunk)
        except ExternalServiceError as exc:
            answer.error = str(exc)
            logger.warning("%s answer failed: %s", answer.mode.value, exc)
        else:
            answer.done = True
        return answer


class RagChatService:
    """Answers a question directly and with retrieved context."""

    def __init__(self, chat_service: ChatService, retrieval_service: RetrievalService):
        self._chat = chat_service
        self._retrieval = retrieval_service

    async def retrieve_context(self, question: str, store: DocumentStore) -> list[str]:
        """Vector search, then rerank, returning passages best first."""
        with plog.timed_step(PipelineStage.QUERY, "Searching stored chunks"):
            candidates = await self._retrieval.query_documents(question, store)
        plog.detail(f"{len(candidates)} candidates")

        with plog.timed_step(PipelineStage.RERANK, "Reranking candidates"):
            reranked = await self._retrieval.rerank(
                question, [c.content for c in candidates]
            )
        return [r.text for r in reranked][:MAX_CONTEXT_PASSAGES]

    async def stream_rag(self, question: str, store: DocumentStore) -> AsyncIterator[str]:
        """Retrieve context for ``question`` and stream the augmented answer."""
        passages = await self.retrieve_context(question, store)
        plog.step_start(PipelineStage.CHAT, "Generating answer with context", passages=len(passages))
        async for chunk in self._chat.stream(build_rag_prompt(question, passages)):
            yield chunk

    async def answer_direct(self, question: str) -> ChatAnswer:
        return await self._chat.collect(question, ChatMode.DIRECT)

    async def answer_with_rag(self, question: str, store: DocumentStore) -> ChatAnswer:
        answer = ChatAnswer(mode=ChatMode.RAG)
        try:
            answer.context = await self.retrieve_context(question, store)
        except _ANSWER_ERRORS as exc:
            answer.error = str(exc)
            plog.step_error(PipelineStage.QUERY, "Context retrieval failed", error=exc)
            return answer
        return await self._chat.collect(
            build_rag_prompt(question, answer.context), ChatMode.RAG, answer
        )

    async def ask_both(
        self, question: str, store: DocumentStore
    ) -> tuple[ChatAnswer, ChatAnswer]:
        """Run the direct and RAG answers concurrently.

        Returns:
            ``(direct, rag)``. Either may carry an ``error``; one failing
            does not cancel the other.
        """
        plog.step_start(PipelineStage.CHAT, "Asking directly and with RAG", model=self._chat.model)
        direct, rag = await asyncio.gather(
            self.answer_direct(question),
            self.answer_with_rag(question, store),
        )
        plog.step_complete(
            PipelineStage.CHAT,
            "Both answers finished",
            direct_chars=len(direct.content),
            rag_chars=len(rag.content),
        )
        return direct, rag
