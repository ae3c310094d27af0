"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from rag_tutorial.config import get_settings
from rag_tutorial.application.interfaces.document_store import DocumentStore
from rag_tutorial.application.services import (
    ChatService,
    ConnectionService,
    IndexingService,
    RagChatService,
    RetrievalService,
)
from rag_tutorial.domain.entities import ConnectionDescriptor
from rag_tutorial.domain.exceptions import InvalidConnectionError
from rag_tutorial.infrastructure.database.repositories import (
    PgConnectionProbe,
    PgDocumentRepository,
)
from rag_tutorial.infrastructure.database.session import open_engine
from rag_tutorial.infrastructure.jina import (
    JinaEmbeddingProvider,
    JinaReader,
    JinaReranker,
    JinaSegmenter,
)
from rag_tutorial.infrastructure.ollama import OllamaClient

DocumentStoreFactory = Callable[[str | None], AbstractAsyncContextManager[DocumentStore]]


def resolve_descriptor(encoded: str | None) -> ConnectionDescriptor:
    """Decode the request's descriptor, falling back to the configured DATABASE_URL."""
    if encoded and encoded.strip():
        return ConnectionDescriptor.from_encoded(encoded)

    settings = get_settings()
    if settings.database_url.strip():
        return ConnectionDescriptor(url=settings.database_url.strip())
    raise InvalidConnectionError(
        "No database connection string provided and DATABASE_URL is not configured"
    )


@asynccontextmanager
async def open_document_store(encoded: str | None) -> AsyncIterator[DocumentStore]:
    """Yield a PgDocumentRepository bound to a one-off engine for this request."""
    descriptor = resolve_descriptor(encoded)
    async with open_engine(descriptor) as engine:
        yield PgDocumentRepository(engine)


def get_document_store_factory() -> DocumentStoreFactory:
    """Provides the per-request document store opener."""
    return open_document_store


def _embedding_provider() -> JinaEmbeddingProvider:
    settings = get_settings()
    return JinaEmbeddingProvider(
        api_key=settings.jina_api_key,
        base_url=settings.jina_api_base_url,
        model=settings.embedding_model,
        model_dimensions=settings.embedding_dimensions,
        timeout=settings.http_timeout,
    )


def get_connection_service() -> ConnectionService:
    """Provides a ConnectionService backed by the PostgreSQL probe."""
    return ConnectionService(PgConnectionProbe())


def get_indexing_service() -> IndexingService:
    """Provides an IndexingService wired to the Jina reader, segmenter and embeddings."""
    settings = get_settings()
    return IndexingService(
        content_fetcher=JinaReader(
            api_key=settings.jina_api_key,
            base_url=settings.jina_reader_base_url,
            timeout=settings.http_timeout,
        ),
        segmenter=JinaSegmenter(
            api_key=settings.jina_api_key,
            url=settings.jina_segmenter_url,
            max_chunk_length=settings.segmenter_max_chunk_length,
            return_tokens=settings.segmenter_return_tokens,
            timeout=settings.http_timeout,
        ),
        embedding_provider=_embedding_provider(),
    )


def get_retrieval_service() -> RetrievalService:
    """Provides a RetrievalService with Jina embeddings and reranker."""
    settings = get_settings()
    reranker = JinaReranker(
        api_key=settings.jina_api_key,
        base_url=settings.jina_api_base_url,
        model=settings.reranker_model,
        top_n=settings.reranker_top_n,
        timeout=settings.http_timeout,
    )
    return RetrievalService(
        embedding_provider=_embedding_provider(),
        reranker=reranker,
        query_limit=settings.query_limit,
        top_n=settings.reranker_top_n,
    )


def get_chat_service() -> ChatService:
    """Provides a ChatService streaming from the local Ollama runtime."""
    settings = get_settings()
    return ChatService(
        OllamaClient(
            base_url=settings.ollama_base_url,
            model=settings.ollama_model,
            timeout=settings.http_timeout,
        )
    )


def get_rag_chat_service() -> RagChatService:
    """Provides a RagChatService combining retrieval and chat."""
    return RagChatService(
        chat_service=get_chat_service(),
        retrieval_service=get_retrieval_service(),
    )
