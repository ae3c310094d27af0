from .chat_provider import ChatProvider
from .content_fetcher import ContentFetcher
from .document_store import ConnectionProbe, DocumentStore
from .embedding_provider import EmbeddingProvider
from .reranker import Reranker
from .segmenter import Segmenter

__all__ = [
    "ChatProvider",
    "ConnectionProbe",
    "ContentFetcher",
    "DocumentStore",
    "EmbeddingProvider",
    "Reranker",
    "Segmenter",
]
