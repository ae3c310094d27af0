from .chat_service import ChatService, RagChatService
from .connection_service import ConnectionService
from .indexing_service import IndexingService
from .retrieval_service import RetrievalService

__all__ = [
    "ChatService",
    "ConnectionService",
    "IndexingService",
    "RagChatService",
    "RetrievalService",
]
