from .chat import ChatAnswer, ChatMode
from .connection import ConnectionDescriptor, ConnectionTestResult
from .document import DocumentChunk, IndexingOutcome, NearestDocument
from .rerank import RerankResult
from .segmentation import SegmentationResult

__all__ = [
    "ChatAnswer",
    "ChatMode",
    "ConnectionDescriptor",
    "ConnectionTestResult",
    "DocumentChunk",
    "IndexingOutcome",
    "NearestDocument",
    "RerankResult",
    "SegmentationResult",
]
