from .chat import AskRequest, AskResponse, ChatAnswerSchema, ChatPromptRequest
from .common import ProcedureResult
from .connection import DatabaseRequest, SchemaSqlResponse, ConnectionTestRequest
from .indexing import (
    IndexingOutcomeSchema,
    IndexUrlRequest,
    SegmentationSchema,
    SegmentRequest,
)
from .query import (
    NearestDocumentSchema,
    QueryDocumentsRequest,
    RerankDocumentSchema,
    RerankRequest,
    RerankResultSchema,
)

__all__ = [
    "AskRequest",
    "AskResponse",
    "ChatAnswerSchema",
    "ChatPromptRequest",
    "ProcedureResult",
    "DatabaseRequest",
    "SchemaSqlResponse",
    "ConnectionTestRequest",
    "IndexingOutcomeSchema",
    "IndexUrlRequest",
    "SegmentationSchema",
    "SegmentRequest",
    "NearestDocumentSchema",
    "QueryDocumentsRequest",
    "RerankDocumentSchema",
    "RerankRequest",
    "RerankResultSchema",
]
