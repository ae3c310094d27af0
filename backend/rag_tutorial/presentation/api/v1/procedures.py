"""Helpers shared by the procedure-style endpoints."""

import json
from typing import Any

from rag_tutorial.domain.exceptions import (
    DocumentStoreError,
    ExternalServiceError,
)

# Failures reported to the caller as {success: false, error: ...}.
# ValueError covers InvalidConnectionError and EmbeddingDimensionError.
PROCEDURE_ERRORS = (ExternalServiceError, DocumentStoreError, ValueError)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def sse_event(payload: dict[str, Any] | str) -> str:
    """Format one Server-Sent Event data line."""
    data = payload if isinstance(payload, str) else json.dumps(payload)
    return f"data: {data}\n\n"
