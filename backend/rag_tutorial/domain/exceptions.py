"""Domain-specific exceptions: framework-independent."""


class ExternalServiceError(Exception):
    """Raised when a third-party service (reader, segmenter, LLM, ...) fails.

    Covers both non-2xx responses and transport failures; transport failures
    carry ``status_code=0``.
    """

    def __init__(self, service: str, status_code: int, message: str):
        self.service = service
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{service}] {status_code}: {message}")


class InvalidConnectionError(ValueError):
    """Raised when a connection descriptor cannot be decoded or is missing."""


class DocumentStoreError(Exception):
    """Raised when the document store cannot complete an operation."""


class EmbeddingDimensionError(ValueError):
    """Raised when an embedding does not have the expected dimensionality."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected embedding of {expected} dimensions, got {actual}")
