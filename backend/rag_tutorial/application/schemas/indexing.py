"""Pydantic schemas for segmentation and indexing."""

from pydantic import BaseModel, Field


class SegmentRequest(BaseModel):
    """Request body for the segmenter demo."""

    content: str | None = Field(
        default=None, description="Text to segment; a built-in sample is used when omitted"
    )


class SegmentationSchema(BaseModel):
    """Chunks and counters returned by the segmenter."""

    num_tokens: int
    num_chunks: int
    chunk_positions: list[list[int]] = []
    chunks: list[str] = []


class IndexUrlRequest(BaseModel):
    """Request body for indexing a web page."""

    url: str = Field(..., min_length=1, pattern=r"^https?://", description="Page to index")
    db: str | None = Field(default=None, description="Base64-obfuscated connection string")


class IndexingOutcomeSchema(BaseModel):
    """Outcome of one indexing call."""

    url: str
    status: str  # "indexed" | "already_indexed"
    chunks: int = 0
    num_tokens: int = 0
    message: str = ""
