"""Pydantic schemas for vector queries and reranking."""

from pydantic import BaseModel, Field


class QueryDocumentsRequest(BaseModel):
    """Request body for a nearest-neighbour query."""

    query: str = Field(..., min_length=1, description="Question to search for")
    db: str | None = Field(default=None, description="Base64-obfuscated connection string")
    limit: int | None = Field(default=None, ge=1, le=200, description="Maximum number of rows")


class NearestDocumentSchema(BaseModel):
    """A stored chunk and its cosine distance to the query."""

    url: str
    content: str
    distance: float


class RerankRequest(BaseModel):
    """Request body for reranking candidate texts."""

    query: str = Field(..., min_length=1)
    documents: list[str] = Field(default_factory=list)
    top_n: int | None = Field(default=None, ge=1, le=50)


class RerankDocumentSchema(BaseModel):
    text: str


class RerankResultSchema(BaseModel):
    """A reranked candidate, shaped like the reranking API's results."""

    index: int
    document: RerankDocumentSchema
    relevance_score: float
