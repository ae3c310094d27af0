"""Domain entities for indexed documents and nearest-neighbour results."""

from dataclasses import dataclass, field


@dataclass
class DocumentChunk:
    """A segment of a web page's text together with its embedding vector.

    Chunks are created during indexing and never updated afterwards; the
    store is append-only.
    """

    url: str
    content: str
    embedding: list[float] = field(default_factory=list)


@dataclass
class NearestDocument:
    """A stored chunk returned by a nearest-neighbour query."""

    url: str
    content: str
    distance: float  # cosine distance, 0.0 = same direction


@dataclass
class IndexingOutcome:
    """Result of indexing a single URL."""

    url: str
    status: str  # "indexed" | "already_indexed"
    chunks: int = 0
    num_tokens: int = 0

    @property
    def already_indexed(self) -> bool:
        return self.status == "already_indexed"
