"""Abstract repository interface (port) for indexed documents and vector search."""

from abc import ABC, abstractmethod

from rag_tutorial.domain.entities import ConnectionDescriptor, NearestDocument


class DocumentStore(ABC):
    """Port for document chunk persistence and nearest-neighbour search."""

    @abstractmethod
    async def ensure_schema(self) -> None:
        """Create the vector extension and documents table when missing."""
        ...

    @abstractmethod
    async def count_by_url(self, url: str) -> int:
        """Return how many chunks are stored for ``url``."""
        ...

    @abstractmethod
    async def insert_many(
        self, url: str, rows: list[tuple[str, list[float]]]
    ) -> int:
        """Store ``(content, embedding)`` rows for ``url`` in one transaction.

        Either every row is committed or none is.

        Returns:
            Number of rows inserted.
        """
        ...

    @abstractmethod
    async def nearest(
        self, query_embedding: list[float], limit: int
    ) -> list[NearestDocument]:
        """Find stored chunks closest to ``query_embedding`` by cosine distance.

        Returns:
            At most ``limit`` results ordered by ascending distance.
        """
        ...


class ConnectionProbe(ABC):
    """Port for checking that a database is reachable."""

    @abstractmethod
    async def server_version(self, descriptor: ConnectionDescriptor) -> str:
        """Open a connection, run a version query, and return the version string."""
        ...
