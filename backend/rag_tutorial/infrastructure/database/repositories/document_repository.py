"""SQLAlchemy implementation of DocumentStore: pgvector-powered vector search."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import func, select, text
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlalchemy.schema import CreateIndex, CreateTable

from rag_tutorial.application.interfaces.document_store import ConnectionProbe, DocumentStore
from rag_tutorial.domain.entities import ConnectionDescriptor, NearestDocument
from rag_tutorial.domain.exceptions import DocumentStoreError
from rag_tutorial.infrastructure.database.base import Base
from rag_tutorial.infrastructure.database.models.document_models import DocumentModel
from rag_tutorial.infrastructure.database.session import open_engine

logger = logging.getLogger(__name__)

_CREATE_EXTENSION = "CREATE EXTENSION IF NOT EXISTS vector"

# pgvector defaults and upper bound for the HNSW candidate list
_HNSW_EF_SEARCH_DEFAULT = 40
_HNSW_EF_SEARCH_MAX = 1000


def ef_search_statement(limit: int) -> str:
    """Return the SET LOCAL that lets an HNSW scan yield ``limit`` rows.

    An index scan returns at most ``hnsw.ef_search`` rows, so the
    candidate list must be at least as large as the requested limit.
    """
    ef_search = min(max(int(limit), _HNSW_EF_SEARCH_DEFAULT), _HNSW_EF_SEARCH_MAX)
    return f"SET LOCAL hnsw.ef_search = {ef_search}"


def render_schema_sql() -> str:
    """Return the DDL for the documents table as PostgreSQL text."""
    dialect = postgresql.dialect()
    table = DocumentModel.__table__
    statements = [f"{_CREATE_EXTENSION};"]
    statements.append(str(CreateTable(table).compile(dialect=dialect)).strip() + ";")
    for index in sorted(table.indexes, key=lambda i: i.name or ""):
        statements.append(str(CreateIndex(index).compile(dialect=dialect)).strip() + ";")
    return "\n\n".join(statements)


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    """Re-raise driver and network failures as DocumentStoreError."""
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Document store %s failed: %s", operation, exc)
        raise DocumentStoreError(f"{operation} failed: {exc}") from exc


class PgDocumentRepository(DocumentStore):
    """Concrete document store backed by PostgreSQL + pgvector."""

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def ensure_schema(self) -> None:
        with _translate_errors("ensure_schema"):
            async with self._engine.begin() as conn:
                await conn.execute(text(_CREATE_EXTENSION))
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Documents table is ready")

    async def count_by_url(self, url: str) -> int:
        with _translate_errors("count_by_url"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(func.count())
                    .select_from(DocumentModel)
                    .where(DocumentModel.url == url)
                )
                return int(result.scalar_one())

    async def insert_many(
        self, url: str, rows: list[tuple[str, list[float]]]
    ) -> int:
        """Insert all rows inside one transaction; roll back on any failure."""
        if not rows:
            return 0

        models = [
            DocumentModel(url=url, content=content, embedding=embedding)
            for content, embedding in rows
        ]

        with _translate_errors("insert_many"):
            async with self._session_factory() as session:
                async with session.begin():
                    session.add_all(models)

        logger.info("Stored %d chunks for %s", len(models), url)
        return len(models)

    async def nearest(
        self, query_embedding: list[float], limit: int
    ) -> list[NearestDocument]:
        """Rank stored chunks by cosine distance (``<=>``), nearest first."""
        distance = DocumentModel.embedding.cosine_distance(query_embedding).label("distance")
        query = (
            select(DocumentModel.url, DocumentModel.content, distance)
            .order_by(distance.asc())
            .limit(limit)
        )

        with _translate_errors("nearest"):
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(text(ef_search_statement(limit)))
                    result = await session.execute(query)
                    rows = result.all()

        return [
            NearestDocument(url=row.url, content=row.content, distance=float(row.distance))
            for row in rows
        ]


class PgConnectionProbe(ConnectionProbe):
    """Checks connectivity with a one-off, unpooled connection."""

    async def server_version(self, descriptor: ConnectionDescriptor) -> str:
        async with open_engine(descriptor) as engine:
            async with engine.connect() as conn:
                result = await conn.execute(text("SELECT VERSION() AS version"))
                return str(result.scalar_one())
