"""SQLAlchemy ORM model for indexed document chunks with pgvector embeddings."""

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    Integer,
    Text,
    func,
)

from pgvector.sqlalchemy import Vector

from rag_tutorial.infrastructure.database.base import Base

EMBEDDING_DIMENSIONS = 768


class DocumentModel(Base):
    """A segment of an indexed web page, with its vector embedding.

    Rows are only ever inserted. Several rows share a URL, one per segment.
    """

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(Text, nullable=False, index=True)
    content = Column(Text, nullable=False)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("idx_documents_embedding_hnsw", embedding, postgresql_using="hnsw",
              postgresql_ops={"embedding": "vector_cosine_ops"}),
    )
