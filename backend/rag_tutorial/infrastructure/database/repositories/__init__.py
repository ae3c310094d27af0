from .document_repository import (
    PgConnectionProbe,
    PgDocumentRepository,
    ef_search_statement,
    render_schema_sql,
)

__all__ = [
    "ef_search_statement",
    "PgConnectionProbe",
    "PgDocumentRepository",
    "render_schema_sql",
]
