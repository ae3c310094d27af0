from .document_models import EMBEDDING_DIMENSIONS, DocumentModel

__all__ = ["EMBEDDING_DIMENSIONS", "DocumentModel"]
