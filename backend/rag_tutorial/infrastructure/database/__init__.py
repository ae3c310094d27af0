from .base import Base
from .session import create_engine_for, open_engine
from .models import DocumentModel

__all__ = [
    "Base",
    "create_engine_for",
    "open_engine",
    "DocumentModel",
]
