"""Jina AI infrastructure package."""

from .embedding_provider import JinaEmbeddingProvider
from .reader import JinaReader
from .reranker import JinaReranker
from .segmenter import JinaSegmenter

__all__ = ["JinaEmbeddingProvider", "JinaReader", "JinaReranker", "JinaSegmenter"]
