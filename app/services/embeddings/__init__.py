"""Task embedding service module"""
from .embedding_service import TaskEmbeddingService, get_default_embedder

__all__ = [
    "TaskEmbeddingService",
    "get_default_embedder",
]
