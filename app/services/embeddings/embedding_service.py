"""Task title embeddings with LangChain"""
import logging
from typing import Any, List, Optional

from langchain_openai import OpenAIEmbeddings

from app import config
from app.infra.supabase.repositories.tasks import TaskRepository

logger = logging.getLogger(__name__)

_default_embedder: Optional[Any] = None


def get_default_embedder():
    """OpenAI embeddings client, built on first use"""
    global _default_embedder

    if _default_embedder is None:
        _default_embedder = OpenAIEmbeddings(
            model=config.EMBEDDING_MODEL,
            dimensions=config.EMBEDDING_DIMENSIONS,
        )

    return _default_embedder


class TaskEmbeddingService:
    """Computes and stores the embedding of a task title"""

    def __init__(self, task_repo: TaskRepository, embedder: Optional[Any] = None):
        self.task_repo = task_repo
        self._embedder = embedder

    @property
    def embedder(self):
        if self._embedder is None:
            self._embedder = get_default_embedder()
        return self._embedder

    async def embed_text(self, text: str) -> List[float]:
        """Embedding vector for a piece of text"""
        return await self.embedder.aembed_query(text)

    async def embed_task(self, task_id: str, title: str, user_id: Optional[str] = None) -> bool:
        """
        Compute the embedding for a task title and write it to the task row.

        Args:
            task_id: Task to update
            title: Task title to embed
            user_id: When given, only a task owned by this user is updated

        Returns:
            True if the task row was updated, False if no matching row exists

        Raises:
            ValueError: If task_id or title is missing
        """
        if not task_id or not title or not title.strip():
            raise ValueError("taskId and title are required")

        embedding = await self.embed_text(title.strip())
        updated = await self.task_repo.set_embedding(task_id, embedding, user_id=user_id)

        if updated:
            logger.info(f"Stored {len(embedding)}-dim embedding for task {task_id}")
        else:
            logger.warning(f"No task row updated with embedding for task {task_id}")

        return updated

    async def embed_task_in_background(self, task_id: str, title: str, user_id: Optional[str] = None) -> None:
        """Best-effort variant for fire-and-forget use: failures are logged, never raised"""
        try:
            await self.embed_task(task_id, title, user_id=user_id)
        except Exception as e:
            logger.error(f"Embedding generation failed for task {task_id}: {e}", exc_info=True)
