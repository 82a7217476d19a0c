"""Semantic search over a user's tasks"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client  # type: ignore

from app import config
from app.models.task import TaskSearchResult
from app.services.embeddings import TaskEmbeddingService

logger = logging.getLogger(__name__)

MATCH_TASKS_RPC = "match_tasks"


def rank_results(rows: List[Dict[str, Any]]) -> List[TaskSearchResult]:
    """Convert RPC rows to results with similarity clamped to [0, 1], best match first"""
    results = []
    for row in rows:
        similarity = float(row.get("similarity") or 0.0)
        data = {**row, "similarity": min(1.0, max(0.0, similarity))}
        data.pop("embedding", None)
        results.append(TaskSearchResult(**data))

    results.sort(key=lambda r: r.similarity, reverse=True)
    return results


class SmartSearchService:
    """Embeds a free-text query and ranks the user's tasks by similarity"""

    def __init__(
        self,
        client: Client,
        embedding_service: TaskEmbeddingService,
        match_threshold: Optional[float] = None,
        match_count: Optional[int] = None,
    ):
        self.client = client
        self.embedding_service = embedding_service
        self.match_threshold = config.SEARCH_MATCH_THRESHOLD if match_threshold is None else match_threshold
        self.match_count = config.SEARCH_MATCH_COUNT if match_count is None else match_count

    async def search(self, user_id: str, query: str) -> List[TaskSearchResult]:
        """
        Rank the user's tasks against a query.

        Args:
            user_id: Owner whose tasks are searched
            query: Free text; blank queries return no results without calling the model

        Returns:
            Matching tasks sorted by descending similarity
        """
        query = query.strip()
        if not query:
            return []

        query_embedding = await self.embedding_service.embed_text(query)

        response = self.client.rpc(
            MATCH_TASKS_RPC,
            {
                "query_embedding": query_embedding,
                "match_threshold": self.match_threshold,
                "match_count": self.match_count,
                "p_user_id": user_id,
            }
        ).execute()

        results = rank_results(response.data or [])
        logger.info(f"Smart search for user {user_id} returned {len(results)} tasks")
        return results
