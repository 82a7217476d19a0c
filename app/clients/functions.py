"""HTTP client for the serverless endpoints, used by the view layer"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from app import config
from app.errors import BackendCallError
from app.models.task import TaskSearchResult

logger = logging.getLogger(__name__)


class FunctionsClient:
    """
    Calls ``generate-subtasks``, ``generate-task-embedding`` and ``smart-search``
    with the signed-in user's bearer token.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or config.FUNCTIONS_BASE_URL).rstrip("/")
        self.timeout = config.FUNCTIONS_TIMEOUT_SECONDS if timeout is None else timeout
        self._transport = transport

    async def _post(self, function_name: str, access_token: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/{function_name}"
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Request to {function_name} failed: {e}")
            raise BackendCallError(f"Could not reach {function_name}")

        if response.status_code >= 400:
            try:
                body = response.json()
                detail = body.get("error") or body.get("detail")
            except ValueError:
                detail = None
            logger.error(f"{function_name} returned {response.status_code}: {response.text[:200]}")
            raise BackendCallError(
                detail if isinstance(detail, str) and detail else f"{function_name} failed",
                status_code=response.status_code,
            )

        return response.json()

    async def generate_subtasks(self, access_token: str, task_title: str) -> List[str]:
        """Suggested subtask titles for a task title"""
        data = await self._post("generate-subtasks", access_token, {"taskTitle": task_title})
        return [s for s in data.get("subtasks") or [] if isinstance(s, str)]

    async def generate_task_embedding(self, access_token: str, task_id: str, title: str) -> bool:
        """Ask the backend to compute and store a task's embedding"""
        data = await self._post(
            "generate-task-embedding", access_token, {"taskId": task_id, "title": title}
        )
        return bool(data.get("success"))

    async def smart_search(self, access_token: str, query: str) -> List[TaskSearchResult]:
        """Tasks ranked by similarity to the query, best first"""
        data = await self._post("smart-search", access_token, {"query": query})
        results = [TaskSearchResult(**item) for item in data.get("tasks") or []]
        results.sort(key=lambda r: r.similarity, reverse=True)
        return results
