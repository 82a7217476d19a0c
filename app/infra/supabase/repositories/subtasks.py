"""Subtask repository"""
from datetime import datetime, timezone
from typing import Dict, List, Optional

from supabase import Client  # type: ignore

from app.models.subtask import Subtask, SubtaskCreate, SubtaskUpdate

from .base import BaseRepository


class SubtaskRepository(BaseRepository[Subtask, SubtaskCreate, SubtaskUpdate]):
    """Repository for subtask operations, scoped by parent task and owner"""

    def __init__(self, client: Client):
        super().__init__(client, "subtasks", Subtask)

    async def find_by_task(self, task_id: str, user_id: str) -> List[Subtask]:
        """Find the subtasks of a task, oldest first"""
        return await self.find_by_filters(
            {"task_id": task_id, "user_id": user_id},
            order_by="created_at",
        )

    async def find_by_tasks(self, task_ids: List[str], user_id: str) -> Dict[str, List[Subtask]]:
        """Fetch subtasks for many tasks in one query, grouped by task id

        Every requested task id is present in the result, possibly with an empty list.
        """
        grouped: Dict[str, List[Subtask]] = {task_id: [] for task_id in task_ids}
        if not task_ids:
            return grouped

        response = (
            self._client.table(self._table_name)
            .select(self._columns)
            .eq("user_id", user_id)
            .in_("task_id", task_ids)
            .order("created_at", desc=False)
            .execute()
        )

        for subtask in self._to_models(response.data):
            grouped.setdefault(subtask.task_id, []).append(subtask)

        return grouped

    async def update_title(self, task_id: str, subtask_id: str, user_id: str, title: str) -> Optional[Subtask]:
        """Rename a subtask of the given task; None when no such subtask exists under it"""
        update_data = SubtaskUpdate(title=title, updated_at=datetime.now(timezone.utc))
        return await self.update_owned(subtask_id, "user_id", user_id, update_data, scope={"task_id": task_id})

    async def delete_for_user(self, task_id: str, subtask_id: str, user_id: str) -> bool:
        """Delete a subtask of the given task"""
        return await self.delete_owned(subtask_id, "user_id", user_id, scope={"task_id": task_id})
