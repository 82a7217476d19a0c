from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List
import logging

from app.api.deps import get_repositories
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_current_user_id
from app.models.subtask import Subtask, SubtaskCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks/{task_id}/subtasks", tags=["subtasks"])


class SubtaskTitleRequest(BaseModel):
    title: str


class SubtaskResponse(BaseModel):
    subtask: Subtask


class SubtaskListResponse(BaseModel):
    subtasks: List[Subtask]
    count: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


async def _require_owned_task(repos: RepositoryFactory, task_id: str, user_id: str) -> None:
    if not await repos.tasks.find_owned(task_id, user_id):
        raise HTTPException(status_code=404, detail="Task not found")


@router.get("", response_model=SubtaskListResponse)
async def list_subtasks(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
):
    """List a task's subtasks, oldest first"""
    subtasks = await repos.subtasks.find_by_task(task_id, user_id)

    return {
        "subtasks": subtasks,
        "count": len(subtasks)
    }


@router.post("", response_model=SubtaskResponse)
async def create_subtask(
    task_id: str,
    request: SubtaskTitleRequest,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
):
    """Add a subtask, typed by hand or accepted from an AI suggestion"""
    if not request.title.strip():
        raise HTTPException(status_code=400, detail="Subtask title must not be empty")

    await _require_owned_task(repos, task_id, user_id)

    subtask = await repos.subtasks.create(SubtaskCreate(
        task_id=task_id,
        user_id=user_id,
        title=request.title,
    ))
    logger.info(f"Created subtask {subtask.id} under task {task_id}")

    return {"subtask": subtask}


@router.patch("/{subtask_id}", response_model=SubtaskResponse)
async def update_subtask(
    task_id: str,
    subtask_id: str,
    request: SubtaskTitleRequest,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
):
    """Rename a subtask"""
    title = request.title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="Subtask title must not be empty")

    subtask = await repos.subtasks.update_title(task_id, subtask_id, user_id, title)

    if not subtask:
        raise HTTPException(status_code=404, detail="Subtask not found")

    return {"subtask": subtask}


@router.delete("/{subtask_id}", response_model=DeleteResponse)
async def delete_subtask(
    task_id: str,
    subtask_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
):
    """Delete a subtask"""
    success = await repos.subtasks.delete_for_user(task_id, subtask_id, user_id)

    if not success:
        raise HTTPException(status_code=404, detail="Subtask not found")

    return {"success": True, "message": "Subtask deleted successfully"}
