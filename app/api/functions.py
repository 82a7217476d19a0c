"""Serverless-style endpoints called by the front end with the user's bearer token"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from app.api.deps import get_embedding_service, get_smart_search_service, get_subtask_generator
from app.middleware.auth import get_current_user_id
from app.services.embeddings import TaskEmbeddingService
from app.services.smart_search import SmartSearchService
from app.services.subtask_generator import SubtaskGeneratorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["functions"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Client-Info, Apikey",
}


def _json(content: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def _error(error: str, status_code: int, details: Optional[str] = None) -> JSONResponse:
    body: Dict[str, Any] = {"error": error}
    if details:
        body["details"] = details
    return _json(body, status_code=status_code)


async def _read_body(request: Request) -> Optional[Dict[str, Any]]:
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


@router.options("/{function_name}")
async def preflight(function_name: str):
    """CORS preflight"""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/generate-subtasks")
async def generate_subtasks(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    generator: SubtaskGeneratorService = Depends(get_subtask_generator),
):
    """POST {taskTitle} -> {subtasks: string[]}"""
    body = await _read_body(request)
    task_title = (body or {}).get("taskTitle")

    if not isinstance(task_title, str) or not task_title.strip():
        return _error("taskTitle is required", 400)

    try:
        subtasks = await generator.generate(task_title)
    except Exception as e:
        logger.error(f"Subtask generation failed for user {user_id}: {e}", exc_info=True)
        return _error("Failed to generate subtasks", 500, str(e))

    return _json({"subtasks": subtasks})


@router.post("/generate-task-embedding")
async def generate_task_embedding(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    embedding_service: TaskEmbeddingService = Depends(get_embedding_service),
):
    """POST {taskId, title} -> {success: true}"""
    body = await _read_body(request) or {}
    task_id = body.get("taskId")
    title = body.get("title")

    if not task_id or not isinstance(title, str) or not title.strip():
        return _error("taskId and title are required", 400)

    try:
        updated = await embedding_service.embed_task(str(task_id), title, user_id=user_id)
    except Exception as e:
        logger.error(f"Embedding generation failed for task {task_id}: {e}", exc_info=True)
        return _error("Internal server error", 500, str(e))

    if not updated:
        return _error("Failed to update task", 500, f"No task {task_id} for this user")

    return _json({"success": True})


@router.post("/smart-search")
async def smart_search(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    search_service: SmartSearchService = Depends(get_smart_search_service),
):
    """POST {query} -> {tasks: (Task & {similarity})[]}"""
    body = await _read_body(request)
    query = (body or {}).get("query")

    if not isinstance(query, str):
        return _error("query is required", 400)

    try:
        results = await search_service.search(user_id, query)
    except Exception as e:
        logger.error(f"Smart search failed for user {user_id}: {e}", exc_info=True)
        return _error("Search failed", 500, str(e))

    return _json({"tasks": [result.model_dump(mode="json") for result in results]})
