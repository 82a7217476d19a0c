# tests/test_ai_services.py

from __future__ import annotations

import pytest

from app.infra.supabase.repositories.tasks import TaskRepository
from app.models.task import TaskCreate
from app.services.embeddings import TaskEmbeddingService
from app.services.smart_search import SmartSearchService, rank_results
from app.services.subtask_generator import SubtaskGeneratorService, clean_suggestions

from .fakes import FakeChain, FakeEmbedder


def _row(task_id: str, similarity: float) -> dict:
    return {
        "id": task_id,
        "user_id": "u1",
        "title": f"task {task_id}",
        "priority": "medium",
        "status": "pending",
        "created_at": "2026-01-01T00:00:00+00:00",
        "similarity": similarity,
    }


def test_clean_suggestions_strips_dedupes_and_caps() -> None:
    raw = ["- Buy milk", "buy milk", "  ", "• Check fridge", "Pay", "Go home", "Extra"]

    assert clean_suggestions(raw, limit=3) == ["Buy milk", "Check fridge", "Pay"]


@pytest.mark.asyncio
async def test_generator_passes_title_and_limit_to_chain() -> None:
    chain = FakeChain(["Buy 2% milk", "Buy bread"])
    service = SubtaskGeneratorService(chain=chain, limit=4)

    suggestions = await service.generate("  Groceries ")

    assert suggestions == ["Buy 2% milk", "Buy bread"]
    assert chain.calls == [{"task_title": "Groceries", "max_subtasks": 4}]


@pytest.mark.asyncio
async def test_generator_rejects_blank_title() -> None:
    chain = FakeChain(["x"])
    with pytest.raises(ValueError):
        await SubtaskGeneratorService(chain=chain).generate("   ")
    assert chain.calls == []


@pytest.mark.asyncio
async def test_embed_task_stores_vector(db) -> None:
    repo = TaskRepository(db)
    task = await repo.create(TaskCreate(user_id="u1", title="Water plants"))
    embedder = FakeEmbedder(dimensions=3)

    updated = await TaskEmbeddingService(repo, embedder=embedder).embed_task(task.id, task.title, user_id="u1")

    assert updated is True
    assert embedder.calls == ["Water plants"]
    assert len(db.tables["tasks"][0]["embedding"]) == 3


@pytest.mark.asyncio
async def test_background_embedding_swallows_failures(db) -> None:
    repo = TaskRepository(db)
    service = TaskEmbeddingService(repo, embedder=FakeEmbedder(error=RuntimeError("model down")))

    await service.embed_task_in_background("missing", "Anything")


def test_rank_results_sorts_and_clamps() -> None:
    results = rank_results([_row("a", 0.42), _row("b", 1.3), _row("c", -0.2), _row("d", 0.9)])

    assert [r.id for r in results] == ["b", "d", "a", "c"]
    assert [r.similarity for r in results] == [1.0, 0.9, 0.42, 0.0]


@pytest.mark.asyncio
async def test_search_calls_match_tasks_rpc(db) -> None:
    db.rpc_handlers["match_tasks"] = lambda params: [_row("t1", 0.31), _row("t2", 0.87)]
    embedder = FakeEmbedder(dimensions=2)
    service = SmartSearchService(
        db, TaskEmbeddingService(TaskRepository(db), embedder=embedder), match_threshold=0.3, match_count=5
    )

    results = await service.search("u1", " groceries ")

    assert [r.id for r in results] == ["t2", "t1"]
    assert all(0.0 <= r.similarity <= 1.0 for r in results)
    name, params = db.rpc_calls[0]
    assert name == "match_tasks"
    assert params["p_user_id"] == "u1"
    assert params["match_threshold"] == 0.3
    assert params["match_count"] == 5
    assert embedder.calls == ["groceries"]


@pytest.mark.asyncio
async def test_blank_search_skips_model_and_rpc(db) -> None:
    embedder = FakeEmbedder()
    service = SmartSearchService(db, TaskEmbeddingService(TaskRepository(db), embedder=embedder))

    assert await service.search("u1", "   ") == []
    assert embedder.calls == []
    assert db.rpc_calls == []
