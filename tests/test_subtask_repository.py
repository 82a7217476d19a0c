# tests/test_subtask_repository.py

from __future__ import annotations

import pytest

from app.models.subtask import SubtaskCreate
from app.models.task import TaskCreate


@pytest.mark.asyncio
async def test_subtasks_are_listed_oldest_first(repos) -> None:
    task = await repos.tasks.create(TaskCreate(user_id="u1", title="Bake bread"))
    for title in ("Buy flour", "Knead dough", "Bake"):
        await repos.subtasks.create(SubtaskCreate(task_id=task.id, user_id="u1", title=title))

    subtasks = await repos.subtasks.find_by_task(task.id, "u1")

    assert [s.title for s in subtasks] == ["Buy flour", "Knead dough", "Bake"]


@pytest.mark.asyncio
async def test_find_by_tasks_groups_per_task(repos) -> None:
    a = await repos.tasks.create(TaskCreate(user_id="u1", title="A"))
    b = await repos.tasks.create(TaskCreate(user_id="u1", title="B"))
    await repos.subtasks.create(SubtaskCreate(task_id=a.id, user_id="u1", title="a1"))
    await repos.subtasks.create(SubtaskCreate(task_id=a.id, user_id="u1", title="a2"))
    await repos.subtasks.create(SubtaskCreate(task_id=b.id, user_id="other", title="not mine"))

    grouped = await repos.subtasks.find_by_tasks([a.id, b.id], "u1")

    assert [s.title for s in grouped[a.id]] == ["a1", "a2"]
    assert grouped[b.id] == []


@pytest.mark.asyncio
async def test_find_by_tasks_with_no_ids_makes_no_call(db, repos) -> None:
    assert await repos.subtasks.find_by_tasks([], "u1") == {}
    assert db.calls == []


@pytest.mark.asyncio
async def test_update_title_and_delete(repos) -> None:
    task = await repos.tasks.create(TaskCreate(user_id="u1", title="Trip"))
    subtask = await repos.subtasks.create(SubtaskCreate(task_id=task.id, user_id="u1", title="Book hotl"))

    renamed = await repos.subtasks.update_title(task.id, subtask.id, "u1", "Book hotel")
    assert renamed.title == "Book hotel"
    assert renamed.updated_at is not None

    assert await repos.subtasks.delete_for_user(task.id, subtask.id, "someone-else") is False
    assert await repos.subtasks.delete_for_user(task.id, subtask.id, "u1") is True
    assert await repos.subtasks.find_by_task(task.id, "u1") == []


@pytest.mark.asyncio
async def test_update_and_delete_under_wrong_task_change_nothing(db, repos) -> None:
    a = await repos.tasks.create(TaskCreate(user_id="u1", title="A"))
    b = await repos.tasks.create(TaskCreate(user_id="u1", title="B"))
    subtask = await repos.subtasks.create(SubtaskCreate(task_id=b.id, user_id="u1", title="orig"))

    assert await repos.subtasks.update_title(a.id, subtask.id, "u1", "renamed") is None
    assert await repos.subtasks.delete_for_user(a.id, subtask.id, "u1") is False

    assert [s.title for s in await repos.subtasks.find_by_task(b.id, "u1")] == ["orig"]
    assert db.tables["subtasks"][0]["updated_at"] is None
