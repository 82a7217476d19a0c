# tests/test_task_repository.py

from __future__ import annotations

import pytest

from app.models.task import TaskCreate, TaskPriority, TaskStatus
from app.models.subtask import SubtaskCreate


@pytest.mark.asyncio
async def test_insert_then_list_returns_server_assigned_fields(repos) -> None:
    await repos.tasks.create(
        TaskCreate(user_id="u1", title="Buy milk", priority=TaskPriority.LOW, status=TaskStatus.PENDING)
    )

    tasks = await repos.tasks.find_by_user("u1")

    assert len(tasks) == 1
    task = tasks[0]
    assert task.title == "Buy milk"
    assert task.priority == TaskPriority.LOW
    assert task.status == TaskStatus.PENDING
    assert task.id
    assert task.created_at is not None


@pytest.mark.asyncio
async def test_list_is_scoped_to_owner(repos) -> None:
    await repos.tasks.create(TaskCreate(user_id="alice", title="Alice's task"))
    await repos.tasks.create(TaskCreate(user_id="bob", title="Bob's task"))

    alice_tasks = await repos.tasks.find_by_user("alice")
    bob_tasks = await repos.tasks.find_by_user("bob")

    assert [t.title for t in alice_tasks] == ["Alice's task"]
    assert [t.title for t in bob_tasks] == ["Bob's task"]
    assert await repos.tasks.find_by_user("carol") == []


@pytest.mark.asyncio
async def test_list_orders_newest_first(repos) -> None:
    for title in ("first", "second", "third"):
        await repos.tasks.create(TaskCreate(user_id="u1", title=title))

    tasks = await repos.tasks.find_by_user("u1")

    assert [t.title for t in tasks] == ["third", "second", "first"]


@pytest.mark.asyncio
async def test_set_embedding_is_scoped_to_owner(db, repos) -> None:
    task = await repos.tasks.create(TaskCreate(user_id="u1", title="Plan trip"))

    assert await repos.tasks.set_embedding(task.id, [0.5, 0.5], user_id="intruder") is False
    assert "embedding" not in db.tables["tasks"][0]

    assert await repos.tasks.set_embedding(task.id, [0.1, 0.2], user_id="u1") is True
    assert db.tables["tasks"][0]["embedding"] == [0.1, 0.2]


@pytest.mark.asyncio
async def test_update_status_is_idempotent(repos) -> None:
    task = await repos.tasks.create(TaskCreate(user_id="u1", title="Write report"))

    first = await repos.tasks.update_status(task.id, "u1", TaskStatus.DONE)
    second = await repos.tasks.update_status(task.id, "u1", TaskStatus.DONE)

    assert first.status == TaskStatus.DONE
    assert second.status == TaskStatus.DONE
    assert second.updated_at is not None
    assert (await repos.tasks.find_by_user("u1"))[0].status == TaskStatus.DONE


@pytest.mark.asyncio
async def test_update_priority_of_foreign_task_is_rejected(repos) -> None:
    task = await repos.tasks.create(TaskCreate(user_id="alice", title="Private"))

    assert await repos.tasks.update_priority(task.id, "mallory", TaskPriority.HIGH) is None
    assert (await repos.tasks.find_by_user("alice"))[0].priority == TaskPriority.MEDIUM


@pytest.mark.asyncio
async def test_delete_removes_task_and_its_subtasks(repos) -> None:
    task = await repos.tasks.create(TaskCreate(user_id="u1", title="Move house"))
    await repos.subtasks.create(SubtaskCreate(task_id=task.id, user_id="u1", title="Pack boxes"))

    assert await repos.tasks.delete_for_user(task.id, "u1") is True

    assert await repos.tasks.find_by_user("u1") == []
    assert await repos.subtasks.find_by_task(task.id, "u1") == []


@pytest.mark.asyncio
async def test_delete_by_non_owner_does_nothing(repos) -> None:
    task = await repos.tasks.create(TaskCreate(user_id="alice", title="Keep me"))

    assert await repos.tasks.delete_for_user(task.id, "mallory") is False
    assert len(await repos.tasks.find_by_user("alice")) == 1


def test_blank_title_is_rejected_before_any_call(db) -> None:
    with pytest.raises(ValueError):
        TaskCreate(user_id="u1", title="   ")
    assert db.calls == []
