"""Dashboard view-model: tasks, subtasks, AI suggestions and smart search"""
import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set

from app.errors import AppError, InvalidInputError
from app.models.subtask import Subtask, SubtaskCreate
from app.models.task import Task, TaskCreate, TaskPriority, TaskSearchResult, TaskStatus
from app.views.auth_view import end_session
from app.views.context import ViewContext
from app.views.navigation import Navigator, Page

logger = logging.getLogger(__name__)


class GenerationState(str, Enum):
    """AI suggestion lifecycle of one task"""
    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"
    ERROR = "error"


@dataclass
class TaskRecord:
    """Everything the dashboard holds about one task"""
    task: Task
    subtasks: List[Subtask] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    generation: GenerationState = GenerationState.IDLE
    generation_error: Optional[str] = None
    subtask_error: Optional[str] = None
    collapsed: bool = False

    @property
    def can_generate(self) -> bool:
        # Suggestions are only offered for tasks that have no subtasks yet
        return not self.subtasks and self.generation != GenerationState.GENERATING


@dataclass
class TaskForm:
    title: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    submitting: bool = False
    error: Optional[str] = None


@dataclass
class SearchState:
    query: str = ""
    results: List[TaskSearchResult] = field(default_factory=list)
    searching: bool = False
    error: Optional[str] = None


@dataclass
class DashboardState:
    records: Dict[str, TaskRecord] = field(default_factory=dict)  # newest task first
    profile_name: str = ""
    loading: bool = False
    error: Optional[str] = None
    form: TaskForm = field(default_factory=TaskForm)
    search: SearchState = field(default_factory=SearchState)
    status_filter: Optional[TaskStatus] = None
    priority_filter: Optional[TaskPriority] = None

    @property
    def tasks(self) -> List[Task]:
        return [record.task for record in self.records.values()]

    @property
    def visible_records(self) -> List[TaskRecord]:
        return [
            record for record in self.records.values()
            if (self.status_filter is None or record.task.status == self.status_filter)
            and (self.priority_filter is None or record.task.priority == self.priority_filter)
        ]

    @property
    def greeting(self) -> str:
        name = self.profile_name.strip()
        return f"Welcome back, {name}!" if name else "Welcome back!"


class DashboardViewModel:
    """Backs the dashboard screen"""

    def __init__(self, ctx: ViewContext, navigator: Navigator):
        self.ctx = ctx
        self.navigator = navigator
        self.state = DashboardState()
        self._background: Set[asyncio.Task] = set()

    def reset(self) -> None:
        self.state = DashboardState()

    def record(self, task_id: str) -> Optional[TaskRecord]:
        return self.state.records.get(task_id)

    # Loading

    async def mount(self) -> None:
        """Load tasks and profile together, then the subtasks of the loaded tasks"""
        self.state.loading = True
        try:
            await asyncio.gather(self._fetch_tasks(), self.load_profile())
            if self.state.records:
                await self.load_subtasks()
        finally:
            self.state.loading = False

    async def load_tasks(self) -> None:
        """Refetch the task list and the subtasks of every listed task"""
        await self._fetch_tasks()
        if self.state.records:
            await self.load_subtasks()

    async def _fetch_tasks(self) -> None:
        try:
            user_id = await self.ctx.auth.require_user_id("Please log in to view your tasks")
            tasks = await self.ctx.repos.tasks.find_by_user(user_id)
        except AppError as e:
            self.state.error = e.message
            return
        except Exception as e:
            logger.error(f"Error fetching tasks: {e}", exc_info=True)
            self.state.error = "Failed to load tasks"
            return

        # Keep per-task view state for tasks that still exist; deleted tasks drop out entirely
        previous = self.state.records
        records: Dict[str, TaskRecord] = {}
        for task in tasks:
            record = previous.get(task.id)
            if record:
                record.task = task
            else:
                record = TaskRecord(task=task)
            records[task.id] = record

        self.state.records = records
        self.state.error = None

    async def load_profile(self) -> None:
        try:
            user_id = await self.ctx.auth.require_user_id("Please log in to view your tasks")
            profile = await self.ctx.profiles.get_profile(user_id)
        except AppError as e:
            self.state.error = e.message
            return
        except Exception as e:
            logger.error(f"Error fetching profile: {e}", exc_info=True)
            return

        self.state.profile_name = (profile.name or "") if profile else ""

    async def load_subtasks(self) -> None:
        """Fetch subtasks for every listed task in one query"""
        task_ids = list(self.state.records)
        try:
            user_id = await self.ctx.auth.require_user_id("Please log in to view your tasks")
            grouped = await self.ctx.repos.subtasks.find_by_tasks(task_ids, user_id)
        except AppError as e:
            self.state.error = e.message
            return
        except Exception as e:
            logger.error(f"Error fetching subtasks: {e}", exc_info=True)
            self.state.error = "Failed to load subtasks"
            return

        for task_id, subtasks in grouped.items():
            record = self.record(task_id)
            if record:
                record.subtasks = subtasks
                record.subtask_error = None

    async def _reload_subtasks(self, record: TaskRecord, user_id: str) -> None:
        try:
            record.subtasks = await self.ctx.repos.subtasks.find_by_task(record.task.id, user_id)
        except Exception as e:
            logger.error(f"Error fetching subtasks for task {record.task.id}: {e}", exc_info=True)
            record.subtask_error = "Failed to load subtasks"

    # Tasks

    async def add_task(
        self,
        title: Optional[str] = None,
        priority: Optional[TaskPriority] = None,
        status: Optional[TaskStatus] = None,
    ) -> Optional[Task]:
        """Create a task from the form (or the given values) and refetch the list"""
        form = self.state.form
        if title is not None:
            form.title = title
        if priority is not None:
            form.priority = priority
        if status is not None:
            form.status = status

        form.error = None
        if not form.title.strip():
            form.error = "Please enter a task title"
            return None

        form.submitting = True
        try:
            user_id = await self.ctx.auth.require_user_id("Please log in to add tasks")
            task = await self.ctx.repos.tasks.create(TaskCreate(
                user_id=user_id,
                title=form.title,
                priority=form.priority,
                status=form.status,
            ))
        except AppError as e:
            form.error = e.message
            return None
        except Exception as e:
            logger.error(f"Error adding task: {e}", exc_info=True)
            form.error = "Failed to add task"
            return None
        finally:
            form.submitting = False

        self._schedule_embedding(task)
        self.state.form = TaskForm()
        await self.load_tasks()
        return task

    def _schedule_embedding(self, task: Task) -> None:
        background = asyncio.create_task(self._generate_embedding(task))
        self._background.add(background)
        background.add_done_callback(self._background.discard)

    async def _generate_embedding(self, task: Task) -> None:
        try:
            token = await self.ctx.auth.require_access_token()
            await self.ctx.functions.generate_task_embedding(token, task.id, task.title)
        except Exception as e:
            logger.warning(f"Embedding generation failed for task {task.id}: {e}")

    async def wait_background_tasks(self) -> None:
        """Wait for pending fire-and-forget work (embedding requests)"""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def update_status(self, task_id: str, status: TaskStatus) -> None:
        await self._update_task(task_id, status=status)

    async def update_priority(self, task_id: str, priority: TaskPriority) -> None:
        await self._update_task(task_id, priority=priority)

    async def _update_task(
        self,
        task_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> None:
        try:
            user_id = await self.ctx.auth.require_user_id("Please log in to update tasks")
            if status is not None:
                updated = await self.ctx.repos.tasks.update_status(task_id, user_id, status)
            else:
                updated = await self.ctx.repos.tasks.update_priority(task_id, user_id, priority)
        except AppError as e:
            self.state.error = e.message
            return
        except Exception as e:
            logger.error(f"Error updating task {task_id}: {e}", exc_info=True)
            self.state.error = "Failed to update task"
            return

        if not updated:
            self.state.error = "Task not found"
        await self.load_tasks()

    async def delete_task(self, task_id: str) -> None:
        try:
            user_id = await self.ctx.auth.require_user_id("Please log in to delete tasks")
            await self.ctx.repos.tasks.delete_for_user(task_id, user_id)
        except AppError as e:
            self.state.error = e.message
            return
        except Exception as e:
            logger.error(f"Error deleting task {task_id}: {e}", exc_info=True)
            self.state.error = "Failed to delete task"
            return

        self.state.records.pop(task_id, None)
        self.state.search.results = [r for r in self.state.search.results if r.id != task_id]
        await self.load_tasks()

    def toggle_collapsed(self, task_id: str) -> None:
        record = self.record(task_id)
        if record:
            record.collapsed = not record.collapsed

    # Filters

    def set_filters(self, status: Optional[TaskStatus] = None, priority: Optional[TaskPriority] = None) -> None:
        self.state.status_filter = status
        self.state.priority_filter = priority

    def clear_filters(self) -> None:
        self.set_filters(None, None)

    # Subtasks

    async def add_subtask(self, task_id: str, title: str) -> Optional[Subtask]:
        record = self.record(task_id)
        if not record:
            return None

        record.subtask_error = None
        try:
            if not title.strip():
                raise InvalidInputError("Please enter a subtask title")
            user_id = await self.ctx.auth.require_user_id("Please log in to add subtasks")
            subtask = await self.ctx.repos.subtasks.create(
                SubtaskCreate(task_id=task_id, user_id=user_id, title=title)
            )
        except AppError as e:
            record.subtask_error = e.message
            return None
        except Exception as e:
            logger.error(f"Error adding subtask to task {task_id}: {e}", exc_info=True)
            record.subtask_error = "Failed to add subtask"
            return None

        await self._reload_subtasks(record, user_id)
        return subtask

    async def edit_subtask(self, task_id: str, subtask_id: str, title: str) -> None:
        record = self.record(task_id)
        if not record:
            return

        record.subtask_error = None
        try:
            if not title.strip():
                raise InvalidInputError("Please enter a subtask title")
            user_id = await self.ctx.auth.require_user_id("Please log in to edit subtasks")
            await self.ctx.repos.subtasks.update_title(record.task.id, subtask_id, user_id, title.strip())
        except AppError as e:
            record.subtask_error = e.message
            return
        except Exception as e:
            logger.error(f"Error updating subtask {subtask_id}: {e}", exc_info=True)
            record.subtask_error = "Failed to update subtask"
            return

        await self._reload_subtasks(record, user_id)

    async def delete_subtask(self, task_id: str, subtask_id: str) -> None:
        record = self.record(task_id)
        if not record:
            return

        record.subtask_error = None
        try:
            user_id = await self.ctx.auth.require_user_id("Please log in to delete subtasks")
            await self.ctx.repos.subtasks.delete_for_user(record.task.id, subtask_id, user_id)
        except AppError as e:
            record.subtask_error = e.message
            return
        except Exception as e:
            logger.error(f"Error deleting subtask {subtask_id}: {e}", exc_info=True)
            record.subtask_error = "Failed to delete subtask"
            return

        await self._reload_subtasks(record, user_id)

    # AI suggestions

    async def generate_suggestions(self, task_id: str) -> None:
        """Ask for AI subtask suggestions; a no-op once the task has subtasks"""
        record = self.record(task_id)
        if not record or not record.can_generate:
            return

        record.generation = GenerationState.GENERATING
        record.generation_error = None
        try:
            token = await self.ctx.auth.require_access_token("Please log in to generate subtasks")
            suggestions = await self.ctx.functions.generate_subtasks(token, record.task.title)
        except AppError as e:
            record.generation = GenerationState.ERROR
            record.generation_error = e.message
            return
        except Exception as e:
            logger.error(f"Error generating subtasks for task {task_id}: {e}", exc_info=True)
            record.generation = GenerationState.ERROR
            record.generation_error = "Failed to generate subtasks"
            return

        record.suggestions = suggestions
        record.generation = GenerationState.READY

    async def save_suggestion(self, task_id: str, suggestion: str) -> Optional[Subtask]:
        """Persist a suggestion as a subtask and drop exactly that string from the list"""
        record = self.record(task_id)
        if not record or suggestion not in record.suggestions:
            return None

        subtask = await self.add_subtask(task_id, suggestion)
        if subtask:
            record.suggestions.remove(suggestion)
        return subtask

    def dismiss_suggestion(self, task_id: str, suggestion: str) -> None:
        record = self.record(task_id)
        if record and suggestion in record.suggestions:
            record.suggestions.remove(suggestion)

    # Smart search

    async def search(self, query: str) -> None:
        """Replace results with a new ranked search; a blank query just clears"""
        search = self.state.search
        search.query = query
        search.error = None

        if not query.strip():
            search.results = []
            return

        search.searching = True
        try:
            token = await self.ctx.auth.require_access_token("Please log in to search")
            search.results = await self.ctx.functions.smart_search(token, query.strip())
        except AppError as e:
            search.results = []
            search.error = e.message
        except Exception as e:
            logger.error(f"Smart search failed: {e}", exc_info=True)
            search.results = []
            search.error = "Search failed"
        finally:
            search.searching = False

    def clear_search(self) -> None:
        self.state.search = SearchState()

    # Navigation

    async def open_profile(self) -> None:
        await self.navigator.go(Page.PROFILE)

    async def logout(self) -> None:
        await end_session(self.ctx, self.navigator)
        self.reset()
