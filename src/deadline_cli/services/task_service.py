"""Task service - business logic and mutation gating for tasks.

This service sits between commands and the task repository. Every mutating
operation reloads the whole collection, re-derives the target task's status
at the current time, rejects the operation if its gate does not allow that
status, and only then writes the whole collection back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TypeVar

from pydantic import ValidationError

from deadline_cli.core.status import check_gate, resolve_status
from deadline_cli.models import (
    CreatorCannotLeaveError,
    FocusSession,
    GroupMember,
    NotGroupTaskError,
    ProgressUpdate,
    Subtask,
    SubtaskCreate,
    SubtaskNotFoundError,
    Task,
    TaskCreate,
    TaskLockedError,
    TaskNotFoundError,
    TaskStatus,
    TaskType,
    TaskValidationError,
    UpdateCreate,
)
from deadline_cli.repositories import TaskCollection, TaskRepository
from deadline_cli.services.identity_service import IdentityService
from deadline_cli.utils.helpers import generate_uuid, utc_now

logger = logging.getLogger(__name__)

DEFAULT_SHARE_BASE_URL = "http://localhost:8080"

T = TypeVar("T")


def build_group_link(base_url: str, task_id: str) -> str:
    """Build the invite link for a group task."""
    return f"{base_url.rstrip('/')}/join/{task_id}"


def _validation_message(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err["loc"])
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(parts)


class TaskService:
    """Service for task business logic.

    Args:
        repository: Whole-collection task persistence
        identity: Provider of the acting user
        clock: Callable returning the current aware datetime
        share_base_url: Base address used for group invite links
    """

    def __init__(
        self,
        repository: TaskRepository,
        identity: IdentityService,
        clock: Callable[[], datetime] = utc_now,
        share_base_url: str = DEFAULT_SHARE_BASE_URL,
    ):
        self.repository = repository
        self.identity = identity
        self.clock = clock
        self.share_base_url = share_base_url

    def now(self) -> datetime:
        return self.clock()

    # ---- reads ----

    def get_tasks(self) -> list[Task]:
        """Return every stored task in insertion order."""
        return self.repository.list_all()

    def get_task(self, task_id: str) -> Task:
        """Return one task.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        task = self.repository.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def status_of(self, task: Task) -> TaskStatus:
        """Derive the task's status at the current time."""
        return resolve_status(task, self.now())

    # ---- writes ----

    def create_task(
        self,
        title: str,
        description: str = "",
        commitment: str = "",
        type: TaskType | str = TaskType.SOLO,
        deadline: datetime | None = None,
    ) -> Task:
        """Create a new task owned by the current identity.

        Raises:
            TaskValidationError: If a field is missing or out of range, or the
                deadline is not strictly in the future
        """
        if deadline is None:
            raise TaskValidationError("deadline: Field required")
        try:
            data = TaskCreate(
                title=title,
                description=description,
                commitment=commitment,
                type=type,
                deadline=deadline,
            )
        except ValidationError as e:
            raise TaskValidationError(_validation_message(e)) from e

        now = self.now()
        if data.deadline <= now:
            raise TaskValidationError("deadline: must be in the future")

        user = self.identity.get_current_user()
        task_id = generate_uuid()
        is_group = data.type == TaskType.GROUP

        task = Task(
            id=task_id,
            title=data.title,
            description=data.description,
            commitment=data.commitment,
            type=data.type,
            status=TaskStatus.UPCOMING,
            deadline=data.deadline,
            created_at=now,
            creator_id=user.id,
            creator_name=user.name,
            group_link=build_group_link(self.share_base_url, task_id)
            if is_group
            else None,
            members=[GroupMember(id=user.id, name=user.name, joined_at=now)]
            if is_group
            else None,
        )

        collection = self.repository.load()
        collection.tasks.append(task)
        self.repository.save(collection)

        logger.info(
            "created %s task %s deadline=%s",
            task.type,
            task.id,
            task.deadline.isoformat(),
        )
        return task

    def join_task(self, task_id: str) -> Task:
        """Join a group task while it is still upcoming.

        Joining a task one already belongs to returns it unchanged.

        Raises:
            TaskNotFoundError, NotGroupTaskError, TaskLockedError
        """
        user = self.identity.get_current_user()

        def apply(task: Task, now: datetime) -> Task | None:
            if task.is_member(user.id):
                return None
            task.members = list(task.members or [])
            task.members.append(GroupMember(id=user.id, name=user.name, joined_at=now))
            return task

        return self._mutate(task_id, "join_task", apply, group_only=True)

    def leave_task(self, task_id: str) -> Task:
        """Leave a group task while it is still upcoming.

        Leaving a task one does not belong to returns it unchanged.

        Raises:
            TaskNotFoundError, NotGroupTaskError, CreatorCannotLeaveError,
            TaskLockedError
        """
        user = self.identity.get_current_user()

        def apply(task: Task, now: datetime) -> Task | None:
            if not task.is_member(user.id):
                return None
            task.members = [m for m in task.members or [] if m.id != user.id]
            return task

        def precheck(task: Task) -> None:
            if task.creator_id == user.id:
                raise CreatorCannotLeaveError(task_id)

        return self._mutate(
            task_id, "leave_task", apply, group_only=True, precheck=precheck
        )

    def add_update(self, task_id: str, content: str) -> ProgressUpdate:
        """Post a progress update during the execution window."""
        try:
            data = UpdateCreate(content=content)
        except ValidationError as e:
            raise TaskValidationError(_validation_message(e)) from e
        user = self.identity.get_current_user()

        def apply(task: Task, now: datetime) -> ProgressUpdate:
            update = ProgressUpdate(
                id=generate_uuid(),
                user_id=user.id,
                user_name=user.name,
                content=data.content,
                timestamp=now,
            )
            task.updates.append(update)
            return update

        return self._mutate(task_id, "add_update", apply)

    def add_subtask(self, task_id: str, title: str) -> Subtask:
        """Append an unchecked subtask during the execution window."""
        try:
            data = SubtaskCreate(title=title)
        except ValidationError as e:
            raise TaskValidationError(_validation_message(e)) from e

        def apply(task: Task, now: datetime) -> Subtask:
            subtask = Subtask(id=generate_uuid(), title=data.title)
            task.subtasks.append(subtask)
            return subtask

        return self._mutate(task_id, "add_subtask", apply)

    def toggle_subtask(self, task_id: str, subtask_id: str) -> Subtask:
        """Flip a subtask's completed flag during the execution window.

        Raises:
            TaskNotFoundError, TaskLockedError, SubtaskNotFoundError
        """

        def apply(task: Task, now: datetime) -> Subtask:
            subtask = task.find_subtask(subtask_id)
            if subtask is None:
                raise SubtaskNotFoundError(task_id, subtask_id)
            subtask.completed = not subtask.completed
            return subtask

        return self._mutate(task_id, "toggle_subtask", apply)

    def complete_task(self, task_id: str) -> Task:
        """Mark a task completed. Completion is terminal."""

        def apply(task: Task, now: datetime) -> Task:
            task.status = TaskStatus.COMPLETED
            return task

        return self._mutate(task_id, "complete_task", apply)

    def add_focus_session(self, task_id: str, duration_seconds: int) -> FocusSession:
        """Record a finished focus interval that ended now."""
        if isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int):
            raise TaskValidationError("duration: must be a whole number of seconds")
        if duration_seconds <= 0:
            raise TaskValidationError("duration: must be greater than 0")

        def apply(task: Task, now: datetime) -> FocusSession:
            session = FocusSession(
                id=generate_uuid(),
                start_time=now - timedelta(seconds=duration_seconds),
                end_time=now,
                duration=duration_seconds,
                completed=True,
            )
            task.focus_sessions.append(session)
            return session

        return self._mutate(task_id, "add_focus_session", apply)

    def update_manual_progress(self, task_id: str, value: int) -> Task:
        """Overwrite the self-reported progress, clamped to 0-100."""
        if isinstance(value, bool):
            raise TaskValidationError("progress: must be a number")
        try:
            clamped = max(0, min(100, int(value)))
        except (TypeError, ValueError, OverflowError) as e:
            raise TaskValidationError("progress: must be a number") from e

        def apply(task: Task, now: datetime) -> Task:
            task.manual_progress = clamped
            return task

        return self._mutate(task_id, "update_manual_progress", apply)

    # ---- internals ----

    def _mutate(
        self,
        task_id: str,
        operation: str,
        apply: Callable[[Task, datetime], T | None],
        *,
        group_only: bool = False,
        precheck: Callable[[Task], None] | None = None,
    ) -> T | Task:
        """Load, gate, mutate and save one task.

        ``apply`` returning None means nothing changed: nothing is written and
        the unchanged task is returned.
        """
        collection: TaskCollection = self.repository.load()
        task = collection.find(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if group_only and task.type != TaskType.GROUP:
            raise NotGroupTaskError(task_id)
        if precheck is not None:
            precheck(task)

        now = self.now()
        try:
            check_gate(operation, task, now)
        except TaskLockedError:
            logger.warning(
                "%s rejected for task %s (status %s)",
                operation,
                task_id,
                resolve_status(task, now),
            )
            raise

        result = apply(task, now)
        if result is None:
            logger.debug("%s on task %s was a no-op", operation, task_id)
            return task

        task.version += 1
        self.repository.save(collection)
        logger.info("%s on task %s (v%s)", operation, task_id, task.version)
        return result
