"""Deadline data models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
COMMITMENT_MAX_LENGTH = 200
UPDATE_MAX_LENGTH = 280
SUBTASK_TITLE_MAX_LENGTH = 100


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and normalise aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class TaskType(StrEnum):
    """Whether a task is worked on alone or shared with a group."""

    SOLO = "solo"
    GROUP = "group"


class TaskStatus(StrEnum):
    """Task lifecycle status.

    Only ``completed`` is ever written to storage explicitly. The other
    three values are derived from the deadline and the current time by
    ``deadline_cli.core.status.resolve_status``.
    """

    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"


class _TimestampedModel(BaseModel):
    """Base model normalising every datetime field to aware UTC."""

    @field_validator("*", mode="after")
    @classmethod
    def _normalise_datetimes(cls, value):
        if isinstance(value, datetime):
            return _as_utc(value)
        return value


class Identity(BaseModel):
    """Local pseudo-user used to attribute actions.

    Attributes:
        id: Stable unique identifier
        name: Generated display name (e.g. "User_3fa8")
    """

    model_config = {"frozen": True}

    id: str
    name: str


class GroupMember(_TimestampedModel):
    """Member of a group task."""

    id: str
    name: str
    joined_at: datetime


class ProgressUpdate(_TimestampedModel):
    """Progress update posted during a task's execution window."""

    id: str
    user_id: str
    user_name: str
    content: str
    timestamp: datetime


class Subtask(BaseModel):
    """Checklist item inside a task."""

    id: str
    title: str
    completed: bool = False


class FocusSession(_TimestampedModel):
    """Time-boxed work interval logged against a task.

    Attributes:
        id: Unique identifier
        start_time: When the interval started
        end_time: When the interval ended
        duration: Length of the interval in seconds
        completed: Whether the interval ran to completion
    """

    id: str
    start_time: datetime
    end_time: datetime | None = None
    duration: int = Field(ge=0)
    completed: bool = True


class Task(_TimestampedModel):
    """Task model representing a complete deadline entity.

    Attributes:
        id: Unique identifier for the task
        title: Short title
        description: Optional longer description
        commitment: The deliverable promised before the deadline, immutable
        type: Solo or group, immutable
        status: Persisted status; only ``completed`` is authoritative
        deadline: When the task ends
        created_at: Creation timestamp
        creator_id: Identity id of the creator
        creator_name: Identity name of the creator
        group_link: Share link, present only for group tasks
        members: Group members in join order, present only for group tasks
        updates: Progress updates in posting order
        subtasks: Checklist items in insertion order
        focus_sessions: Logged focus intervals in insertion order
        manual_progress: Self-reported progress percentage
        version: Number of persisted mutations of this record
    """

    id: str
    title: str
    description: str = ""
    commitment: str = ""
    type: TaskType = TaskType.SOLO
    status: TaskStatus = TaskStatus.UPCOMING
    deadline: datetime
    created_at: datetime
    creator_id: str
    creator_name: str
    group_link: str | None = None
    members: list[GroupMember] | None = None
    updates: list[ProgressUpdate] = Field(default_factory=list)
    subtasks: list[Subtask] = Field(default_factory=list)
    focus_sessions: list[FocusSession] = Field(default_factory=list)
    manual_progress: int | None = Field(default=None, ge=0, le=100)
    version: int = Field(default=1, ge=1)

    @property
    def is_group(self) -> bool:
        return self.type == TaskType.GROUP

    def is_member(self, user_id: str) -> bool:
        """Return True if the user belongs to this task.

        The creator of a solo task counts as its only member.
        """
        if self.members is None:
            return user_id == self.creator_id
        return any(member.id == user_id for member in self.members)

    def find_subtask(self, subtask_id: str) -> Subtask | None:
        for subtask in self.subtasks:
            if subtask.id == subtask_id:
                return subtask
        return None


class TaskCreate(_TimestampedModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required)
        description: Optional description
        commitment: Optional deliverable statement
        type: Solo or group
        deadline: Deadline, must lie in the future at creation time
    """

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    commitment: str = Field(default="", max_length=COMMITMENT_MAX_LENGTH)
    type: TaskType = TaskType.SOLO
    deadline: datetime

    @field_validator("title", "description", "commitment", mode="before")
    @classmethod
    def _strip(cls, value):
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value


class UpdateCreate(BaseModel):
    """Model for posting a progress update."""

    content: str = Field(min_length=1, max_length=UPDATE_MAX_LENGTH)

    @field_validator("content", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class SubtaskCreate(BaseModel):
    """Model for adding a subtask."""

    title: str = Field(min_length=1, max_length=SUBTASK_TITLE_MAX_LENGTH)

    @field_validator("title", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value
