"""Tests for the pydantic domain models."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from deadline_cli.models import (
    GroupMember,
    Identity,
    Subtask,
    SubtaskCreate,
    Task,
    TaskCreate,
    TaskStatus,
    TaskType,
    UpdateCreate,
)
from tests.conftest import T0


def _task(**overrides) -> Task:
    data = {
        "id": "task-1",
        "title": "Ship release",
        "deadline": T0 + timedelta(hours=2),
        "created_at": T0,
        "creator_id": "user-1",
        "creator_name": "User_0001",
    }
    data.update(overrides)
    return Task(**data)


class TestTask:
    def test_defaults(self):
        task = _task()
        assert task.type == TaskType.SOLO
        assert task.status == TaskStatus.UPCOMING
        assert task.members is None
        assert task.group_link is None
        assert task.updates == []
        assert task.subtasks == []
        assert task.focus_sessions == []
        assert task.manual_progress is None
        assert task.version == 1

    def test_naive_datetimes_become_utc(self):
        task = _task(deadline=datetime(2025, 3, 1, 15, 0, 0))
        assert task.deadline.tzinfo is not None
        assert task.deadline == datetime(2025, 3, 1, 15, 0, 0, tzinfo=UTC)

    def test_offset_datetimes_are_normalised(self):
        plus_two = timezone(timedelta(hours=2))
        task = _task(deadline=datetime(2025, 3, 1, 17, 0, 0, tzinfo=plus_two))
        assert task.deadline == datetime(2025, 3, 1, 15, 0, 0, tzinfo=UTC)
        assert task.deadline.utcoffset() == timedelta(0)

    def test_nested_timestamps_normalised(self):
        member = GroupMember(id="u", name="n", joined_at=datetime(2025, 1, 1))
        assert member.joined_at.tzinfo is not None

    def test_manual_progress_bounds(self):
        with pytest.raises(ValidationError):
            _task(manual_progress=101)
        with pytest.raises(ValidationError):
            _task(manual_progress=-1)

    def test_is_member_solo(self):
        task = _task()
        assert task.is_member("user-1")
        assert not task.is_member("user-2")

    def test_is_member_group(self):
        task = _task(
            type=TaskType.GROUP,
            members=[GroupMember(id="user-1", name="a", joined_at=T0)],
        )
        assert task.is_group
        assert task.is_member("user-1")
        assert not task.is_member("user-2")

    def test_find_subtask(self):
        task = _task(subtasks=[Subtask(id="s1", title="one")])
        assert task.find_subtask("s1").title == "one"
        assert task.find_subtask("nope") is None

    def test_status_values(self):
        assert [s.value for s in TaskStatus] == [
            "upcoming",
            "active",
            "completed",
            "expired",
        ]


class TestIdentity:
    def test_frozen(self):
        identity = Identity(id="u", name="User_abcd")
        with pytest.raises(ValidationError):
            identity.name = "other"


class TestInputModels:
    def test_task_create_strips_title(self):
        data = TaskCreate(title="  Plan  ", deadline=T0)
        assert data.title == "Plan"

    @pytest.mark.parametrize("title", ["", "   ", "x" * 101])
    def test_task_create_rejects_bad_title(self, title):
        with pytest.raises(ValidationError):
            TaskCreate(title=title, deadline=T0)

    def test_task_create_limits(self):
        TaskCreate(title="t", description="d" * 500, commitment="c" * 200, deadline=T0)
        with pytest.raises(ValidationError):
            TaskCreate(title="t", description="d" * 501, deadline=T0)
        with pytest.raises(ValidationError):
            TaskCreate(title="t", commitment="c" * 201, deadline=T0)

    def test_task_create_accepts_type_string(self):
        assert TaskCreate(title="t", type="group", deadline=T0).type == TaskType.GROUP

    def test_task_create_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="t", type="team", deadline=T0)

    def test_update_content_limits(self):
        assert UpdateCreate(content=" halfway ").content == "halfway"
        UpdateCreate(content="x" * 280)
        with pytest.raises(ValidationError):
            UpdateCreate(content="x" * 281)
        with pytest.raises(ValidationError):
            UpdateCreate(content="  ")

    def test_subtask_title_limits(self):
        SubtaskCreate(title="x" * 100)
        with pytest.raises(ValidationError):
            SubtaskCreate(title="x" * 101)
        with pytest.raises(ValidationError):
            SubtaskCreate(title="")
