"""Tests for task and subtask ID resolution."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from deadline_cli.models import (
    Subtask,
    SubtaskNotFoundError,
    Task,
    TaskNotFoundError,
    TaskValidationError,
)
from deadline_cli.utils.task_helpers import (
    _find_shortest_unique_prefix,
    resolve_subtask_id,
    resolve_task_id,
)
from tests.conftest import T0


def _task(task_id: str, title: str = "Task", subtasks=()) -> Task:
    return Task(
        id=task_id,
        title=title,
        deadline=T0 + timedelta(hours=2),
        created_at=T0,
        creator_id="u1",
        creator_name="User_0001",
        subtasks=list(subtasks),
    )


@pytest.fixture()
def task_service():
    service = MagicMock()
    service.get_tasks.return_value = [
        _task("abc123", "Write report"),
        _task("abd456", "Call bank"),
        _task("xyz789", "Ship release"),
    ]
    return service


class TestShortestUniquePrefix:
    def test_distinct_first_char(self):
        assert _find_shortest_unique_prefix(["abc", "xyz"], "xyz") == "x"

    def test_shared_prefix(self):
        assert _find_shortest_unique_prefix(["abc123", "abd456"], "abd456") == "abd"

    def test_id_prefix_of_another_returns_full_id(self):
        assert _find_shortest_unique_prefix(["ab", "abc"], "ab") == "ab"


class TestResolveTaskId:
    def test_exact_match(self, task_service):
        assert resolve_task_id(task_service, "abc123") == "abc123"

    def test_unique_prefix(self, task_service):
        assert resolve_task_id(task_service, "x") == "xyz789"
        assert resolve_task_id(task_service, "abd") == "abd456"

    def test_exact_match_wins_over_prefix(self):
        service = MagicMock()
        service.get_tasks.return_value = [_task("ab"), _task("abc")]
        assert resolve_task_id(service, "ab") == "ab"

    def test_no_match(self, task_service):
        with pytest.raises(TaskNotFoundError):
            resolve_task_id(task_service, "zzz")

    def test_ambiguous_prefix_lists_candidates(self, task_service):
        with pytest.raises(TaskValidationError) as exc_info:
            resolve_task_id(task_service, "ab")

        message = str(exc_info.value)
        assert "Multiple tasks match 'ab'" in message
        assert "[abc] Write report" in message
        assert "[abd] Call bank" in message

    def test_long_titles_are_truncated(self):
        service = MagicMock()
        service.get_tasks.return_value = [_task("a1", "x" * 80), _task("a2", "y")]
        with pytest.raises(TaskValidationError) as exc_info:
            resolve_task_id(service, "a")
        assert "x" * 57 + "..." in str(exc_info.value)


class TestResolveSubtaskId:
    @pytest.fixture()
    def task(self):
        return _task(
            "t1",
            subtasks=[
                Subtask(id="s-100", title="Outline"),
                Subtask(id="s-101", title="Draft"),
                Subtask(id="q-200", title="Review"),
            ],
        )

    def test_exact(self, task):
        assert resolve_subtask_id(task, "s-100") == "s-100"

    def test_prefix(self, task):
        assert resolve_subtask_id(task, "q") == "q-200"

    def test_ambiguous(self, task):
        with pytest.raises(TaskValidationError, match="Multiple subtasks match"):
            resolve_subtask_id(task, "s-10")

    def test_missing(self, task):
        with pytest.raises(SubtaskNotFoundError):
            resolve_subtask_id(task, "nope")
