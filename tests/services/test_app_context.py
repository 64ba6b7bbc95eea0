"""Tests for AppContext wiring."""

from __future__ import annotations

from datetime import timedelta

import pytest

from deadline_cli.services.app_context import AppContext
from tests.conftest import T0, FakeClock


def test_in_memory_context():
    clock = FakeClock()
    with AppContext.in_memory(clock=clock) as app:
        task = app.tasks.create_task("t", deadline=T0 + timedelta(hours=2))
        assert app.tasks.get_task(task.id) == task
        assert task.creator_id == app.identity.get_current_user().id


def test_services_unavailable_before_open():
    app = AppContext.in_memory()
    assert not app.is_open
    with pytest.raises(RuntimeError):
        _ = app.tasks
    with pytest.raises(RuntimeError):
        _ = app.identity


def test_sqlite_context_persists_between_opens(tmp_path):
    db_path = tmp_path / "deadlines.db"
    clock = FakeClock()

    with AppContext(db_path, clock=clock) as app:
        created = app.tasks.create_task("t", deadline=T0 + timedelta(hours=2))
        user = app.identity.get_current_user()

    assert not app.is_open

    with AppContext(db_path, clock=clock) as app:
        assert app.tasks.get_task(created.id) == created
        assert app.identity.get_current_user() == user


def test_profiles_share_the_task_store(tmp_path):
    db_path = tmp_path / "deadlines.db"
    clock = FakeClock()

    with AppContext(db_path, clock=clock) as app:
        task = app.tasks.create_task(
            "t", type="group", deadline=T0 + timedelta(hours=3)
        )

    with AppContext(db_path, profile="friend", clock=clock) as app:
        joined = app.tasks.join_task(task.id)

    assert len(joined.members) == 2
    assert joined.members[0].id != joined.members[1].id


def test_from_config_uses_settings(tmp_config):
    tmp_config.set("share.base_url", "https://dl.example")
    app = AppContext.from_config(tmp_config, profile="work")

    assert app.db_path == tmp_config.get_db_path()
    assert app.share_base_url == "https://dl.example"
    assert app.profile == "work"
