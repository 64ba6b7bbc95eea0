"""Tests for IdentityService."""

from __future__ import annotations

import re
from unittest.mock import patch

from deadline_cli.adapters.memory import InMemoryKeyValueStore
from deadline_cli.models import Identity
from deadline_cli.services.identity_service import (
    USER_KEY,
    IdentityService,
    identity_key,
)


def test_first_call_creates_and_persists(store):
    identity = IdentityService(store).get_current_user()

    assert re.fullmatch(r"User_[0-9a-f]{4}", identity.name)
    stored = Identity.model_validate_json(store.read(USER_KEY).value)
    assert stored == identity


def test_repeated_calls_return_same_identity(store):
    service = IdentityService(store)
    assert service.get_current_user() is service.get_current_user()


def test_identity_survives_new_service_instances(store):
    first = IdentityService(store).get_current_user()
    second = IdentityService(store).get_current_user()
    assert first == second


def test_existing_identity_is_not_rewritten(store):
    service = IdentityService(store)
    service.get_current_user()
    with patch.object(store, "write") as write:
        IdentityService(store).get_current_user()
    write.assert_not_called()


def test_profiles_have_separate_identities(store):
    default = IdentityService(store).get_current_user()
    friend = IdentityService(store, profile="friend").get_current_user()

    assert default.id != friend.id
    assert store.read("deadline-groups-user:friend") is not None


def test_identity_key():
    assert identity_key() == USER_KEY
    assert identity_key("default") == USER_KEY
    assert identity_key("work") == f"{USER_KEY}:work"


def test_reads_preexisting_record():
    store = InMemoryKeyValueStore({USER_KEY: '{"id": "abc", "name": "User_beef"}'})
    assert IdentityService(store).get_current_user() == Identity(
        id="abc", name="User_beef"
    )


class _RacingStore(InMemoryKeyValueStore):
    """Lets another process create the identity just before our first write."""

    def __init__(self):
        super().__init__()
        self.rival: Identity | None = None

    def write(self, key, value, expected_version):
        if self.rival is None:
            self.rival = IdentityService(InMemoryKeyValueStore()).get_current_user()
            super().write(key, self.rival.model_dump_json(), 0)
        return super().write(key, value, expected_version)


def test_concurrent_first_use_adopts_stored_identity():
    store = _RacingStore()
    service = IdentityService(store)

    identity = service.get_current_user()

    assert identity == store.rival
    assert service.get_current_user() is identity
    assert Identity.model_validate_json(store.read(USER_KEY).value) == identity
    assert store.read(USER_KEY).version == 1
