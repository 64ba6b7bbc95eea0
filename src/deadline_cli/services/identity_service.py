"""Identity service - the local pseudo-user that actions are attributed to."""

from __future__ import annotations

import logging

from deadline_cli.models import ConcurrentModificationError, Identity
from deadline_cli.repositories import KeyValueStore
from deadline_cli.utils.helpers import generate_display_name, generate_uuid

logger = logging.getLogger(__name__)

USER_KEY = "deadline-groups-user"
DEFAULT_PROFILE = "default"


def identity_key(profile: str = DEFAULT_PROFILE) -> str:
    """Store key holding the identity for ``profile``."""
    if profile == DEFAULT_PROFILE:
        return USER_KEY
    return f"{USER_KEY}:{profile}"


class IdentityService:
    """Produces and persists a stable local identity.

    The identity is created on first use and never changes afterwards.
    Profiles let several identities share one store, e.g. to try out group
    tasks on a single machine.
    """

    def __init__(self, store: KeyValueStore, profile: str = DEFAULT_PROFILE):
        self.store = store
        self.profile = profile
        self._identity: Identity | None = None

    @property
    def key(self) -> str:
        return identity_key(self.profile)

    def get_current_user(self) -> Identity:
        """Return the persisted identity, creating it on first call."""
        if self._identity is not None:
            return self._identity

        stored = self.store.read(self.key)
        if stored is not None:
            self._identity = Identity.model_validate_json(stored.value)
            return self._identity

        identity = Identity(id=generate_uuid(), name=generate_display_name())
        try:
            self.store.write(self.key, identity.model_dump_json(), 0)
        except ConcurrentModificationError:
            # Another process created it first; theirs wins.
            stored = self.store.read(self.key)
            self._identity = Identity.model_validate_json(stored.value)
            logger.info(
                "identity for profile %s created concurrently, using %s",
                self.profile,
                self._identity.id,
            )
            return self._identity
        logger.info(
            "created identity %s (%s) for profile %s",
            identity.id,
            identity.name,
            self.profile,
        )
        self._identity = identity
        return identity
