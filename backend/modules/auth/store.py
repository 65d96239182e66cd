"""
Session Store.

Holds the one process-wide Session and mirrors its identity into durable
storage under a fixed key. The store is read once at construction; after
that the persisted copy is only ever written, never re-read.

Only SessionManager mutates the store. Presentation code receives the
manager (and through it read-only snapshots), never the store itself.
"""

import logging
from typing import Optional

from shared.storage import IKeyValueStore

from .models import Identity, Session

logger = logging.getLogger(__name__)


class SessionStore:
    """Single-owner container for the current Session."""

    def __init__(self, storage: IKeyValueStore, key: str):
        self._storage = storage
        self._key = key
        self._session = Session(identity=self._rehydrate())

    def _rehydrate(self) -> Optional[Identity]:
        raw = self._storage.get(self._key)
        if raw is None:
            return None
        try:
            identity = Identity.model_validate_json(raw)
        except ValueError as e:
            logger.warning(f"Discarding malformed persisted session: {e}")
            return None
        logger.debug(f"Rehydrated session for user {identity.id}")
        return identity

    @property
    def session(self) -> Session:
        return self._session

    @property
    def identity(self) -> Optional[Identity]:
        return self._session.identity

    @property
    def loading(self) -> bool:
        return self._session.loading

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def begin_transition(self) -> None:
        """Mark a login/signup as in flight."""
        self._session = self._session.model_copy(update={"loading": True})

    def end_transition(self) -> None:
        """Clear the in-flight flag without touching the identity."""
        self._session = self._session.model_copy(update={"loading": False})

    def commit(self, identity: Identity) -> Session:
        """Persist identity and make it the active one."""
        self._storage.set(self._key, identity.model_dump_json())
        self._session = Session(identity=identity, loading=self._session.loading)
        return self._session

    def clear(self) -> Session:
        """Drop the active identity and its persisted copy."""
        self._storage.delete(self._key)
        self._session = Session(identity=None, loading=self._session.loading)
        return self._session
