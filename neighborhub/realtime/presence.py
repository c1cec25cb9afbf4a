"""Who is online, and on which Socket.IO connection.

Each user has at most one live handle (the Socket.IO ``sid``). A second
``register`` for the same user replaces the first, and a disconnect of a
replaced handle leaves the newer entry alone.

The default store is a plain dict in the server process, so presence is only
consistent within a single process.
"""

from __future__ import annotations

import abc
from functools import lru_cache

from django.conf import settings
from django.utils.module_loading import import_string


class PresenceStore(abc.ABC):
    """Interface for the user id to connection handle table."""

    @abc.abstractmethod
    def register(self, user_id: int, handle: str) -> str | None:
        """Bind ``user_id`` to ``handle``; return the handle it replaced."""

    @abc.abstractmethod
    def unregister(self, handle: str) -> int | None:
        """Forget ``handle``.

        Returns the user id when the handle was that user's current one (the
        user is now offline), ``None`` otherwise.
        """

    @abc.abstractmethod
    def lookup(self, user_id: int) -> str | None: ...

    @abc.abstractmethod
    def snapshot(self) -> dict[int, str]: ...

    def is_online(self, user_id: int) -> bool:
        return self.lookup(user_id) is not None

    def online_user_ids(self) -> list[int]:
        return list(self.snapshot())


class InMemoryPresenceStore(PresenceStore):
    def __init__(self) -> None:
        self._handles: dict[int, str] = {}
        self._users: dict[str, int] = {}

    def register(self, user_id: int, handle: str) -> str | None:
        # A handle belongs to one user at a time
        owner = self._users.get(handle)
        if owner not in (None, user_id) and self._handles.get(owner) == handle:
            del self._handles[owner]

        previous = self._handles.get(user_id)
        if previous is not None and previous != handle:
            self._users.pop(previous, None)
        self._handles[user_id] = handle
        self._users[handle] = user_id
        return previous if previous != handle else None

    def unregister(self, handle: str) -> int | None:
        user_id = self._users.pop(handle, None)
        if user_id is None or self._handles.get(user_id) != handle:
            return None
        del self._handles[user_id]
        return user_id

    def lookup(self, user_id: int) -> str | None:
        return self._handles.get(user_id)

    def snapshot(self) -> dict[int, str]:
        return dict(self._handles)

    def clear(self) -> None:
        self._handles.clear()
        self._users.clear()


@lru_cache(maxsize=1)
def get_presence_store() -> PresenceStore:
    """Process-wide store built from ``settings.REALTIME_PRESENCE_STORE``."""
    store_class = import_string(settings.REALTIME_PRESENCE_STORE)
    return store_class()
