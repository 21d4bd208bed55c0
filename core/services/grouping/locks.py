from __future__ import annotations

from contextlib import ExitStack, contextmanager
from threading import Lock, RLock
from typing import Hashable, Iterator


class AssignmentLockRegistry:
    """
    Re-entrant lock per (project_id, member_id) pair.

    Every assignment that may be merged with another one shares the same
    project and member, so one key covers the cross-assignment reconcile too.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[Hashable, RLock] = {}

    def lock_for(self, key: Hashable) -> RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, *keys: Hashable) -> Iterator[None]:
        # fixed acquisition order so two multi-key holders cannot deadlock
        ordered = sorted(set(keys), key=repr)
        with ExitStack() as stack:
            for key in ordered:
                stack.enter_context(self.lock_for(key))
            yield


# shared by every service instance in the process
assignment_locks = AssignmentLockRegistry()


__all__ = ["AssignmentLockRegistry", "assignment_locks"]
