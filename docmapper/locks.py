from __future__ import annotations

import threading
from typing import Hashable


class LockRegistry:
    """
    Provides a stable lock per key (collection namespace, resolved file path)
    so unrelated collections never contend.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}

    def lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock


GLOBAL_PATH_LOCKS = LockRegistry()
