"""Shared FIFO of invocations drained by the worker pool."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterable

from prun.core.models import ConcreteInvocation


class WorkQueue:
    """A mutex-guarded deque filled once, then only popped.

    All items are supplied at construction; there is no push operation, so a
    worker that sees the queue empty can stop for good.
    """

    def __init__(self, invocations: Iterable[ConcreteInvocation]) -> None:
        self._items: deque[ConcreteInvocation] = deque(invocations)
        self._lock = threading.Lock()

    def try_pop_front(self) -> ConcreteInvocation | None:
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
