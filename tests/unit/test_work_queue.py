"""Unit tests for the shared work queue."""

from __future__ import annotations

import threading
from collections import Counter

from prun.core.models import ConcreteInvocation
from prun.execution.work_queue import WorkQueue


def _invocations(count: int) -> list[ConcreteInvocation]:
    return [ConcreteInvocation(name=f"t {i}", command="echo", args=(str(i),)) for i in range(count)]


def test_pops_in_fifo_order_then_reports_empty() -> None:
    items = _invocations(3)
    queue = WorkQueue(items)

    assert len(queue) == 3
    assert [queue.try_pop_front() for _ in range(3)] == items
    assert queue.try_pop_front() is None
    assert len(queue) == 0


def test_concurrent_consumers_take_every_item_exactly_once() -> None:
    items = _invocations(5000)
    queue = WorkQueue(items)
    popped: list[list[ConcreteInvocation]] = [[] for _ in range(8)]
    start = threading.Barrier(8)

    def consume(bucket: list[ConcreteInvocation]) -> None:
        start.wait()
        while (item := queue.try_pop_front()) is not None:
            bucket.append(item)

    threads = [threading.Thread(target=consume, args=(bucket,)) for bucket in popped]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    counts = Counter(item.name for bucket in popped for item in bucket)
    assert len(counts) == len(items)
    assert set(counts.values()) == {1}
