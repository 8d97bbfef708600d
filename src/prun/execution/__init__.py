"""Concurrent execution of expanded invocations."""

from prun.execution.models import InvocationResult
from prun.execution.pool import WorkerPool, resolve_worker_count
from prun.execution.sink import ResultSink
from prun.execution.work_queue import WorkQueue

__all__ = [
    "InvocationResult",
    "ResultSink",
    "WorkQueue",
    "WorkerPool",
    "resolve_worker_count",
]
