"""Fixed-size pool of worker threads that run invocations as child processes."""

from __future__ import annotations

import logging
import os
import subprocess
import threading
import time
from collections.abc import Callable
from dataclasses import replace

from prun.core.models import ConcreteInvocation
from prun.execution.models import InvocationResult
from prun.execution.sink import ResultSink
from prun.execution.work_queue import WorkQueue

logger = logging.getLogger(__name__)

# Runs one invocation to completion and returns its exit code; any exception is
# recorded as a failure of that invocation.
Launcher = Callable[[ConcreteInvocation], int]


def default_worker_count() -> int:
    """Half the available CPUs, never less than one."""

    return max((os.cpu_count() or 1) // 2, 1)


def resolve_worker_count(requested: int | None, total: int) -> int:
    """Number of workers to start: never more than there are invocations."""

    if requested is not None and requested < 1:
        raise ValueError("worker count must be >= 1")
    wanted = requested if requested is not None else default_worker_count()
    return min(wanted, total)


def launch_process(invocation: ConcreteInvocation) -> int:
    """Run the invocation and wait for it; captured stdout is discarded."""

    completed = subprocess.run(  # noqa: S603
        list(invocation.argv),
        stdout=subprocess.PIPE,
        check=False,
    )
    return completed.returncode


class WorkerPool:
    """Drains a work queue with `size` worker threads.

    Each worker pops an invocation, runs it, records the wall-clock duration,
    and repeats until the queue is empty. A failure to launch or wait for a
    process is recorded against that invocation; the worker moves on.
    """

    def __init__(
        self,
        work: WorkQueue,
        *,
        size: int,
        sink: ResultSink | None = None,
        launcher: Launcher = launch_process,
    ) -> None:
        if size < 0:
            raise ValueError("size must be >= 0")
        self._work = work
        self._size = size
        self._sink = sink
        self._launcher = launcher

    @property
    def size(self) -> int:
        return self._size

    def run(self) -> list[InvocationResult]:
        """Start all workers, block until every one has finished, return results."""

        # One list per worker; a list is only touched by its own thread until join.
        per_worker: list[list[InvocationResult]] = [[] for _ in range(self._size)]
        threads = [
            threading.Thread(
                target=self._work_loop,
                name=f"prun-worker-{index}",
                args=(index, per_worker[index]),
            )
            for index in range(self._size)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        return [result for results in per_worker for result in results]

    def _work_loop(self, index: int, results: list[InvocationResult]) -> None:
        logger.debug("Worker initialized", extra={"worker": index})
        while True:
            invocation = self._work.try_pop_front()
            if invocation is None:
                break

            result = self._run_one(index, invocation)
            if self._sink is not None:
                try:
                    self._sink.submit(result)
                except Exception as e:
                    logger.exception(
                        "Failed to record result",
                        extra={"worker": index, "invocation": invocation.name},
                    )
                    result = replace(result, record_error=str(e))
            results.append(result)

        logger.debug("Worker finished", extra={"worker": index, "completed": len(results)})

    def _run_one(self, index: int, invocation: ConcreteInvocation) -> InvocationResult:
        logger.debug("Running invocation", extra={"worker": index, "invocation": invocation.name})

        start = time.perf_counter()
        try:
            returncode = self._launcher(invocation)
        except (OSError, subprocess.SubprocessError) as e:
            logger.error(
                "Invocation failed to run",
                extra={"worker": index, "invocation": invocation.name, "error": str(e)},
            )
            return InvocationResult(name=invocation.name, argv=invocation.argv, error=str(e))
        except Exception as e:
            logger.exception(
                "Invocation failed to run",
                extra={"worker": index, "invocation": invocation.name},
            )
            return InvocationResult(name=invocation.name, argv=invocation.argv, error=str(e))
        duration = time.perf_counter() - start

        if returncode != 0:
            logger.warning(
                "Invocation exited with non-zero status",
                extra={
                    "worker": index,
                    "invocation": invocation.name,
                    "returncode": returncode,
                },
            )
        logger.debug(
            "Completed invocation",
            extra={"worker": index, "invocation": invocation.name, "duration": duration},
        )
        return InvocationResult(
            name=invocation.name,
            argv=invocation.argv,
            duration=duration,
            returncode=returncode,
        )
