#!/usr/bin/env python3
"""Programmatic sweep example.

This demonstrates using the runner components directly:

* load tasks from a config file
* expand them into concrete invocations
* run them on a worker pool, appending results to a file
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from prun.core.expander import expand_all
from prun.core.loader import load_tasks
from prun.execution.pool import WorkerPool, resolve_worker_count
from prun.execution.sink import ResultSink
from prun.execution.work_queue import WorkQueue
from prun.runner.config import RunnerSettings
from prun.runner.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a parameter sweep (programmatic example).")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(__file__).with_name("sweep.toml"),
        help="Task config file",
    )
    parser.add_argument("--output", type=Path, default=Path("results.txt"), help="Result file")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = RunnerSettings()
    configure_logging(settings.log_level)

    invocations = expand_all(load_tasks(args.config))
    size = resolve_worker_count(settings.num_threads, len(invocations))

    with ResultSink.open(args.output) as sink:
        results = WorkerPool(WorkQueue(invocations), size=size, sink=sink).run()

    for result in sorted(results, key=lambda r: r.name):
        print(f"{result.name}: {result.duration}")
    print(f"Appended {len(results)} results to: {args.output}")
    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
