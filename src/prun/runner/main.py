"""CLI entrypoint for the sweep runner."""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from pathlib import Path

from pydantic import ValidationError

from prun import __version__
from prun.core.expander import expand_all
from prun.core.loader import load_tasks
from prun.core.models import ConfigurationError
from prun.execution.pool import WorkerPool, resolve_worker_count
from prun.execution.sink import ResultSink
from prun.execution.work_queue import WorkQueue
from prun.runner.config import RunnerSettings
from prun.runner.logging import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIG = 2
EXIT_OUTPUT = 3
EXIT_INVOCATION_FAILED = 4


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prun",
        description="Run every combination of parameterized commands across parallel processes",
    )
    parser.add_argument("--version", action="version", version=f"prun {__version__}")
    parser.add_argument("file", type=Path, help="Specifies the config file")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Prints debug information while running",
    )
    parser.add_argument(
        "-n",
        "--num-threads",
        type=_positive_int,
        default=None,
        help="Specifies the number of processes that run concurrently (default: half the CPUs)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Specifies the output file that results are appended to",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the expanded commands without running them",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = RunnerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_CONFIG

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        tasks = load_tasks(args.file)
        invocations = expand_all(tasks)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return EXIT_CONFIG

    if args.dry_run:
        for invocation in invocations:
            print(f"{invocation.name}: {shlex.join(invocation.argv)}")
        return EXIT_OK

    if not invocations:
        print(f"[prun] No tasks to run in {args.file}")
        return EXIT_OK

    requested = args.num_threads if args.num_threads is not None else settings.num_threads
    size = resolve_worker_count(requested, len(invocations))

    output = args.output if args.output is not None else settings.output_path
    sink: ResultSink | None = None
    if output is not None:
        try:
            sink = ResultSink.open(output)
        except OSError as e:
            print(f"Failed to open output file '{output}': {e}", file=sys.stderr)
            return EXIT_OUTPUT

    print(f"[prun] Running {len(invocations)} tasks on {size} processes")
    try:
        results = WorkerPool(WorkQueue(invocations), size=size, sink=sink).run()
    except Exception:
        logger.exception("Run failed")
        return EXIT_UNEXPECTED
    finally:
        if sink is not None:
            sink.close()

    failed = [result for result in results if not result.ok]
    unrecorded = [result for result in results if result.record_error is not None]
    print(f"[prun] Completed {len(results) - len(failed)} of {len(results)} tasks")
    for result in failed:
        print(f"[prun] Failed: {result.name}: {result.error}", file=sys.stderr)
    if unrecorded:
        print(
            f"[prun] {len(unrecorded)} results could not be written to '{output}'",
            file=sys.stderr,
        )
        for result in unrecorded:
            print(f"[prun] Not recorded: {result.name}: {result.record_error}", file=sys.stderr)

    if failed:
        return EXIT_INVOCATION_FAILED
    if unrecorded:
        return EXIT_OUTPUT
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
