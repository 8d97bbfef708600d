"""Append-only result log shared by all workers.

One line per finished invocation:

    <display name>: <seconds>s
    <display name>: FAILED (<reason>)

Every line is flushed as soon as it is written, so an interrupted run leaves a
complete prefix of results.
"""

from __future__ import annotations

import re
import threading
from pathlib import Path
from types import TracebackType
from typing import TextIO

from prun.execution.models import InvocationResult

FAILED_MARKER = "FAILED"

_RESULT_LINE = re.compile(
    r"^(?P<name>.+): (?:(?P<seconds>\d+\.\d{6})s|" + FAILED_MARKER + r" \((?P<reason>.*)\))$"
)


def format_result_line(result: InvocationResult) -> str:
    if result.duration is None:
        reason = " ".join((result.error or "unknown error").split())
        return f"{result.name}: {FAILED_MARKER} ({reason})"
    return f"{result.name}: {result.duration:.6f}s"


def parse_result_line(line: str) -> tuple[str, float | None]:
    """Parse a result line into `(name, seconds)`; seconds is None for failures.

    Raises:
        ValueError: If the line is not a result line.
    """

    match = _RESULT_LINE.match(line.rstrip("\n"))
    if match is None:
        raise ValueError(f"Not a result line: {line!r}")
    seconds = match.group("seconds")
    return match.group("name"), float(seconds) if seconds is not None else None


class ResultSink:
    """Serializes result lines from concurrent workers onto one stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    @classmethod
    def open(cls, path: Path) -> ResultSink:
        """Open `path` for appending, creating it if needed."""

        return cls(path.open("a", encoding="utf-8"))

    def submit(self, result: InvocationResult) -> None:
        line = format_result_line(result) + "\n"
        with self._lock:
            self._stream.write(line)
            self._stream.flush()

    def close(self) -> None:
        with self._lock:
            self._stream.close()

    def __enter__(self) -> ResultSink:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
