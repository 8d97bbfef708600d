"""Result types produced by the worker pool."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class InvocationResult:
    """Outcome of running one invocation.

    `duration` is wall-clock seconds from launch to exit. It is None when the
    process could not be launched or its exit could not be observed, in which
    case `error` describes the failure. `record_error` is set when the result
    could not be written to the result sink.
    """

    name: str
    argv: tuple[str, ...]
    duration: float | None = None
    returncode: int | None = None
    error: str | None = None
    record_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
