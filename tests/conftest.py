"""Test configuration and fixtures."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import pytest

from prun.core.models import Task


def make_task(name: str, *args: dict[str, Any], command: str = "echo") -> Task:
    """Build a task from argument dicts as they appear in config files."""
    return Task.model_validate({"name": name, "command": command, "args": list(args)})


def static(value: str) -> dict[str, Any]:
    return {"type": "Static", "content": value}


def choice(*values: str) -> dict[str, Any]:
    return {"type": "Choice", "content": list(values)}


def int_range(start: int, stop: int, step: int, prefix: str | None = None) -> dict[str, Any]:
    content: dict[str, Any] = {"from": start, "to": stop, "step": step}
    if prefix is not None:
        content["prefix"] = prefix
    return {"type": "Range", "content": content}


def float_range(
    start: float, stop: float, step: float, prefix: str | None = None
) -> dict[str, Any]:
    content: dict[str, Any] = {"from": start, "to": stop, "step": step}
    if prefix is not None:
        content["prefix"] = prefix
    return {"type": "Range", "content": content}


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's environment and `.env` out of the tests."""
    for var in ("LOG_LEVEL", "PRUN_NUM_THREADS", "PRUN_OUTPUT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def python_exe() -> str:
    """An executable that exists wherever the tests run."""
    return sys.executable


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a config file into a temporary directory and return its path."""

    def _write(text: str, name: str = "tasks.toml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Undo `configure_logging` so handlers never outlive a captured stream."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
