"""Load task configuration files.

Files are TOML unless the suffix is `.json`. The top level maps task names to
task records with `command` and `args` fields.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from prun.core.models import Argument, ConfigurationError, Task

logger = logging.getLogger(__name__)


class TaskRecord(BaseModel):
    """A task as written in the configuration file (the name is the key)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    command: str = Field(min_length=1)
    args: tuple[Argument, ...] = ()


_TASKS_ADAPTER: TypeAdapter[dict[str, TaskRecord]] = TypeAdapter(dict[str, TaskRecord])


def parse_tasks(raw: Any) -> dict[str, Task]:
    """Validate an already-decoded mapping into tasks keyed by name."""

    records = _TASKS_ADAPTER.validate_python(raw)
    return {
        name: Task(name=name, command=record.command, args=record.args)
        for name, record in records.items()
    }


def _decode(path: Path, text: str) -> Any:
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return tomllib.loads(text)


def load_tasks(path: Path) -> dict[str, Task]:
    """Read, decode and validate a configuration file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed.
    """

    if not path.exists():
        raise ConfigurationError(f"Could not find config file '{path}'")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to read config file '{path}': {e}") from e

    try:
        raw = _decode(path, text)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to parse config file '{path}': {e}") from e

    try:
        tasks = parse_tasks(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file '{path}':\n{e}") from e

    logger.debug("Loaded tasks", extra={"path": str(path), "task_count": len(tasks)})
    return tasks
