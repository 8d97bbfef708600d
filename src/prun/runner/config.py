"""Runner settings.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Command-line flags take precedence over these values.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunnerSettings(BaseSettings):
    """Settings for the sweep runner.

    Environment variables:
    - LOG_LEVEL         (optional)
    - PRUN_NUM_THREADS  (optional)
    - PRUN_OUTPUT       (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `RunnerSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    num_threads: int | None = Field(
        default=None,
        ge=1,
        validation_alias="PRUN_NUM_THREADS",
        description="Default number of concurrent processes (half the CPUs if unset)",
    )

    output_path: Path | None = Field(
        default=None,
        validation_alias="PRUN_OUTPUT",
        description="Default file that result lines are appended to",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )
