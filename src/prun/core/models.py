"""Task model for parameter sweeps.

A task is a named command template plus an ordered list of arguments. Each
argument is one of three variants, encoded in configuration files as an
adjacently tagged value (`type` discriminator, `content` payload):

- `Static`: one fixed token
- `Choice`: one branch per listed value
- `Range`: one branch per value of a numeric sweep (integer or float)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, StrictInt


class ConfigurationError(ValueError):
    """Raised when a task configuration cannot be loaded or expanded."""


class RangeStepError(ConfigurationError):
    """Raised for a range that would never reach its upper bound."""

    def __init__(self, task_name: str, position: int, step: float) -> None:
        super().__init__(
            f"Task '{task_name}': range argument #{position} has step {step}; "
            "step must be > 0 when from <= to"
        )
        self.task_name = task_name
        self.position = position
        self.step = step


class RangeSizeError(ConfigurationError):
    """Raised for a range with more values than a run can hold."""

    def __init__(self, task_name: str, position: int, count: float, limit: int) -> None:
        super().__init__(
            f"Task '{task_name}': range argument #{position} has {count} values; "
            f"at most {limit} are allowed"
        )
        self.task_name = task_name
        self.position = position
        self.count = count


class IntRange(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    from_: StrictInt = Field(alias="from")
    to: StrictInt
    step: StrictInt
    prefix: str | None = None


class FloatRange(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    from_: FiniteFloat = Field(alias="from")
    to: FiniteFloat
    step: FiniteFloat
    prefix: str | None = None


class StaticArgument(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["Static"] = "Static"
    content: str


class ChoiceArgument(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["Choice"] = "Choice"
    content: tuple[str, ...]


class RangeArgument(BaseModel):
    """A numeric sweep.

    Integer and float payloads share field names; a payload is an integer range
    only when every numeric field is an integer.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["Range"] = "Range"
    content: IntRange | FloatRange = Field(union_mode="left_to_right")


Argument = Annotated[
    StaticArgument | ChoiceArgument | RangeArgument,
    Field(discriminator="type"),
]


class Task(BaseModel):
    """A named command template.

    Argument order fixes both the argv order and the enumeration order of the
    cross product.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    command: str = Field(min_length=1)
    args: tuple[Argument, ...] = ()


@dataclass(frozen=True, slots=True)
class ConcreteInvocation:
    """One fully resolved command produced by expanding a task."""

    name: str
    command: str
    args: tuple[str, ...]

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.command, *self.args)
