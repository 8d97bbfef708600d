"""Cross-product expansion of tasks into concrete invocations.

Expansion is a depth-first walk over the argument list: `Static` arguments add
one token, `Choice` and `Range` arguments fork once per value in their natural
order. The walk uses an explicit stack so that long argument lists never hit the
recursion limit.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from prun.core.models import (
    Argument,
    ChoiceArgument,
    ConcreteInvocation,
    FloatRange,
    IntRange,
    RangeArgument,
    RangeSizeError,
    RangeStepError,
    StaticArgument,
    Task,
)

# Float ranges include `to` when it is within this many steps of the last value.
FLOAT_RANGE_TOLERANCE = 1e-9

# Float values are rounded before rendering so that e.g. 3 * 0.1 renders as 0.3.
FLOAT_RENDER_DIGITS = 12

# Upper bound on the values of a single range.
MAX_RANGE_VALUES = 1_000_000

# (argv token, display label); a label of None leaves the display name untouched.
_Branch = tuple[str, str | None]


def range_count(spec: IntRange | FloatRange) -> float:
    """Number of values in a range; `math.inf` when it cannot be counted."""

    if spec.from_ > spec.to or spec.step <= 0:
        return 0

    if isinstance(spec, IntRange):
        return (spec.to - spec.from_) // spec.step + 1

    steps = (spec.to - spec.from_) / spec.step + FLOAT_RANGE_TOLERANCE
    if not math.isfinite(steps):
        return math.inf
    return math.floor(steps) + 1


def range_values(spec: IntRange | FloatRange) -> list[int] | list[float]:
    """Return the values of a range in ascending order.

    The caller is expected to have rejected a non-positive step with
    `from <= to`; for such a range this returns an empty list.
    """

    count = range_count(spec)
    if count == 0:
        return []

    if isinstance(spec, IntRange):
        return list(range(spec.from_, spec.to + 1, spec.step))

    return [spec.from_ + i * spec.step for i in range(int(count))]


def format_range_value(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    return repr(round(value, FLOAT_RENDER_DIGITS))


def argument_cardinality(argument: Argument) -> int:
    """Number of branches an argument contributes to the cross product."""

    if isinstance(argument, StaticArgument):
        return 1
    if isinstance(argument, ChoiceArgument):
        return len(argument.content)
    return int(range_count(argument.content))


def _check_range(task: Task, position: int, argument: RangeArgument) -> None:
    spec = argument.content
    if spec.from_ <= spec.to and spec.step <= 0:
        raise RangeStepError(task.name, position, spec.step)
    count = range_count(spec)
    if count > MAX_RANGE_VALUES:
        raise RangeSizeError(task.name, position, count, MAX_RANGE_VALUES)


def _branches(argument: Argument) -> list[_Branch]:
    if isinstance(argument, StaticArgument):
        return [(argument.content, None)]

    if isinstance(argument, ChoiceArgument):
        return [(value, value) for value in argument.content]

    prefix = argument.content.prefix or ""
    out: list[_Branch] = []
    for value in range_values(argument.content):
        rendered = format_range_value(value)
        out.append((prefix + rendered, rendered))
    return out


def expand(task: Task) -> list[ConcreteInvocation]:
    """Expand a task into the ordered list of its concrete invocations.

    Raises:
        RangeStepError: If a range has a non-positive step and `from <= to`.
        RangeSizeError: If a range has more than `MAX_RANGE_VALUES` values.
    """

    for position, argument in enumerate(task.args):
        if isinstance(argument, RangeArgument):
            _check_range(task, position, argument)

    branches = [_branches(argument) for argument in task.args]
    depth = len(branches)

    invocations: list[ConcreteInvocation] = []
    stack: list[tuple[int, tuple[str, ...], str]] = [(0, (), task.name)]
    while stack:
        position, tokens, name = stack.pop()
        if position == depth:
            invocations.append(ConcreteInvocation(name=name, command=task.command, args=tokens))
            continue

        # Pushed in reverse so the first value is popped (and emitted) first.
        for token, label in reversed(branches[position]):
            child_name = name if label is None else f"{name} {label}"
            stack.append((position + 1, (*tokens, token), child_name))

    return invocations


def expand_all(tasks: Mapping[str, Task] | Iterable[Task]) -> list[ConcreteInvocation]:
    """Flatten the expansion of every task, in iteration order."""

    items = tasks.values() if isinstance(tasks, Mapping) else tasks
    out: list[ConcreteInvocation] = []
    for task in items:
        out.extend(expand(task))
    return out
