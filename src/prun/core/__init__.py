"""Task model, loading and expansion."""

from prun.core.expander import expand, expand_all
from prun.core.loader import load_tasks
from prun.core.models import ConcreteInvocation, ConfigurationError, RangeStepError, Task

__all__ = [
    "ConcreteInvocation",
    "ConfigurationError",
    "RangeStepError",
    "Task",
    "expand",
    "expand_all",
    "load_tasks",
]
