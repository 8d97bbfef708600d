"""prun: parameter-sweep command runner.

Expands declarative command templates into every combination of their
arguments and runs the resulting commands across a pool of worker processes,
recording how long each one takes.
"""

__version__ = "0.1.0"

from prun.core.expander import expand
from prun.core.models import ConcreteInvocation, Task

__all__ = ["__version__", "ConcreteInvocation", "Task", "expand"]
