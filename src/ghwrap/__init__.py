"""ghwrap - a drop-in git wrapper with GitHub conveniences.

High-level public API (stable):

from ghwrap import Args, Context, dispatch, execute

args = Args.from_argv(["remote", "add", "jingweno"])
dispatch(args, context)        # rewrite in place (or leave untouched)
exit_code = execute(args)      # prerequisites, then git

The ``ghwrap`` console script wires these together (see ``ghwrap.cli``).
"""

from __future__ import annotations

# Version constant (sync manually with pyproject)
__version__ = "0.3.0"

from .args import Args, Command  # noqa: E402
from .context import Context, load_context  # noqa: E402
from .dispatcher import RULES, Rule, dispatch, find_rule  # noqa: E402
from .errors import ConfigurationError, PrerequisiteFailure  # noqa: E402
from .executor import execute  # noqa: E402
from .project import Project  # noqa: E402

__all__ = [
    "Args",
    "Command",
    "ConfigurationError",
    "Context",
    "PrerequisiteFailure",
    "Project",
    "RULES",
    "Rule",
    "dispatch",
    "execute",
    "find_rule",
    "load_context",
    "__version__",
]
