"""Runtime helpers for ghwrap CLI orchestration."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable
from typing import TextIO

from .errors import GhwrapError, PrerequisiteFailure, classify_error, redact
from .github_rest import GitHubAPIError
from .logging import get_logger
from .ux import print_error

Handler = Callable[[], int]


def report_failure(exc: BaseException, stream: TextIO | None = None) -> int:
    """Print a wrapper error the way users expect and return its exit code."""
    stream = stream or sys.stderr
    info = classify_error(exc)
    if isinstance(exc, PrerequisiteFailure) and exc.output:
        stream.write(redact(exc.output))
        if not exc.output.endswith("\n"):
            stream.write("\n")
    print_error(info.message, stream=stream)
    get_logger().debug(
        "command aborted", operation=info.category, error=info.message, exit_code=info.exit_code
    )
    return info.exit_code


def execute_command(handler: Handler, command: str, stream: TextIO | None = None) -> int:
    """Run a handler, timing it and turning wrapper errors into exit codes.

    Only the wrapper's own errors are caught; the main git command's exit
    code comes back from the handler untouched.
    """
    logger = get_logger()
    start = time.perf_counter()
    try:
        exit_code = int(handler())
    except (GhwrapError, GitHubAPIError) as exc:
        exit_code = report_failure(exc, stream)
    duration = (time.perf_counter() - start) * 1000
    logger.log_performance(command or "git", duration, exit_code=exit_code)
    return exit_code


__all__ = ["execute_command", "report_failure"]
