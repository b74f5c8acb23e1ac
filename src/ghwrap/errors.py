"""Error taxonomy & redaction helpers.

Every failure the wrapper can surface is classified here so the CLI has a
single place to turn an exception into an exit code and a safe message.

Categories:
- ``configuration`` -> default host / authenticated user missing (exit 2)
- ``prerequisite``  -> a queued command (e.g. curl) exited non-zero; the
  failing command's own exit code becomes the process exit code
- ``usage``         -> malformed wrapper-native command (exit 1)
- ``github.api``    -> REST API error (exit 1)
- ``generic``       -> anything else (exit 1)

A rule that does not match is *not* an error: the invocation simply passes
through untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Simple token patterns; extend as new credential shapes show up
_SENSITIVE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"ghp_[A-Za-z0-9]{20,40}"),  # GitHub classic tokens
    re.compile(r"github_pat_\w{20,}"),  # GitHub fine-grained tokens
    re.compile(r"(?<=://)[^/@\s:]+:[^/@\s]+(?=@)"),  # user:secret@ in URLs
]

_REDACTION_PLACEHOLDER = "<redacted>"

EXIT_GENERIC = 1
EXIT_CONFIGURATION = 2
EXIT_COMMAND_NOT_FOUND = 127


class GhwrapError(RuntimeError):
    """Base class for errors raised by the wrapper itself."""

    exit_code = EXIT_GENERIC


class ConfigurationError(GhwrapError):
    """Default host or authenticated user cannot be resolved."""

    exit_code = EXIT_CONFIGURATION


class UsageError(GhwrapError):
    pass


class GitError(GhwrapError):
    pass


class PrerequisiteFailure(GhwrapError):
    """A queued command exited non-zero; the rest of the pipeline is skipped."""

    def __init__(self, command: list[str], exit_code: int, output: str = "") -> None:
        super().__init__(f"Command failed ({exit_code}): {' '.join(command)}")
        self.command = command
        self.exit_code = exit_code
        self.output = output


@dataclass
class ErrorInfo:
    category: str
    message: str
    original_type: str
    exit_code: int = EXIT_GENERIC


def redact(text: str) -> str:
    """Redact sensitive tokens in arbitrary text."""
    if not text:
        return text
    redacted = text
    for pat in _SENSITIVE_PATTERNS:
        redacted = pat.sub(_REDACTION_PLACEHOLDER, redacted)
    return redacted


def classify_error(exc: BaseException) -> ErrorInfo:
    """Map an exception onto the wrapper's error taxonomy."""
    msg = redact(str(exc) if exc else "")
    name = exc.__class__.__name__

    if isinstance(exc, ConfigurationError):
        return ErrorInfo("configuration", msg, name, exit_code=EXIT_CONFIGURATION)
    if isinstance(exc, PrerequisiteFailure):
        # never report success for a failed prerequisite
        code = exc.exit_code if exc.exit_code != 0 else EXIT_GENERIC
        return ErrorInfo("prerequisite", msg, name, exit_code=code)
    if isinstance(exc, UsageError):
        return ErrorInfo("usage", msg, name)
    if name == "GitHubAPIError":
        return ErrorInfo("github.api", msg, name)
    if isinstance(exc, GhwrapError):
        return ErrorInfo("ghwrap", msg, name, exit_code=exc.exit_code)
    return ErrorInfo("generic", msg, name)


__all__ = [
    "ConfigurationError",
    "ErrorInfo",
    "GhwrapError",
    "GitError",
    "PrerequisiteFailure",
    "UsageError",
    "classify_error",
    "redact",
]
