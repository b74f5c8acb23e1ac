"""Read-only git queries used to discover local repository metadata."""

from __future__ import annotations

import subprocess  # nosec B404 - git must be invoked as a subprocess
from pathlib import Path

from .args import default_executable
from .errors import GitError


def git_output(*args: str, cwd: str | Path | None = None) -> list[str]:
    """Run ``git ARGS`` and return its non-empty, stripped output lines.

    Bytes that are not valid in the locale encoding are replaced.
    """
    cmd = [default_executable(), *args]
    try:
        result = subprocess.run(  # nosec B603 - arguments are controlled
            cmd, cwd=cwd, capture_output=True, text=True, errors="replace", check=False
        )
    except OSError as exc:
        raise GitError(f"Can't run {' '.join(cmd)}: {exc}") from exc
    if result.returncode != 0:
        raise GitError(f"{' '.join(cmd)} failed: {result.stderr.strip()}")
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def root_dir() -> Path:
    output = git_output("rev-parse", "--show-toplevel")
    if not output:
        raise GitError("Not a git repository (or any of the parent directories): .git")
    return Path(output[0])


def remotes() -> dict[str, str]:
    """Map remote name to fetch URL (from ``git remote -v``)."""
    found: dict[str, str] = {}
    for line in git_output("remote", "-v"):
        parts = line.split()
        if len(parts) < 2:  # noqa: PLR2004
            continue
        name, url = parts[0], parts[1]
        is_fetch = len(parts) < 3 or parts[2] == "(fetch)"  # noqa: PLR2004
        if is_fetch or name not in found:
            found[name] = url
    return found


__all__ = ["git_output", "remotes", "root_dir"]
