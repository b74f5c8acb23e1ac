"""Local repository metadata.

Both lookups are best effort: a failure here never aborts the pipeline, it
only triggers the working-directory-name fallback.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from . import git
from .errors import GitError
from .logging import get_logger
from .project import GITHUB_HOST, Project

PREFERRED_REMOTES = ("origin", "github", "upstream")


def pick_project(
    remotes: dict[str, str], known_hosts: Iterable[str] = (GITHUB_HOST,)
) -> Project | None:
    """Choose the main project among configured remotes.

    Only remotes on a known host count. Preferred remote names win;
    otherwise the first such remote.
    """
    hosts = {h.lower() for h in known_hosts}
    for name in PREFERRED_REMOTES:
        url = remotes.get(name)
        if url:
            project = Project.from_url(url)
            if project is not None and project.host in hosts:
                return project
    for url in remotes.values():
        project = Project.from_url(url)
        if project is not None and project.host in hosts:
            return project
    return None


def resolve_current_project(
    known_hosts: Iterable[str] = (GITHUB_HOST,),
    remotes: Callable[[], dict[str, str]] = git.remotes,
) -> Project | None:
    try:
        configured = remotes()
    except GitError as exc:
        get_logger().debug("local project lookup failed", error=str(exc))
        return None
    return pick_project(configured, known_hosts)


def current_dir_name(root: Callable[[], Path] = git.root_dir) -> str:
    try:
        return root().name
    except GitError as exc:
        get_logger().debug("git toplevel lookup failed; using cwd", error=str(exc))
        return Path.cwd().name


__all__ = ["current_dir_name", "pick_project", "resolve_current_project"]
