"""Read-only per-invocation context handed to every rewrite rule.

Rules never read configuration or the environment themselves; everything
they need is captured here once, which keeps them testable with synthetic
values.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import config, localrepo
from .config import HostConfig
from .errors import ConfigurationError
from .project import GITHUB_HOST, Project


@dataclass(frozen=True)
class Context:
    host_config: HostConfig | None = None
    config_problem: str | None = None
    local_project: Project | None = None
    dir_name: str = ""
    default_host_name: str = GITHUB_HOST

    @property
    def default_host(self) -> str:
        if self.host_config is not None:
            return self.host_config.host
        return self.default_host_name

    @property
    def web_hosts(self) -> tuple[str, ...]:
        hosts = [GITHUB_HOST]
        if self.default_host.lower() != GITHUB_HOST:
            hosts.append(self.default_host.lower())
        return tuple(hosts)

    def require_host(self) -> HostConfig:
        if self.host_config is None:
            raise ConfigurationError(
                self.config_problem or f"No credentials configured for {self.default_host}"
            )
        return self.host_config

    def repo_name(self) -> str:
        if self.local_project is not None:
            return self.local_project.name
        return self.dir_name


def load_context() -> Context:
    """Collect configuration and local repository metadata.

    A configuration problem is recorded rather than raised: only the rules
    that need the default host turn it into a fatal error.
    """
    host_config: HostConfig | None = None
    problem: str | None = None
    try:
        host_config = config.default_host()
    except ConfigurationError as exc:
        problem = str(exc)
    default_name = host_config.host if host_config else config.default_host_name()
    known_hosts = {GITHUB_HOST, default_name}
    return Context(
        host_config=host_config,
        config_problem=problem,
        local_project=localrepo.resolve_current_project(known_hosts),
        dir_name=localrepo.current_dir_name(),
        default_host_name=default_name,
    )


__all__ = ["Context", "load_context"]
