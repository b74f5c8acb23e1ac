from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import yaml

from .errors import ConfigurationError
from .project import GITHUB_HOST

CONFIG_ENV = "GHWRAP_CONFIG"
CONFIG_FILENAME = "ghwrap"


@dataclass(frozen=True)
class HostConfig:
    host: str
    user: str
    access_token: str | None = None
    protocol: str | None = None


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / CONFIG_FILENAME


def default_host_name() -> str:
    return (os.environ.get("GITHUB_HOST") or "").strip() or GITHUB_HOST


def load_hosts(path: str | Path | None = None) -> dict[str, HostConfig]:
    """Read the hosts file; a missing file is an empty configuration.

    Layout (one list entry per host, first entry wins)::

        github.com:
        - user: octocat
          oauth_token: abc123
          protocol: https
    """
    p = Path(path) if path is not None else config_path()
    if not p.exists():
        return {}
    try:
        raw_any = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid hosts configuration {p}: {exc}") from exc
    if not isinstance(raw_any, dict):
        raise ConfigurationError(f"Hosts configuration {p} must be a mapping of host names")
    raw = cast(dict[str, Any], raw_any)

    hosts: dict[str, HostConfig] = {}
    for host, entries in raw.items():
        if isinstance(entries, list):
            entry = entries[0] if entries else {}
        else:
            entry = entries
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Entry for {host} in {p} must be a mapping")
        user = entry.get("user")
        if not isinstance(user, str) or not user.strip():
            raise ConfigurationError(f"No user configured for {host} in {p}")
        token = entry.get("oauth_token")
        protocol = entry.get("protocol")
        key = str(host).lower()
        hosts[key] = HostConfig(
            host=key,
            user=user.strip(),
            access_token=str(token) if token else None,
            protocol=str(protocol) if protocol else None,
        )
    return hosts


def default_host(path: str | Path | None = None) -> HostConfig:
    """Resolve the default host entry and the user authenticated against it.

    ``GITHUB_USER`` / ``GITHUB_TOKEN`` override (or stand in for) the file.
    """
    name = default_host_name().lower()
    entry = load_hosts(path).get(name)
    env_user = (os.environ.get("GITHUB_USER") or "").strip()
    env_token = (os.environ.get("GITHUB_TOKEN") or "").strip()
    if entry is None:
        if not env_user:
            raise ConfigurationError(
                f"No credentials configured for {name} "
                f"(add it to {config_path()} or set GITHUB_USER)"
            )
        return HostConfig(host=name, user=env_user, access_token=env_token or None)
    if env_user or env_token:
        return HostConfig(
            host=entry.host,
            user=env_user or entry.user,
            access_token=env_token or entry.access_token,
            protocol=entry.protocol,
        )
    return entry


__all__ = [
    "CONFIG_ENV",
    "HostConfig",
    "config_path",
    "default_host",
    "default_host_name",
    "load_hosts",
]
