"""Resolved remote repository target and its canonical git URLs."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

GITHUB_HOST = "github.com"
HTTPS_PROTOCOL = "https"

_GIT_SUFFIX = ".git"


def resolve_visibility(
    explicit_private: bool, owner: str, user: str | None, host: str
) -> bool:
    """Private URL form is used when asked for, for the user's own repos,
    and for every host other than the public one.
    """
    if explicit_private:
        return True
    if user and owner.lower() == user.lower():
        return True
    return host.lower() != GITHUB_HOST


@dataclass(frozen=True)
class Project:
    owner: str
    name: str
    host: str = GITHUB_HOST

    @classmethod
    def create(cls, owner: str, name: str, host: str | None, default_host: str) -> Project:
        return cls(owner=owner, name=name, host=host or default_host)

    def git_url(self, private: bool, protocol: str | None = None) -> str:
        if protocol == HTTPS_PROTOCOL:
            return f"https://{self.host}/{self.owner}/{self.name}.git"
        if private:
            return f"git@{self.host}:{self.owner}/{self.name}.git"
        return f"git://{self.host}/{self.owner}/{self.name}.git"

    @classmethod
    def from_url(cls, url: str) -> Project | None:
        """Parse a configured remote URL (scp-like, ssh, git, http(s))."""
        url = url.strip()
        if not url:
            return None
        if "://" in url:
            try:
                parts = urlsplit(url)
            except ValueError:
                return None
            host = parts.hostname or ""
            path = parts.path
        else:
            # scp-like syntax: [user@]host:owner/name.git
            hostpart, sep, path = url.partition(":")
            if not sep or "/" in hostpart:
                return None
            host = hostpart.rpartition("@")[2]
        path = path.strip("/")
        if path.endswith(_GIT_SUFFIX):
            path = path[: -len(_GIT_SUFFIX)]
        segments = path.split("/")
        if not host or len(segments) != 2 or not all(segments):  # noqa: PLR2004
            return None
        owner, name = segments
        return cls(owner=owner, name=name, host=host.lower())

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


__all__ = ["GITHUB_HOST", "HTTPS_PROTOCOL", "Project", "resolve_visibility"]
