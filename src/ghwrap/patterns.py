"""Small fixed grammars used by the rewrite rules.

Each parser returns a tagged result (a dataclass) or ``None`` when the input
is not in the grammar, so callers can branch on the type directly.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from urllib.parse import urlsplit

from .project import GITHUB_HOST

_ALNUM = frozenset(string.ascii_letters + string.digits)
_OWNER_CHARS = _ALNUM | {"-"}
_NAME_CHARS = _ALNUM | {"_", ".", "-"}

GIST_PREFIX = "gist."


@dataclass(frozen=True)
class BareOwner:
    owner: str


@dataclass(frozen=True)
class OwnerAndName:
    owner: str
    name: str


OwnerSpec = BareOwner | OwnerAndName


@dataclass(frozen=True)
class WebResource:
    url: str
    host: str
    gist: bool


def is_owner(token: str) -> bool:
    """``[A-Za-z0-9][A-Za-z0-9-]*``"""
    return bool(token) and token[0] in _ALNUM and all(c in _OWNER_CHARS for c in token)


def is_name(token: str) -> bool:
    """``[A-Za-z0-9_.-]+``"""
    return bool(token) and all(c in _NAME_CHARS for c in token)


def parse_owner_spec(token: str | None) -> OwnerSpec | None:
    """Parse ``OWNER`` or ``OWNER/NAME``; anything else is ``None``."""
    if not token:
        return None
    if is_owner(token):
        return BareOwner(token)
    owner, sep, name = token.partition("/")
    if sep and is_owner(owner) and is_name(name):
        return OwnerAndName(owner, name)
    return None


def parse_web_resource(
    url: str, extra_hosts: tuple[str, ...] = ()
) -> WebResource | None:
    """Recognise ``http(s)://[gist.]github.com/...`` style links.

    ``extra_hosts`` adds further web hosts (GitHub Enterprise installs).
    The host must be followed by a ``/``.
    """
    if not url.startswith(("http://", "https://")):
        return None
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    host = (parts.netloc or "").lower()
    known = {GITHUB_HOST, *(h.lower() for h in extra_hosts)}
    gist = False
    if host.startswith(GIST_PREFIX) and host[len(GIST_PREFIX) :] in known:
        gist = True
    elif host not in known:
        return None
    if not parts.path.startswith("/"):
        return None
    return WebResource(url=url, host=host, gist=gist)


__all__ = [
    "BareOwner",
    "OwnerAndName",
    "OwnerSpec",
    "WebResource",
    "is_name",
    "is_owner",
    "parse_owner_spec",
    "parse_web_resource",
]
