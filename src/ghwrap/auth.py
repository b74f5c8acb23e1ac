"""Access token discovery for the GitHub API commands.

Tokens come from the hosts configuration first, then from the usual
environment variables. With ``GHWRAP_LOAD_DOTENV=1`` a ``.env`` file in the
working directory is loaded before the environment is consulted.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .config import HostConfig
from .logging import get_logger

DOTENV_ENV = "GHWRAP_LOAD_DOTENV"
TOKEN_VARS = ("GITHUB_TOKEN", "GH_TOKEN", "GITHUB_ACCESS_TOKEN")


@dataclass
class TokenSource:
    load_dotenv: bool = field(default_factory=lambda: os.environ.get(DOTENV_ENV) == "1")
    dotenv_locations: tuple[str, ...] = (".env", ".env.local")
    token_vars: tuple[str, ...] = TOKEN_VARS


class TokenResolver:
    def __init__(self, source: TokenSource | None = None):
        self.source = source or TokenSource()
        self.logger = get_logger()
        self._dotenv_loaded = False
        if self.source.load_dotenv:
            self._load_dotenv()

    def _load_dotenv(self) -> None:
        for location in self.source.dotenv_locations:
            env_path = Path(location)
            if env_path.exists():
                load_dotenv(str(env_path))
                self._dotenv_loaded = True
                self.logger.debug(f"Loaded environment variables from {env_path}")
                break

    def token_for(self, host: HostConfig | None) -> str | None:
        if host is not None and host.access_token:
            self.logger.debug("Using token from hosts configuration", host=host.host)
            return host.access_token
        for name in self.source.token_vars:
            token = (os.environ.get(name) or "").strip()
            if token:
                self.logger.debug(f"Found GitHub token in {name}")
                return token
        return None


__all__ = ["TokenResolver", "TokenSource", "TOKEN_VARS"]
