"""Pytest configuration for ghwrap tests.

Ensures the in-repo `src` directory is on `sys.path` so the package can be
imported without an editable install (`pip install -e .`), and isolates every
test from the developer's real git/GitHub environment.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ghwrap.args import Command  # noqa: E402
from ghwrap.config import HostConfig  # noqa: E402
from ghwrap.context import Context  # noqa: E402
from ghwrap.executor import CompletedRun  # noqa: E402
from ghwrap.logging import configure_logging  # noqa: E402
from ghwrap.project import Project  # noqa: E402

_ENV_VARS = (
    "GITHUB_USER",
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "GITHUB_ACCESS_TOKEN",
    "GITHUB_HOST",
    "GHWRAP_GIT",
    "GHWRAP_DEBUG",
    "GHWRAP_LOG_JSON",
    "GHWRAP_LOG_LEVEL",
    "GHWRAP_LOAD_DOTENV",
    "XDG_CONFIG_HOME",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GHWRAP_CONFIG", str(tmp_path / "ghwrap-hosts.yml"))
    configure_logging(json_logging=False, level="WARNING")


class FakeRunner:
    """Records every command instead of spawning processes."""

    def __init__(self, exit_codes: dict[str, int] | None = None, main_exit: int = 0) -> None:
        self.exit_codes = dict(exit_codes or {})
        self.main_exit = main_exit
        self.calls: list[tuple[str, list[str]]] = []

    def run(self, cmd: Command) -> CompletedRun:
        self.calls.append(("run", cmd.argv()))
        code = self.exit_codes.get(cmd.executable, 0)
        return CompletedRun(code, "", "boom\n" if code else "")

    def run_inheriting_io(self, cmd: Command) -> int:
        self.calls.append(("main", cmd.argv()))
        return self.main_exit


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    return FakeRunner


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def ctx() -> Context:
    return Context(
        host_config=HostConfig(host="github.com", user="octocat"),
        local_project=Project("octocat", "hello-world", "github.com"),
        dir_name="checkout",
    )
