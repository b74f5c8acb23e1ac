from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest

from ghwrap import git
from ghwrap.errors import GitError
from ghwrap.localrepo import current_dir_name, resolve_current_project


class _Result:
    def __init__(self, stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr


def _fake_run(outputs: dict[tuple[str, ...], _Result], seen: list[list[str]]):
    def run(cmd, **kwargs):
        seen.append(list(cmd))
        return outputs[tuple(cmd[1:])]

    return run


def test_remotes_prefers_fetch_urls(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[list[str]] = []
    output = (
        "origin\tgit@github.com:jingweno/gh.git (fetch)\n"
        "origin\tgit@github.com:jingweno/gh-push.git (push)\n"
        "upstream\thttps://github.com/github/hub.git (push)\n"
    )
    monkeypatch.setattr(
        subprocess, "run", _fake_run({("remote", "-v"): _Result(output)}, seen)
    )

    assert git.remotes() == {
        "origin": "git@github.com:jingweno/gh.git",
        "upstream": "https://github.com/github/hub.git",
    }
    assert seen == [["git", "remote", "-v"]]


def test_root_dir(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[list[str]] = []
    outputs = {("rev-parse", "--show-toplevel"): _Result("/work/hello-world\n")}
    monkeypatch.setattr(subprocess, "run", _fake_run(outputs, seen))

    assert git.root_dir() == Path("/work/hello-world")
    assert seen == [["git", "rev-parse", "--show-toplevel"]]


def test_non_zero_exit_is_git_error(monkeypatch: pytest.MonkeyPatch) -> None:
    outputs = {
        ("rev-parse", "--show-toplevel"): _Result("", 128, "fatal: not a git repository\n"),
    }
    monkeypatch.setattr(subprocess, "run", _fake_run(outputs, []))

    with pytest.raises(GitError, match="not a git repository"):
        git.root_dir()


def test_missing_git_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GHWRAP_GIT", "ghwrap-definitely-missing-git")
    with pytest.raises(GitError, match="Can't run"):
        git.remotes()


@pytest.mark.skipif(os.name == "nt", reason="needs a POSIX shell script as git")
def test_undecodable_output_degrades(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    fake_git = tmp_path / "git"
    fake_git.write_bytes(
        b"#!/bin/sh\n"
        b'case "$1" in\n'
        b"  remote) printf 'origin\\t/srv/caf\\351/x.git (fetch)\\n' ;;\n"
        b"  rev-parse) printf '/srv/caf\\351\\n' ;;\n"
        b"esac\n"
    )
    fake_git.chmod(0o755)
    monkeypatch.setenv("GHWRAP_GIT", str(fake_git))

    assert list(git.remotes()) == ["origin"]
    assert resolve_current_project() is None
    assert current_dir_name().startswith("caf")
