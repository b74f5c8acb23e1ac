from __future__ import annotations

import pytest

from ghwrap.project import Project, resolve_visibility


def test_git_url_schemes() -> None:
    project = Project("jingweno", "gh")
    assert project.git_url(private=False) == "git://github.com/jingweno/gh.git"
    assert project.git_url(private=True) == "git@github.com:jingweno/gh.git"
    assert project.git_url(private=False, protocol="https") == "https://github.com/jingweno/gh.git"
    assert project.git_url(private=True, protocol="https") == "https://github.com/jingweno/gh.git"


def test_create_falls_back_to_default_host() -> None:
    assert Project.create("a", "b", None, "git.corp.example").host == "git.corp.example"
    assert Project.create("a", "b", "github.com", "git.corp.example").host == "github.com"


@pytest.mark.parametrize(
    "explicit, owner, user, host, expected",
    [
        (False, "jingweno", "octocat", "github.com", False),
        (True, "jingweno", "octocat", "github.com", True),
        (False, "OctoCat", "octocat", "github.com", True),
        (False, "jingweno", None, "github.com", False),
        (False, "jingweno", "octocat", "git.corp.example", True),
    ],
)
def test_resolve_visibility(
    explicit: bool, owner: str, user: str | None, host: str, expected: bool
) -> None:
    assert resolve_visibility(explicit, owner, user, host) is expected


@pytest.mark.parametrize(
    "url",
    [
        "git@github.com:jingweno/gh.git",
        "ssh://git@github.com/jingweno/gh.git",
        "git://github.com/jingweno/gh.git",
        "https://github.com/jingweno/gh",
        "https://github.com/jingweno/gh.git/",
    ],
)
def test_from_url_parses_remote_forms(url: str) -> None:
    assert Project.from_url(url) == Project("jingweno", "gh", "github.com")


@pytest.mark.parametrize(
    "url",
    ["", "/srv/repos/gh.git", "../gh", "https://github.com/jingweno", "git@github.com:a/b/c.git"],
)
def test_from_url_rejects_non_project_urls(url: str) -> None:
    assert Project.from_url(url) is None


def test_str_is_owner_slash_name() -> None:
    assert str(Project("octocat", "hello-world")) == "octocat/hello-world"
