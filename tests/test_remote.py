from __future__ import annotations

import pytest

from ghwrap.args import Args
from ghwrap.config import HostConfig
from ghwrap.context import Context
from ghwrap.errors import ConfigurationError
from ghwrap.remote import pop_private_flag, transform_remote_args


def _rewrite(argv: list[str], ctx: Context) -> list[str]:
    args = Args.from_argv(argv)
    transform_remote_args(args, ctx)
    return args.to_cmd().argv()


def test_bare_owner_uses_current_project_name(ctx: Context) -> None:
    assert _rewrite(["remote", "add", "jingweno"], ctx) == [
        "git",
        "remote",
        "add",
        "jingweno",
        "git://github.com/jingweno/hello-world.git",
    ]


def test_origin_points_at_own_repository(ctx: Context) -> None:
    assert _rewrite(["remote", "add", "origin"], ctx) == [
        "git",
        "remote",
        "add",
        "origin",
        "git@github.com:octocat/hello-world.git",
    ]


def test_owner_and_name_names_remote_after_owner(ctx: Context) -> None:
    assert _rewrite(["remote", "add", "jingweno/gh"], ctx) == [
        "git",
        "remote",
        "add",
        "jingweno",
        "git://github.com/jingweno/gh.git",
    ]


def test_set_url_with_explicit_remote_name_and_private_flag(ctx: Context) -> None:
    assert _rewrite(["remote", "set-url", "-p", "upstream", "jingweno/gh"], ctx) == [
        "git",
        "remote",
        "set-url",
        "upstream",
        "git@github.com:jingweno/gh.git",
    ]


def test_private_flag_with_bare_owner(ctx: Context) -> None:
    assert _rewrite(["remote", "add", "-p", "jingweno"], ctx) == [
        "git",
        "remote",
        "add",
        "jingweno",
        "git@github.com:jingweno/hello-world.git",
    ]


def test_own_owner_is_private_and_case_normalised(ctx: Context) -> None:
    argv = _rewrite(["remote", "add", "mine", "OctoCat/dotfiles"], ctx)
    assert argv[-1] == "git@github.com:octocat/dotfiles.git"
    assert argv[:-1] == ["git", "remote", "add", "mine"]


def test_other_flags_are_kept(ctx: Context) -> None:
    assert _rewrite(["remote", "add", "-f", "upstream", "jingweno/gh"], ctx) == [
        "git",
        "remote",
        "add",
        "-f",
        "upstream",
        "git://github.com/jingweno/gh.git",
    ]


def test_origin_as_explicit_owner_is_a_normal_owner(ctx: Context) -> None:
    assert _rewrite(["remote", "add", "upstream", "origin"], ctx)[-1] == (
        "git://github.com/origin/hello-world.git"
    )


def test_directory_name_when_no_github_remote() -> None:
    ctx = Context(host_config=HostConfig("github.com", "octocat"), dir_name="checkout")
    assert _rewrite(["remote", "add", "jingweno"], ctx)[-1] == (
        "git://github.com/jingweno/checkout.git"
    )


def test_enterprise_default_host_forces_private_url() -> None:
    ctx = Context(
        host_config=HostConfig("git.corp.example", "octocat"),
        dir_name="checkout",
        default_host_name="git.corp.example",
    )
    assert _rewrite(["remote", "add", "jingweno"], ctx)[-1] == (
        "git@git.corp.example:jingweno/checkout.git"
    )


def test_https_protocol_from_host_configuration() -> None:
    ctx = Context(
        host_config=HostConfig("github.com", "octocat", protocol="https"),
        dir_name="checkout",
    )
    assert _rewrite(["remote", "add", "origin"], ctx)[-1] == (
        "https://github.com/octocat/checkout.git"
    )


def test_missing_configuration_fails_before_any_mutation() -> None:
    ctx = Context(config_problem="No credentials configured for github.com", dir_name="x")
    args = Args.from_argv(["remote", "add", "-p", "jingweno"])

    with pytest.raises(ConfigurationError, match="No credentials"):
        transform_remote_args(args, ctx)

    assert args.params == ["add", "-p", "jingweno"]


@pytest.mark.parametrize(
    "argv",
    [
        ["remote", "add"],
        ["remote", "add", "origin", "git@github.com:jingweno/gh.git"],
        ["remote", "set-url", "origin", "https://example.com/a/b.git"],
        ["remote", "add", "upstream", "a/b/c"],
        ["remote", "add", "upstream", "-f"],
    ],
)
def test_unparseable_target_is_left_untouched(argv: list[str]) -> None:
    # no configuration at all: a no-op must not need it
    ctx = Context(config_problem="unconfigured")
    args = Args.from_argv(argv)
    transform_remote_args(args, ctx)
    assert args.to_cmd().argv() == ["git", *argv]


def test_rewrite_is_idempotent(ctx: Context) -> None:
    args = Args.from_argv(["remote", "add", "jingweno"])
    transform_remote_args(args, ctx)
    once = args.to_cmd()
    transform_remote_args(args, ctx)
    assert args.to_cmd() == once


def test_pop_private_flag() -> None:
    args = Args.from_argv(["remote", "add", "-p", "x"])
    assert pop_private_flag(args) is True
    assert args.params == ["add", "x"]
    assert pop_private_flag(args) is False
