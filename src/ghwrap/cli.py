"""ghwrap CLI: a drop-in git wrapper with GitHub conveniences.

Usage is exactly git's (alias ``git=ghwrap``). A few invocations gain extra
behavior:

  remote add|set-url [-p] OWNER[/REPO]  -> expand to a full GitHub remote URL
  apply|am GITHUB-URL                   -> fetch the patch, apply the local file
  issue [create -m MSG|-f FILE -l ...]  -> GitHub issues (handled by ghwrap)
  version / --version                   -> git's version plus ghwrap's

Everything else is handed to git untouched. ``--noop`` before the
subcommand prints the commands that would run instead of running them.
"""

from __future__ import annotations

import sys
from collections.abc import Callable

from . import __version__
from .args import Args
from .context import Context, load_context
from .dispatcher import dispatch
from .executor import ProcessRunner, execute
from .issue import run_issue
from .logging import configure_logging, get_logger
from .runtime import execute_command

VERSION_FLAG = "--version"

ContextLoader = Callable[[], Context]


def _is_version(args: Args) -> bool:
    if args.command == "version":
        return True
    return args.command is None and VERSION_FLAG in args.global_flags


def _cmd_git(args: Args, runner: ProcessRunner | None, context_loader: ContextLoader) -> int:
    with get_logger().timed_operation("dispatch", command=args.command):
        dispatch(args, context_loader)
    return execute(args, runner)


def _cmd_version(args: Args, runner: ProcessRunner | None) -> int:
    exit_code = execute(args, runner)
    if exit_code == 0:
        print(f"ghwrap version {__version__}")
        sys.stdout.flush()
    return exit_code


def _cmd_issue(args: Args, context_loader: ContextLoader) -> int:
    get_logger().log_operation("issue", subcommand=args.first_param() or "list")
    return run_issue(args, context_loader())


def _build_handler(
    args: Args, runner: ProcessRunner | None, context_loader: ContextLoader
) -> Callable[[], int]:
    if _is_version(args):
        return lambda: _cmd_version(args, runner)
    if args.command == "issue":
        return lambda: _cmd_issue(args, context_loader)
    return lambda: _cmd_git(args, runner, context_loader)


def main(
    argv: list[str] | None = None,
    *,
    runner: ProcessRunner | None = None,
    context_loader: ContextLoader = load_context,
) -> int:
    raw = list(sys.argv[1:] if argv is None else argv)
    configure_logging()
    args = Args.from_argv(raw)
    handler = _build_handler(args, runner, context_loader)
    return execute_command(handler, args.command or "")


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
