"""``issue`` and ``issue create``: GitHub issues for the current project.

    $ ghwrap issue
    $ ghwrap issue create -m "Title" [-f FILE] [-l bug,help-wanted]

The project is the one the ``origin`` remote (or another GitHub remote)
points to. These commands never reach git.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TextIO

from .args import Args
from .auth import TokenResolver
from .context import Context
from .errors import UsageError
from .github_rest import GitHubRestClient
from .logging import get_logger
from .project import Project

CREATE_KEY = "create"

ClientFactory = Callable[[Project, Context], GitHubRestClient]


class _IssueArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> Any:  # noqa: D401
        raise UsageError(f"{self.prog}: {message}")


def _build_create_parser() -> argparse.ArgumentParser:
    p = _IssueArgumentParser(prog="ghwrap issue create", add_help=False)
    p.add_argument("-m", "--message", default="")
    p.add_argument("-f", "--file", default="")
    p.add_argument(
        "-l",
        "--label",
        action="append",
        default=[],
        help="Comma separated labels; may be repeated",
    )
    return p


def split_labels(values: Iterable[str]) -> list[str]:
    labels: list[str] = []
    for value in values:
        labels.extend(part.strip() for part in value.split(",") if part.strip())
    return labels


def read_title_and_body(text: str) -> tuple[str, str]:
    """First paragraph is the title (joined on one line), the rest the body.

    Lines starting with ``#`` are comments and dropped.
    """
    title_lines: list[str] = []
    body_lines: list[str] = []
    in_title = True
    for line in text.splitlines():
        if line.startswith("#"):
            continue
        if in_title:
            if line.strip():
                title_lines.append(line.strip())
            elif title_lines:
                in_title = False
        else:
            body_lines.append(line)
    return " ".join(title_lines), "\n".join(body_lines).strip()


def title_and_body_from_flags(message: str, file: str, stdin: TextIO | None = None) -> tuple[str, str]:
    if message:
        return read_title_and_body(message)
    if file:
        if file == "-":
            content = (stdin or sys.stdin).read()
        else:
            try:
                content = Path(file).read_text(encoding="utf-8")
            except OSError as exc:
                raise UsageError(f"Can't read {file}: {exc}") from exc
        return read_title_and_body(content)
    return "", ""


def default_client(project: Project, ctx: Context) -> GitHubRestClient:
    host_config = ctx.host_config
    if host_config is not None and host_config.host != project.host:
        host_config = None
    return GitHubRestClient.for_host(project.host, TokenResolver().token_for(host_config))


def _require_project(ctx: Context) -> Project:
    if ctx.local_project is None:
        raise UsageError("Aborted: could not find any git remote pointing to a GitHub repository")
    return ctx.local_project


def format_issue(issue: dict[str, Any]) -> str:
    pull = issue.get("pull_request")
    url = ""
    if isinstance(pull, dict):
        url = str(pull.get("html_url") or "")
    if not url:
        url = str(issue.get("html_url") or "")
    return f"{int(issue.get('number') or 0):7d}] {issue.get('title', '')} ( {url} )"


def list_issues(args: Args, ctx: Context, client_factory: ClientFactory, out: TextIO) -> int:
    project = _require_project(ctx)
    if args.noop:
        print(f"Would request list of issues for {project}", file=out)
        return 0
    client = client_factory(project, ctx)
    issues = client.list_issues(project)
    get_logger().debug("issues listed", operation="issue_list", count=len(issues))
    for issue in issues:
        print(format_issue(issue), file=out)
    return 0


def create_issue(args: Args, ctx: Context, client_factory: ClientFactory, out: TextIO) -> int:
    opts = _build_create_parser().parse_args(args.params[1:])
    project = _require_project(ctx)
    if args.noop:
        print(f"Would create an issue for {project}", file=out)
        return 0
    title, body = title_and_body_from_flags(opts.message, opts.file)
    if not title:
        raise UsageError("Aborting creation due to empty issue title (use -m or -f)")
    client = client_factory(project, ctx)
    issue = client.create_issue(project, title=title, body=body, labels=split_labels(opts.label))
    get_logger().debug("issue created", operation="issue_create", number=issue.get("number"))
    print(issue.get("html_url", ""), file=out)
    return 0


def run_issue(
    args: Args,
    ctx: Context,
    client_factory: ClientFactory = default_client,
    out: TextIO | None = None,
) -> int:
    out = out or sys.stdout
    if args.first_param() == CREATE_KEY:
        return create_issue(args, ctx, client_factory, out)
    if not args.is_params_empty():
        raise UsageError(f"Unknown issue subcommand: {args.first_param()}")
    return list_issues(args, ctx, client_factory, out)


__all__ = [
    "create_issue",
    "format_issue",
    "list_issues",
    "read_title_and_body",
    "run_issue",
    "split_labels",
]
