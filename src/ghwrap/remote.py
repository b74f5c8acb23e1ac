"""``remote add|set-url``: expand ``OWNER[/NAME]`` into a full remote URL.

    $ ghwrap remote add jingweno
    > git remote add jingweno git://github.com/jingweno/REPO.git

    $ ghwrap remote add origin
    > git remote add origin git@github.com:YOUR_USER/REPO.git

    $ ghwrap remote set-url -p upstream jingweno/gh
    > git remote set-url upstream git@github.com:jingweno/gh.git

``REPO`` is the current project's name, or the working directory's name when
no GitHub remote is configured. ``-p`` (deprecated) asks for the ssh URL.
"""

from __future__ import annotations

from .args import Args
from .context import Context
from .logging import get_logger
from .patterns import OwnerAndName, parse_owner_spec
from .project import Project, resolve_visibility

PRIVATE_FLAG = "-p"
ORIGIN = "origin"
SUB_KEYS = frozenset({"add", "set-url"})


def pop_private_flag(args: Args) -> bool:
    idx = args.index_of_param(PRIVATE_FLAG)
    if idx == -1:
        return False
    args.remove_param(idx)
    return True


def transform_remote_args(args: Args, ctx: Context) -> None:
    words = args.words()
    # the sub-key itself is never a remote target
    if len(words) < 2:  # noqa: PLR2004
        return
    target = parse_owner_spec(args.last_param())
    if target is None:
        return

    owner = target.owner
    name = target.name if isinstance(target, OwnerAndName) else ""
    host: str | None = None
    if not name:
        name = ctx.repo_name()
        if ctx.local_project is not None:
            host = ctx.local_project.host

    host_config = ctx.require_host()

    is_private = pop_private_flag(args)
    if len(words) == 2 and words[1] == ORIGIN:  # noqa: PLR2004
        owner = host_config.user
    elif len(words) == 2:  # noqa: PLR2004
        # ghwrap remote add jingweno/foo -> remote named "jingweno"
        idx = args.index_of_param(words[1])
        if idx != -1:
            args.replace_param(idx, owner)
    else:
        args.remove_param(args.params_size() - 1)

    if owner.lower() == host_config.user.lower():
        owner = host_config.user

    project = Project.create(owner, name, host, ctx.default_host)
    is_private = resolve_visibility(is_private, owner, host_config.user, project.host)
    url = project.git_url(is_private, protocol=host_config.protocol)
    get_logger().debug(
        "remote target resolved", rule="remote", project=str(project), private=is_private
    )
    args.append_params(url)


__all__ = ["SUB_KEYS", "pop_private_flag", "transform_remote_args"]
