"""``apply`` / ``am``: operate on a pull request, commit or gist by URL.

    $ ghwrap apply https://github.com/jingweno/gh/pull/55
    > curl -#LA "ghwrap VERSION" https://github.com/jingweno/gh/pull/55.patch -o /tmp/55.patch
    > git apply /tmp/55.patch

    $ ghwrap am -3 https://github.com/jingweno/gh/commit/fdb9921
    > curl ... https://github.com/jingweno/gh/commit/fdb9921.patch -o /tmp/fdb9921.patch
    > git am -3 /tmp/fdb9921.patch

    $ ghwrap apply https://gist.github.com/8da7fb575debd88c54cf
    > curl ... https://gist.github.com/8da7fb575debd88c54cf.txt -o /tmp/gist-8da7fb575debd88c54cf.txt
    > git apply /tmp/gist-8da7fb575debd88c54cf.txt
"""

from __future__ import annotations

import os
import posixpath
import string
import tempfile

from .args import Args
from .context import Context
from .logging import get_logger
from .patterns import WebResource, parse_web_resource

FETCH_EXECUTABLE = "curl"
PATCH_EXT = ".patch"
GIST_EXT = ".txt"
GIST_FILE_PREFIX = "gist-"

_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_DIGITS = frozenset(string.digits)


def user_agent() -> str:
    from . import __version__  # noqa: PLC0415

    return f"ghwrap {__version__}"


def _collapse_pull_subpath(url: str) -> str:
    """``.../pull/55/files`` (or ``/commits``, or a trailing ``/``) -> ``.../pull/55``."""
    head, sep, last = url.rpartition("/")
    if not sep or not all(c in _WORD_CHARS for c in last):
        return url
    parent, sep, number = head.rpartition("/")
    if not sep or not number or not all(c in _DIGITS for c in number):
        return url
    if not parent.endswith("/pull"):
        return url
    return head


def patch_url(resource: WebResource) -> str:
    url = resource.url
    base, _, fragment = url.partition("#")
    # a lone trailing "#" is not a fragment
    if fragment:
        url = base
    if not resource.gist:
        url = _collapse_pull_subpath(url)
    ext = GIST_EXT if resource.gist else PATCH_EXT
    if posixpath.splitext(url)[1] != ext:
        url += ext
    return url


def patch_file_for(url: str, gist: bool, tmpdir: str | None = None) -> str:
    prefix = GIST_FILE_PREFIX if gist else ""
    return os.path.join(tmpdir or tempfile.gettempdir(), prefix + posixpath.basename(url))


def transform_apply_args(args: Args, ctx: Context, tmpdir: str | None = None) -> None:
    for param in list(args.params):
        resource = parse_web_resource(param, ctx.web_hosts)
        if resource is None:
            continue
        url = patch_url(resource)
        patch_file = patch_file_for(url, resource.gist, tmpdir)
        args.insert_prerequisite(FETCH_EXECUTABLE, "-#LA", user_agent(), url, "-o", patch_file)
        idx = args.index_of_param(param)
        args.replace_param(idx, patch_file)
        get_logger().debug("patch fetch queued", rule="apply", url=url, path=patch_file)
        break


__all__ = ["patch_file_for", "patch_url", "transform_apply_args", "user_agent"]
