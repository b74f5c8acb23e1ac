"""Trigger dispatcher: pick at most one rewrite rule for an invocation.

A wrapper must never alter a command it does not explicitly understand, so
anything that does not match a registered (subcommand, sub-key) pair is left
exactly as typed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from . import apply, remote
from .args import Args
from .context import Context, load_context
from .logging import get_logger

Transform = Callable[[Args, Context], None]


@dataclass(frozen=True)
class Rule:
    name: str
    subcommand: str
    transform: Transform
    sub_keys: frozenset[str] | None = None

    def matches(self, args: Args) -> bool:
        if args.command != self.subcommand or args.is_params_empty():
            return False
        return self.sub_keys is None or args.first_param() in self.sub_keys


RULES: tuple[Rule, ...] = (
    Rule("remote", "remote", remote.transform_remote_args, remote.SUB_KEYS),
    Rule("apply", "apply", apply.transform_apply_args),
    Rule("am", "am", apply.transform_apply_args),
)


def find_rule(args: Args, rules: Iterable[Rule] = RULES) -> Rule | None:
    for rule in rules:
        if rule.matches(args):
            return rule
    return None


def dispatch(
    args: Args,
    context: Context | Callable[[], Context] = load_context,
    rules: Iterable[Rule] = RULES,
) -> Rule | None:
    """Rewrite ``args`` in place with the matching rule, if any.

    ``context`` may be a ready value or a loader; a loader is only called
    once a rule matched so passthrough never reads configuration.
    """
    logger = get_logger()
    rule = find_rule(args, rules)
    if rule is None:
        logger.debug("passthrough", operation="dispatch", command=args.command)
        return None
    ctx = context if isinstance(context, Context) else context()
    logger.debug(f"matched rule {rule.name}", operation="dispatch", rule=rule.name)
    rule.transform(args, ctx)
    return rule


__all__ = ["RULES", "Rule", "dispatch", "find_rule"]
