"""Mutable model of one git invocation.

``Args`` splits raw argv into global flags, the subcommand and its
parameters. Rewrite rules edit the parameters in place and may queue
prerequisite commands that have to run before the main git command.

Parameter positions are values, not cached offsets: every lookup by value
re-scans the current parameter list, and an index obtained before a mutation
must be resolved again before it is used.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

NOOP_FLAG = "--noop"

# Global git options whose value may be passed as the following token.
_VALUE_FLAGS = frozenset(
    {
        "-C",
        "-c",
        "--git-dir",
        "--work-tree",
        "--namespace",
        "--exec-path",
        "--config-env",
        "--super-prefix",
    }
)


def default_executable() -> str:
    return os.environ.get("GHWRAP_GIT") or "git"


@dataclass(frozen=True)
class Command:
    """One fully resolved process invocation."""

    executable: str
    args: tuple[str, ...] = ()

    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv())


@dataclass
class Args:
    executable: str = field(default_factory=default_executable)
    global_flags: list[str] = field(default_factory=list)
    command: str | None = None
    params: list[str] = field(default_factory=list)
    noop: bool = False
    _before: list[Command] = field(default_factory=list, repr=False)

    @classmethod
    def from_argv(cls, argv: list[str], executable: str | None = None) -> Args:
        """Build an ``Args`` from raw tokens (without the program name)."""
        global_flags: list[str] = []
        noop = False
        i = 0
        while i < len(argv):
            token = argv[i]
            if not token.startswith("-") or token == "-":
                break
            if token == NOOP_FLAG:
                noop = True
            elif token == "--":
                global_flags.append(token)
                i += 1
                break
            else:
                global_flags.append(token)
                if token in _VALUE_FLAGS and i + 1 < len(argv):
                    i += 1
                    global_flags.append(argv[i])
            i += 1

        command: str | None = None
        params: list[str] = []
        if i < len(argv):
            command = argv[i]
            params = list(argv[i + 1 :])

        return cls(
            executable=executable or default_executable(),
            global_flags=global_flags,
            command=command,
            params=params,
            noop=noop,
        )

    # --- parameter access ---------------------------------------------
    def first_param(self) -> str | None:
        return self.params[0] if self.params else None

    def last_param(self) -> str | None:
        return self.params[-1] if self.params else None

    def is_params_empty(self) -> bool:
        return not self.params

    def params_size(self) -> int:
        return len(self.params)

    def index_of_param(self, value: str) -> int:
        for idx, param in enumerate(self.params):
            if param == value:
                return idx
        return -1

    def words(self) -> list[str]:
        """Parameters that are not flags (do not start with ``-``)."""
        return [p for p in self.params if not p.startswith("-")]

    # --- parameter mutation -------------------------------------------
    def replace_param(self, index: int, value: str) -> None:
        self._check_index(index)
        self.params[index] = value

    def remove_param(self, index: int) -> str:
        self._check_index(index)
        return self.params.pop(index)

    def append_params(self, *values: str) -> None:
        self.params.extend(values)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.params):
            raise IndexError(f"parameter index {index} out of range ({len(self.params)} params)")

    # --- command queue ------------------------------------------------
    def insert_prerequisite(self, executable: str, *args: str) -> None:
        """Queue a command that must finish before the main command runs."""
        self._before.append(Command(executable, tuple(args)))

    @property
    def prerequisites(self) -> tuple[Command, ...]:
        return tuple(self._before)

    def to_cmd(self) -> Command:
        parts = list(self.global_flags)
        if self.command is not None:
            parts.append(self.command)
        parts.extend(self.params)
        return Command(self.executable, tuple(parts))

    def commands(self) -> list[Command]:
        return [*self._before, self.to_cmd()]


__all__ = ["Args", "Command", "NOOP_FLAG", "default_executable"]
