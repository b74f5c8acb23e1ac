"""Command queue executor.

    RAW -> PASSTHROUGH -> EXECUTE_MAIN -> DONE|FAILED
    RAW -> MATCHED -> REWRITTEN -> EXECUTE_PREREQS -> EXECUTE_MAIN -> DONE|FAILED

Prerequisites run one at a time, in the order they were queued, with their
output captured. The first one that exits non-zero stops the pipeline. The
main command inherits the terminal and its exit code is returned unchanged.
"""

from __future__ import annotations

import shlex
import subprocess  # nosec B404 - running git and its helpers is the point
import sys
from dataclasses import dataclass
from typing import Protocol, TextIO

from .args import Args, Command
from .errors import EXIT_COMMAND_NOT_FOUND, PrerequisiteFailure
from .logging import get_logger


@dataclass(frozen=True)
class CompletedRun:
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        return self.stdout + self.stderr


class ProcessRunner(Protocol):  # pragma: no cover - interface only
    def run(self, cmd: Command) -> CompletedRun: ...

    def run_inheriting_io(self, cmd: Command) -> int: ...


class SubprocessRunner:
    """Blocking child processes; no timeouts, no retries."""

    def run(self, cmd: Command) -> CompletedRun:
        try:
            result = subprocess.run(  # nosec B603 - argv list, no shell
                cmd.argv(), capture_output=True, text=True, check=False
            )
        except OSError as exc:
            return CompletedRun(EXIT_COMMAND_NOT_FOUND, "", f"{cmd.executable}: {exc}\n")
        return CompletedRun(result.returncode, result.stdout or "", result.stderr or "")

    def run_inheriting_io(self, cmd: Command) -> int:
        try:
            return subprocess.run(cmd.argv(), check=False).returncode  # nosec B603
        except OSError as exc:
            print(f"ghwrap: {cmd.executable}: {exc}", file=sys.stderr)
            return EXIT_COMMAND_NOT_FOUND


def render(cmd: Command) -> str:
    return shlex.join(cmd.argv())


def execute(
    args: Args,
    runner: ProcessRunner | None = None,
    stream: TextIO | None = None,
) -> int:
    """Run queued prerequisites, then the main command; return its exit code.

    Raises ``PrerequisiteFailure`` when a prerequisite fails; in that case
    nothing after it runs.
    """
    runner = runner or SubprocessRunner()
    logger = get_logger()
    main = args.to_cmd()

    if args.noop:
        out = stream or sys.stdout
        for cmd in args.prerequisites:
            logger.log_command(cmd.argv(), stage="prerequisite", noop=True)
            print(render(cmd), file=out)
        logger.log_command(main.argv(), stage="main", noop=True)
        print(render(main), file=out)
        return 0

    for cmd in args.prerequisites:
        logger.log_command(cmd.argv(), stage="prerequisite")
        result = runner.run(cmd)
        if result.exit_code != 0:
            logger.debug(
                "prerequisite failed; skipping the rest of the queue",
                operation="execute",
                exit_code=result.exit_code,
            )
            raise PrerequisiteFailure(cmd.argv(), result.exit_code, result.output)

    logger.log_command(main.argv(), stage="main")
    exit_code = runner.run_inheriting_io(main)
    logger.debug("main command finished", operation="execute", exit_code=exit_code)
    return exit_code


__all__ = ["CompletedRun", "ProcessRunner", "SubprocessRunner", "execute", "render"]
