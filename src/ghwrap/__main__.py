"""Module entrypoint so ``python -m ghwrap`` invokes the CLI.

``run()`` simply calls :func:`ghwrap.cli.main` with the real command line.
"""

from __future__ import annotations

from .cli import main


def run() -> int:  # pragma: no cover - thin wrapper
    return main(None)


if __name__ == '__main__':  # pragma: no cover
    raise SystemExit(run())
