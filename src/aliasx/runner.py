"""Run a resolved command through the user's shell."""

from __future__ import annotations

import subprocess

from aliasx import log
from aliasx.config import Config
from aliasx.errors import CommandFailed


def shell_argv(command: str, shell: str) -> list[str]:
    return [shell, "-c", command]


def run_command(command: str, cfg: Config) -> int:
    """Run *command* with inherited stdio and block until it exits.

    Returns 0 on success; raises :class:`CommandFailed` otherwise.
    """
    argv = shell_argv(command, cfg.shell)
    log.debug(f"Running via {cfg.shell}: {command}")

    try:
        proc = subprocess.run(argv, check=False)
    except FileNotFoundError:
        log.error(f"{cfg.shell} not found")
        raise CommandFailed(127) from None
    except KeyboardInterrupt:
        raise CommandFailed(None) from None

    # Negative return codes mean the child was killed by a signal.
    if proc.returncode < 0:
        raise CommandFailed(None)
    if proc.returncode != 0:
        raise CommandFailed(proc.returncode)
    return 0
