"""Resolve process ids to the command lines that started them."""

from __future__ import annotations

import logging
import subprocess

from executor.command_executor import run_command

logger = logging.getLogger("ws.process_resolver")


def parse_ps_output(output: str) -> str | None:
    command = output.strip()
    return command or None


class ProcessResolver:
    """Looks up full argument vectors in the process table with ``ps``."""

    def __init__(self, ps: str = "ps", timeout: float | None = 10.0) -> None:
        self.ps = ps
        self.timeout = timeout

    def resolve(self, pid: str | int) -> str | None:
        """Return the command line for ``pid``, or None when it cannot be found."""
        try:
            _, stdout, _ = run_command(
                [self.ps, "-p", str(pid), "-o", "args="],
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.debug("Process query for pid %s failed: %s", pid, exc)
            return None
        command = parse_ps_output(stdout)
        if command is None:
            logger.debug("No command line for pid %s", pid)
        return command
