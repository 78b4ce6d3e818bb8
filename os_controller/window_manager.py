"""Window enumeration via wmctrl listing output."""

from __future__ import annotations

import logging
import subprocess

from core.errors import PreconditionError
from executor.command_executor import run_command
from world_model.window_record import RawWindowEntry

# window_id desktop pid x y width height client_host title...
MIN_COLUMNS = 9
PID_COLUMN = 2
TITLE_COLUMN = 8

logger = logging.getLogger("ws.window_manager")


def parse_wmctrl_line(line: str) -> RawWindowEntry | None:
    """Parse one ``wmctrl -lpG`` line, returning None for malformed lines."""
    parts = line.split()
    if len(parts) < MIN_COLUMNS:
        return None
    return RawWindowEntry(
        window_id=parts[0],
        pid=parts[PID_COLUMN],
        window_title=" ".join(parts[TITLE_COLUMN:]),
    )


def parse_wmctrl_output(output: str) -> list[RawWindowEntry]:
    """Parse full listing output, keeping emission order."""
    entries: list[RawWindowEntry] = []
    for line in output.splitlines():
        entry = parse_wmctrl_line(line)
        if entry is None:
            if line.strip():
                logger.debug("Skipping malformed listing line: %r", line)
            continue
        entries.append(entry)
    return entries


class WindowEnumerator:
    """Lists top-level windows known to the window manager."""

    def __init__(self, wmctrl: str = "wmctrl", timeout: float | None = 10.0) -> None:
        self.wmctrl = wmctrl
        self.timeout = timeout

    def enumerate(self) -> list[RawWindowEntry]:
        try:
            code, stdout, stderr = run_command([self.wmctrl, "-lpG"], timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise PreconditionError(f"Failed to execute {self.wmctrl}: {exc}") from exc
        if code != 0:
            # e.g. "Cannot open display."
            raise PreconditionError(f"{self.wmctrl} exited with {code}: {stderr.strip()}")
        entries = parse_wmctrl_output(stdout)
        logger.debug("Enumerated %d windows", len(entries))
        return entries
