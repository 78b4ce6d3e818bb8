"""Host checks run before any session work."""

from __future__ import annotations

import subprocess

from core.errors import PreconditionError

WMCTRL_REMEDIATION = (
    "Error: wmctrl is not installed. Please install wmctrl and try again.\n"
    "On Ubuntu/Debian, use: sudo apt-get install wmctrl"
)


def tool_available(
    binary: str,
    version_arg: str = "--version",
    timeout: float | None = 10.0,
) -> bool:
    """Return True when ``binary`` can be started at all."""
    try:
        subprocess.run(
            [binary, version_arg],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired):
        return False
    return True


def ensure_window_lister(binary: str = "wmctrl", timeout: float | None = 10.0) -> None:
    """Raise PreconditionError when the window-listing tool is missing."""
    if not tool_available(binary, timeout=timeout):
        raise PreconditionError(WMCTRL_REMEDIATION)
