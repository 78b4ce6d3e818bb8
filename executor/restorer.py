"""Relaunch stored window commands as detached processes."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field

from core.errors import RelaunchSpawnError
from world_model.window_record import WindowRecord

logger = logging.getLogger("ws.restorer")


@dataclass
class SpawnFailure:
    """A record whose command could not be spawned."""

    record: WindowRecord
    error: RelaunchSpawnError


@dataclass
class RestoreReport:
    """Outcome of one restore batch."""

    launched: list[WindowRecord] = field(default_factory=list)
    failed: list[SpawnFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class Restorer:
    """Fire-and-forget relauncher; it never waits on spawned applications."""

    def __init__(self, shell: str = "/bin/sh") -> None:
        self.shell = shell

    def spawn(self, record: WindowRecord) -> subprocess.Popen:
        """Start ``record.app_command`` through the shell in a new session.

        The returned handle is never waited on; the child outlives this process.
        """
        try:
            return subprocess.Popen(
                [self.shell, "-c", record.app_command],
                stdin=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, ValueError) as exc:
            raise RelaunchSpawnError(
                f"Failed to relaunch '{record.app_command}': {exc}", record
            ) from exc

    def restore_all(self, records: Sequence[WindowRecord]) -> RestoreReport:
        report = RestoreReport()
        for record in records:
            try:
                proc = self.spawn(record)
            except RelaunchSpawnError as exc:
                logger.warning("%s", exc)
                report.failed.append(SpawnFailure(record=record, error=exc))
                continue
            logger.info("Relaunched %r (pid %s)", record.window_title, proc.pid)
            report.launched.append(record)
        return report
