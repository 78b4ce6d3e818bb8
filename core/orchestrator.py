"""Wires the capture, clear and restore operations together."""

from __future__ import annotations

import logging

from core.policy_runtime import RuntimeSettings
from core.system_inspector import ensure_window_lister
from executor.restorer import RestoreReport, Restorer
from os_controller.process_resolver import ProcessResolver
from os_controller.window_manager import WindowEnumerator
from world_model.session_store import SessionStore
from world_model.window_record import RawWindowEntry, WindowRecord

logger = logging.getLogger("ws.orchestrator")


def build_records(
    entries: list[RawWindowEntry],
    resolver: ProcessResolver,
) -> list[WindowRecord]:
    """Pair window entries with owner command lines, dropping unresolved ones."""
    records: list[WindowRecord] = []
    for entry in entries:
        command = resolver.resolve(entry.pid)
        if command is None:
            logger.debug("Dropping window %s: pid %s not resolvable", entry.window_id, entry.pid)
            continue
        records.append(
            WindowRecord(
                window_id=entry.window_id,
                app_command=command,
                window_title=entry.window_title,
            )
        )
    return records


class SessionOrchestrator:
    """Runs one logical operation per program invocation."""

    def __init__(
        self,
        store: SessionStore,
        enumerator: WindowEnumerator,
        resolver: ProcessResolver,
        restorer: Restorer,
        wmctrl: str = "wmctrl",
        timeout: float | None = 10.0,
    ) -> None:
        self.store = store
        self.enumerator = enumerator
        self.resolver = resolver
        self.restorer = restorer
        self.wmctrl = wmctrl
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: RuntimeSettings) -> SessionOrchestrator:
        return cls(
            store=SessionStore(settings.session_path),
            enumerator=WindowEnumerator(settings.wmctrl, timeout=settings.timeout_seconds),
            resolver=ProcessResolver(settings.ps, timeout=settings.timeout_seconds),
            restorer=Restorer(shell=settings.shell),
            wmctrl=settings.wmctrl,
            timeout=settings.timeout_seconds,
        )

    def preflight(self) -> None:
        ensure_window_lister(self.wmctrl, timeout=self.timeout)

    def capture(self) -> list[WindowRecord]:
        """Enumerate open windows and persist the resolvable ones."""
        entries = self.enumerator.enumerate()
        records = build_records(entries, self.resolver)
        logger.info("Captured %d of %d windows", len(records), len(entries))
        self.store.save(records)
        return records

    def clear(self) -> None:
        self.store.clear()

    def restore(self) -> RestoreReport:
        """Relaunch every command in the stored session."""
        records = self.store.load()
        report = self.restorer.restore_all(records)
        logger.info(
            "Restore finished: %d launched, %d failed",
            len(report.launched),
            len(report.failed),
        )
        return report
