"""Capture/clear/restore pipeline tests with fixed tool output."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from core.errors import PreconditionError, StorageReadError
from core.orchestrator import SessionOrchestrator, build_records
from core.policy_runtime import RuntimeSettings
from executor.restorer import Restorer
from os_controller.process_resolver import ProcessResolver
from os_controller.window_manager import WindowEnumerator, parse_wmctrl_output
from world_model.session_store import SessionStore
from world_model.window_record import WindowRecord

LISTING = """\
0x01 0 1234 0 0 800 600 host Terminal — bash
0x02 0 4321 0 0 800 600 host Gone Away
0x03 1 5555 0 0 800 600
"""

COMMANDS = {"1234": "/usr/bin/gnome-terminal", "4321": None}


def _resolver() -> MagicMock:
    resolver = MagicMock(spec=ProcessResolver)
    resolver.resolve.side_effect = lambda pid: COMMANDS.get(str(pid))
    return resolver


def _orchestrator(tmp_path: Path, restorer: Restorer | None = None) -> SessionOrchestrator:
    enumerator = MagicMock(spec=WindowEnumerator)
    enumerator.enumerate.return_value = parse_wmctrl_output(LISTING)
    return SessionOrchestrator(
        store=SessionStore(tmp_path / "apps_state.json"),
        enumerator=enumerator,
        resolver=_resolver(),
        restorer=restorer or MagicMock(spec=Restorer),
    )


def test_build_records_drops_unresolved_windows() -> None:
    records = build_records(parse_wmctrl_output(LISTING), _resolver())
    assert records == [
        WindowRecord(
            window_id="0x01",
            app_command="/usr/bin/gnome-terminal",
            window_title="Terminal — bash",
        )
    ]


def test_build_records_keeps_duplicate_window_ids() -> None:
    entries = parse_wmctrl_output(
        "0x01 0 1234 0 0 1 1 host A\n0x01 0 1234 0 0 1 1 host B\n"
    )
    records = build_records(entries, _resolver())
    assert [r.window_title for r in records] == ["A", "B"]


def test_capture_persists_resolved_records(tmp_path: Path) -> None:
    orchestrator = _orchestrator(tmp_path)
    records = orchestrator.capture()
    assert len(records) == 1
    assert orchestrator.store.load() == records


def test_clear_after_capture_yields_empty_session(tmp_path: Path) -> None:
    orchestrator = _orchestrator(tmp_path)
    orchestrator.capture()
    orchestrator.clear()
    assert orchestrator.store.load() == []


def test_restore_replays_stored_commands(tmp_path: Path) -> None:
    orchestrator = _orchestrator(tmp_path, restorer=Restorer(shell="/bin/sh"))
    orchestrator.capture()
    with patch("executor.restorer.subprocess.Popen", return_value=MagicMock(pid=9)) as popen:
        report = orchestrator.restore()
    popen.assert_called_once()
    assert popen.call_args.args[0] == ["/bin/sh", "-c", "/usr/bin/gnome-terminal"]
    assert report.ok
    # restore leaves storage untouched
    assert len(orchestrator.store.load()) == 1


def test_restore_without_session_file_raises(tmp_path: Path) -> None:
    orchestrator = _orchestrator(tmp_path)
    with pytest.raises(StorageReadError):
        orchestrator.restore()
    orchestrator.restorer.restore_all.assert_not_called()


def test_preflight_missing_tool(tmp_path: Path) -> None:
    settings = RuntimeSettings(
        session_path=tmp_path / "apps_state.json",
        mode="development",
        wmctrl="/nonexistent/wmctrl",
    )
    orchestrator = SessionOrchestrator.from_settings(settings)
    with pytest.raises(PreconditionError) as excinfo:
        orchestrator.preflight()
    assert "sudo apt-get install wmctrl" in str(excinfo.value)


def test_from_settings_wires_components(tmp_path: Path) -> None:
    settings = RuntimeSettings(
        session_path=tmp_path / "s.json",
        mode="",
        wmctrl="wm",
        ps="myps",
        shell="/bin/bash",
        timeout_seconds=4.0,
    )
    orchestrator = SessionOrchestrator.from_settings(settings)
    assert orchestrator.store.path == tmp_path / "s.json"
    assert orchestrator.enumerator.wmctrl == "wm"
    assert orchestrator.resolver.ps == "myps"
    assert orchestrator.resolver.timeout == 4.0
    assert orchestrator.restorer.shell == "/bin/bash"


def test_preflight_uses_configured_timeout(tmp_path: Path) -> None:
    settings = RuntimeSettings(
        session_path=tmp_path / "s.json",
        mode="",
        wmctrl="wm",
        timeout_seconds=2.5,
    )
    orchestrator = SessionOrchestrator.from_settings(settings)
    with patch("core.system_inspector.subprocess.run") as run:
        orchestrator.preflight()
    run.assert_called_once()
    assert run.call_args.args[0] == ["wm", "--version"]
    assert run.call_args.kwargs["timeout"] == 2.5
