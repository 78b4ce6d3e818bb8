"""Typer command handlers."""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import NoReturn

import typer

from core.errors import PreconditionError, StorageError
from core.orchestrator import SessionOrchestrator
from core.policy_runtime import RuntimeSettings, load_settings

logger = logging.getLogger("ws.cli")

PROMPT_TEXT = "Reopen windows on next session start?"


def build_settings(
    config: Path | None = None,
    session_file: Path | None = None,
    verbose: bool = False,
) -> RuntimeSettings:
    """Load settings and configure logging for this invocation."""
    try:
        settings = load_settings(config_path=config)
    except (OSError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    if session_file is not None:
        settings = dataclasses.replace(settings, session_path=session_file.expanduser())
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _runtime(settings: RuntimeSettings) -> SessionOrchestrator:
    return SessionOrchestrator.from_settings(settings)


def _checked_runtime(settings: RuntimeSettings) -> SessionOrchestrator:
    orchestrator = _runtime(settings)
    try:
        orchestrator.preflight()
    except PreconditionError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    return orchestrator


def _fail(exc: Exception) -> NoReturn:
    logger.debug("Command failed", exc_info=exc)
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1) from exc


def capture(settings: RuntimeSettings) -> None:
    """Capture open windows and save them."""
    _capture(_checked_runtime(settings))


def _capture(orchestrator: SessionOrchestrator) -> None:
    try:
        records = orchestrator.capture()
    except (PreconditionError, StorageError) as exc:
        _fail(exc)
    typer.echo(f"Application state saved at: {orchestrator.store.path}")
    typer.echo(f"Saved {len(records)} application(s).")


def clear(settings: RuntimeSettings) -> None:
    """Reset the saved session."""
    _clear(_checked_runtime(settings))


def _clear(orchestrator: SessionOrchestrator) -> None:
    try:
        orchestrator.clear()
    except StorageError as exc:
        _fail(exc)
    typer.echo(f"File {orchestrator.store.path} cleared.")


def restore(settings: RuntimeSettings) -> None:
    """Relaunch the saved session, reporting commands that failed to start."""
    orchestrator = _checked_runtime(settings)
    try:
        report = orchestrator.restore()
    except StorageError as exc:
        _fail(exc)
    for failure in report.failed:
        typer.echo(f"Failed to relaunch {failure.record.window_title!r}: {failure.error}", err=True)
    typer.echo("Application state restored.")


def interactive(settings: RuntimeSettings) -> None:
    """Ask whether the current windows should be reopened next time."""
    orchestrator = _checked_runtime(settings)
    if typer.confirm(PROMPT_TEXT, default=False):
        _capture(orchestrator)
    else:
        _clear(orchestrator)


def show(settings: RuntimeSettings) -> None:
    """Print the stored session as JSON."""
    orchestrator = _runtime(settings)
    try:
        records = orchestrator.store.load()
    except StorageError as exc:
        _fail(exc)
    typer.echo(json.dumps([r.model_dump() for r in records], indent=2, ensure_ascii=False))


def config_show(settings: RuntimeSettings) -> None:
    """Show effective runtime config."""
    typer.echo(json.dumps(settings.as_dict(), indent=2))
