"""CLI entrypoint for winsession."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(
    help="Save open application windows and reopen them on the next session.",
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    restore: bool = typer.Option(False, "--restore", help="Relaunch the saved session and exit"),
    config: Path | None = typer.Option(None, "--config", help="Extra YAML config file"),
    session_file: Path | None = typer.Option(None, "--session-file", help="Override the session file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Without a subcommand, ask whether to save or clear the current session."""
    ctx.obj = commands.build_settings(config=config, session_file=session_file, verbose=verbose)
    if ctx.invoked_subcommand is not None:
        return
    if restore:
        commands.restore(ctx.obj)
    else:
        commands.interactive(ctx.obj)


@app.command("capture")
def capture_cmd(ctx: typer.Context) -> None:
    """Save the currently open windows without prompting."""
    commands.capture(ctx.obj)


@app.command("clear")
def clear_cmd(ctx: typer.Context) -> None:
    """Reset the saved session to empty."""
    commands.clear(ctx.obj)


@app.command("restore")
def restore_cmd(ctx: typer.Context) -> None:
    """Relaunch every application in the saved session."""
    commands.restore(ctx.obj)


@app.command("show")
def show_cmd(ctx: typer.Context) -> None:
    """Print the saved session."""
    commands.show(ctx.obj)


@app.command("config")
def config_cmd(ctx: typer.Context) -> None:
    """Show effective configuration."""
    commands.config_show(ctx.obj)


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
