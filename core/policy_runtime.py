"""Configuration loading and session path resolution."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

DEVELOPMENT_MODE = "development"

DEFAULT_CONFIG: dict[str, Any] = {
    "session": {
        "mode_env_var": "APPLICATION_ENV",
        "path_env_var": "SESSION_FILE",
        "development_path": "apps_state.json",
        "user_dir": ".save-windows-status",
        "file_name": "apps_state.json",
    },
    "tools": {
        "wmctrl": "wmctrl",
        "ps": "ps",
        "shell": "/bin/sh",
        "timeout_seconds": 10,
    },
    "logging": {
        "level": "WARNING",
    },
}


@dataclass(frozen=True)
class RuntimeSettings:
    """Effective settings handed to the session components."""

    session_path: Path
    mode: str
    wmctrl: str = "wmctrl"
    ps: str = "ps"
    shell: str = "/bin/sh"
    timeout_seconds: float = 10.0
    log_level: str = "WARNING"

    def as_dict(self) -> dict[str, Any]:
        return {
            "session_path": str(self.session_path),
            "mode": self.mode,
            "wmctrl": self.wmctrl,
            "ps": self.ps,
            "shell": self.shell,
            "timeout_seconds": self.timeout_seconds,
            "log_level": self.log_level,
        }


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_effective_config(root: Path, config_path: Path | None = None) -> dict[str, Any]:
    """Merge built-in defaults, ``config/default.yaml`` and an explicit file."""
    merged = merge_dicts(DEFAULT_CONFIG, load_yaml(root / "config" / "default.yaml"))
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        merged = merge_dicts(merged, load_yaml(config_path))
    for section in DEFAULT_CONFIG:
        if not isinstance(merged.get(section), dict):
            raise ValueError(f"Config section '{section}' must be a mapping")
    return merged


def resolve_session_path(
    session_cfg: Mapping[str, Any],
    env: Mapping[str, str],
    cwd: Path,
    home: Path,
) -> tuple[Path, str]:
    """Return (session file path, execution mode) for the given environment."""
    mode = env.get(str(session_cfg["mode_env_var"]), "")
    explicit = env.get(str(session_cfg["path_env_var"]), "")
    if explicit:
        return Path(explicit).expanduser(), mode
    if mode == DEVELOPMENT_MODE:
        return cwd / str(session_cfg["development_path"]), mode
    return home / str(session_cfg["user_dir"]) / str(session_cfg["file_name"]), mode


def load_settings(
    root: Path | None = None,
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
    home: Path | None = None,
) -> RuntimeSettings:
    """Build settings from config files and the process environment.

    A ``.env`` file in the working directory is read first; variables that
    are already set in the environment keep their values.
    """
    cwd = cwd or Path.cwd()
    if env is None:
        load_dotenv(cwd / ".env", override=False)
        env = os.environ
    root = root or Path(__file__).resolve().parents[1]
    config = load_effective_config(root, config_path)
    session_path, mode = resolve_session_path(
        config["session"],
        env,
        cwd=cwd,
        home=home or Path.home(),
    )
    tools = config["tools"]
    try:
        timeout_seconds = float(tools["timeout_seconds"])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"tools.timeout_seconds must be a number: {tools['timeout_seconds']!r}") from exc
    return RuntimeSettings(
        session_path=session_path,
        mode=mode,
        wmctrl=str(tools["wmctrl"]),
        ps=str(tools["ps"]),
        shell=str(tools["shell"]),
        timeout_seconds=timeout_seconds,
        log_level=str(config["logging"]["level"]).upper(),
    )
