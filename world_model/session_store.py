"""JSON file persistence for captured window sessions."""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from core.errors import StorageReadError, StorageWriteError
from world_model.window_record import WindowRecord

logger = logging.getLogger("ws.session_store")

_SESSION_ADAPTER = TypeAdapter(list[WindowRecord])


class SessionStore:
    """Stores one session as a bare JSON array of window records.

    The whole file is rewritten on every save; there is no merging with the
    previous session and no locking, so the last writer wins.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, records: Sequence[WindowRecord]) -> Path:
        """Replace the stored session with ``records``."""
        payload = [record.model_dump(mode="json") for record in records]
        self._write(payload)
        logger.info("Saved %d window records to %s", len(payload), self.path)
        return self.path

    def clear(self) -> Path:
        """Reset the stored session to an empty array."""
        self._write([])
        logger.info("Cleared session file %s", self.path)
        return self.path

    def load(self) -> list[WindowRecord]:
        """Read the stored session back in capture order."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise StorageReadError(f"Session file not found: {self.path}", self.path) from exc
        except UnicodeDecodeError as exc:
            raise StorageReadError(f"Session file is not valid UTF-8: {exc}", self.path) from exc
        except OSError as exc:
            raise StorageReadError(f"Failed to read {self.path}: {exc}", self.path) from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageReadError(f"Session file is not valid JSON: {exc}", self.path) from exc
        if not isinstance(data, list):
            raise StorageReadError("Session file must contain a JSON array.", self.path)

        try:
            records = _SESSION_ADAPTER.validate_python(data)
        except ValidationError as exc:
            raise StorageReadError(
                f"Session file holds malformed records: {exc.error_count()} error(s)",
                self.path,
            ) from exc
        logger.debug("Loaded %d window records from %s", len(records), self.path)
        return records

    def _file_mode(self) -> int:
        """Keep an existing file's mode, else what a plain create would get."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def _write(self, payload: list[dict[str, str]]) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageWriteError(f"Failed to create directory {directory}: {exc}", self.path) from exc

        text = json.dumps(payload, ensure_ascii=False)
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                fh.write(text)
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageWriteError(f"Failed to write {self.path}: {exc}", self.path) from exc
