"""Window snapshot models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class RawWindowEntry(BaseModel):
    """One parsed line of window-manager listing output."""

    model_config = ConfigDict(frozen=True)

    window_id: str
    pid: str
    window_title: str = ""


class WindowRecord(BaseModel):
    """A window paired with the command line that launched its owner."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    window_id: StrictStr
    app_command: StrictStr = Field(min_length=1)
    window_title: StrictStr
