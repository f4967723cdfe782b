"""Input bundle the host shell pipes to the status line command.

Only the fields segments are known to read are typed; everything else the
host sends is kept as extra attributes and ignored by this package.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ModelInfo(BaseModel):
    """The model currently selected in the session."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    display_name: str | None = None


class WorkspaceInfo(BaseModel):
    """Directories the session is working in."""

    model_config = ConfigDict(extra="allow")

    current_dir: str | None = None
    project_dir: str | None = None


class InputData(BaseModel):
    """Session and environment context handed to every segment's ``collect``."""

    model_config = ConfigDict(extra="allow")

    session_id: str | None = None
    transcript_path: str | None = None
    cwd: str | None = None
    model: ModelInfo | None = None
    workspace: WorkspaceInfo | None = None
