"""Segment identifiers and the data contract every segment produces."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SegmentId(str, Enum):
    """The fixed set of status line segment kinds."""

    MODEL = "model"
    DIRECTORY = "directory"
    GIT = "git"
    USAGE = "usage"
    COST = "cost"
    SESSION = "session"
    OUTPUT_STYLE = "output_style"
    UPDATE = "update"
    QUOTA = "quota"


class SegmentData(BaseModel):
    """Output of a single segment collection, consumed by the rendering layer.

    Built fresh on every ``collect`` call and never retained by the segment.
    """

    primary: str
    secondary: str = ""
    metadata: dict[str, str] = Field(default_factory=dict)
