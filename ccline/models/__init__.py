"""Public models for the status line segments."""

from ccline.models.input import InputData, ModelInfo, WorkspaceInfo
from ccline.models.quota import EndpointCache, EndpointConfig, QuotaResponse
from ccline.models.segment import SegmentData, SegmentId

__all__ = [
    "EndpointCache",
    "EndpointConfig",
    "InputData",
    "ModelInfo",
    "QuotaResponse",
    "SegmentData",
    "SegmentId",
    "WorkspaceInfo",
]
