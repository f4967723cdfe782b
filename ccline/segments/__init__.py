"""Status line segments — the segment contract, registry and quota segment."""

from ccline.segments.base import Segment
from ccline.segments.quota import QuotaSegment
from ccline.segments.registry import SegmentRegistry

__all__ = ["QuotaSegment", "Segment", "SegmentRegistry"]
