"""Segment registry.

Maps ``SegmentId`` → ``Segment`` instance, one segment per kind, and runs
collection across them in registration order.
"""

from __future__ import annotations

import logging

from ccline.models.input import InputData
from ccline.models.segment import SegmentData, SegmentId
from ccline.segments.base import Segment

logger = logging.getLogger(__name__)


class SegmentRegistry:
    """Registry that maps segment ids to their implementations."""

    def __init__(self) -> None:
        self._segments: dict[SegmentId, Segment] = {}

    def register(self, segment: Segment) -> None:
        """Register a segment under its ``id()``.

        Raises
        ------
        ValueError
            If a segment with the same id is already registered.
        """
        segment_id = segment.id()
        if segment_id in self._segments:
            raise ValueError(f"Segment '{segment_id.value}' is already registered")
        self._segments[segment_id] = segment
        logger.debug("Registered segment '%s'", segment_id.value)

    def get(self, segment_id: SegmentId) -> Segment:
        """Return the segment registered for *segment_id*.

        Raises
        ------
        KeyError
            If no segment is registered for the given id.
        """
        try:
            return self._segments[segment_id]
        except KeyError:
            raise KeyError(f"No segment registered for '{segment_id.value}'") from None

    def list_ids(self) -> list[SegmentId]:
        """Return all registered segment ids in registration order."""
        return list(self._segments.keys())

    def collect_all(self, input: InputData) -> dict[SegmentId, SegmentData]:
        """Collect every registered segment, omitting those that returned ``None``."""
        collected: dict[SegmentId, SegmentData] = {}
        for segment_id, segment in self._segments.items():
            data = segment.collect(input)
            if data is None:
                logger.debug("Segment '%s' not applicable", segment_id.value)
                continue
            collected[segment_id] = data
        return collected
