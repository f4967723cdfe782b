"""Abstract base class for status line segments.

A segment gathers one piece of status line information. ``collect`` returns
``None`` when the segment does not apply right now (it is then left out of
the line), or a ``SegmentData``, possibly a degraded one that still shows.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ccline.models.input import InputData
from ccline.models.segment import SegmentData, SegmentId


class Segment(ABC):
    """Base class every segment kind extends.

    Subclasses MUST set ``segment_id`` as a class attribute and implement
    ``collect``. ``collect`` MUST NOT raise: failures are reported through
    its return value.
    """

    segment_id: SegmentId

    def id(self) -> SegmentId:
        return self.segment_id

    @abstractmethod
    def collect(self, input: InputData) -> SegmentData | None:
        """Gather this segment's data for the current status line refresh.

        Parameters
        ----------
        input:
            Session context supplied by the host shell.

        Returns
        -------
        SegmentData | None
            ``None`` when the segment is not applicable.
        """
        ...
