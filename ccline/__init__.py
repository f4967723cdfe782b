"""Segment data collection for the coding-assistant status line."""

__version__ = "0.1.0"
