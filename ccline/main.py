"""Command-line entry point: collect segment data for one status line refresh.

Reads the host shell's JSON input bundle from stdin, collects every
registered segment and writes ``{segment_id: {primary, secondary, metadata}}``
as JSON to stdout for the rendering layer.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TextIO

from pydantic import ValidationError

from ccline.config.settings import CclineSettings
from ccline.errors import InvalidInputError
from ccline.logging_config import configure_logging
from ccline.models.input import InputData
from ccline.segments.quota import QuotaSegment
from ccline.segments.registry import SegmentRegistry

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2


def build_registry(settings: CclineSettings) -> SegmentRegistry:
    """Register the segments this package provides."""
    registry = SegmentRegistry()
    registry.register(QuotaSegment(settings=settings))
    return registry


def read_input(stream: TextIO) -> InputData:
    """Parse the input bundle from *stream*; empty input is an empty bundle.

    Raises
    ------
    InvalidInputError
        If the stream does not hold a JSON object matching ``InputData``.
    """
    raw = stream.read()
    if not raw.strip():
        return InputData()
    try:
        return InputData.model_validate_json(raw)
    except ValidationError as exc:
        raise InvalidInputError(
            f"Invalid status line input: {exc.error_count()} validation errors"
        ) from exc


def main(stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    settings = CclineSettings()
    configure_logging(settings.effective_log_level)

    try:
        input_data = read_input(stdin)
    except InvalidInputError as exc:
        logger.error(exc.message)
        return EXIT_INVALID_INPUT

    registry = build_registry(settings)
    collected = registry.collect_all(input_data)

    payload = {segment_id.value: data.model_dump() for segment_id, data in collected.items()}
    stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
