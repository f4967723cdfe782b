"""Structured JSON logging configuration.

Log records go to stderr so they never mix with the segment output on
stdout. Every entry carries timestamp, level, logger and message; endpoint
detection and cache records add the fields listed in ``_EXTRA_FIELDS``.

SECURITY: Never logs credential values, auth tokens, or bearer headers.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone

# Patterns that should be redacted from log output
_SENSITIVE_PATTERNS = re.compile(
    r"(api.key|secret|password|token|credential|authorization)"
    r"[\s]*[=:]\s*(?:bearer\s+)?\S+"
    r"|bearer\s+\S+",
    re.IGNORECASE,
)

_EXTRA_FIELDS = (
    "endpoint",
    "endpoint_url",
    "status_code",
    "duration_ms",
    "error_reason",
    "cache_path",
)


class JsonFormatter(logging.Formatter):
    """Formats log records as one JSON object per line.

    Additional fields can be attached via the ``extra`` dict on log calls.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._sanitize(record.getMessage()),
        }

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                value = getattr(record, name)
                entry[name] = self._sanitize(value) if isinstance(value, str) else value

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self._sanitize(self.formatException(record.exc_info))

        return json.dumps(entry, default=str, ensure_ascii=False)

    @staticmethod
    def _sanitize(text: str) -> str:
        """Remove sensitive values from log text."""
        return _SENSITIVE_PATTERNS.sub("[REDACTED]", text)


def configure_logging(level: str = "WARNING") -> None:
    """Configure the root logger with JSON formatting on stderr.

    Parameters
    ----------
    level:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
