"""Error hierarchy for the status-line segment collectors.

None of these errors cross a segment's ``collect`` boundary. They exist so the
lower layers can describe *why* something failed (for the diagnostic trace)
before converting the failure into ``None`` or a degraded segment.
"""

from __future__ import annotations


class CclineError(Exception):
    """Base error for all ccline-specific errors."""

    message: str = "Status line error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class EndpointAttemptError(CclineError):
    """A single endpoint attempt failed (bad status, transport, timeout, schema)."""

    message = "Endpoint attempt failed"


class InvalidInputError(CclineError):
    """The input bundle piped in by the host shell could not be parsed."""

    message = "Invalid status line input"
