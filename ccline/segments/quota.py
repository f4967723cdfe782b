"""Account quota segment.

Shows today's spend and whether Opus is enabled for the account, fetched
from the account-status API through whichever endpoint currently answers.

- No credential anywhere: the segment is absent (``None``).
- Every endpoint failed: the segment still shows, as "Offline".
"""

from __future__ import annotations

import logging
import math

from ccline import features
from ccline.config.endpoints import load_endpoints
from ccline.config.settings import CclineSettings
from ccline.integration.credentials import CredentialResolver
from ccline.models.input import InputData
from ccline.models.segment import SegmentData, SegmentId
from ccline.resilience.endpoint_cache import EndpointCacheStore
from ccline.resilience.endpoint_detector import EndpointDetector
from ccline.segments.base import Segment

logger = logging.getLogger(__name__)

OPUS_ON = "Opus✓"
OPUS_OFF = "Opus✗"
OFFLINE = "Offline"


def format_daily_spent(spent: str) -> str:
    """Render a spend amount as dollars with two decimals, or verbatim if not numeric.

    Only plain ASCII numerals count: surrounding whitespace and digit
    separators fall back to the raw text.
    """
    if spent != spent.strip() or "_" in spent or not spent.isascii():
        return f"${spent}"
    try:
        value = float(spent)
    except ValueError:
        return f"${spent}"
    if math.isnan(value):
        return "$NaN"
    return f"${value:.2f}"


def format_opus_status(enabled: bool) -> str:
    return OPUS_ON if enabled else OPUS_OFF


def offline_segment() -> SegmentData:
    return SegmentData(primary=OFFLINE, secondary="", metadata={"status": "offline"})


class QuotaSegment(Segment):
    """Collects the daily spend / Opus status segment.

    Parameters
    ----------
    settings:
        Settings used to build the default resolver and detector.
    resolver:
        Credential resolver; defaults to the standard source chain.
    detector:
        Endpoint detector; defaults to the configured endpoint list and cache.
    enabled:
        Whether the quota feature is built in. Defaults to
        ``features.QUOTA_FEATURE_ENABLED``.
    """

    segment_id = SegmentId.QUOTA

    def __init__(
        self,
        settings: CclineSettings | None = None,
        resolver: CredentialResolver | None = None,
        detector: EndpointDetector | None = None,
        enabled: bool | None = None,
    ) -> None:
        self._settings = settings or CclineSettings()
        self._resolver = resolver
        self._detector = detector
        self._enabled = features.QUOTA_FEATURE_ENABLED if enabled is None else enabled

    def _get_resolver(self) -> CredentialResolver:
        if self._resolver is None:
            self._resolver = CredentialResolver.from_settings(self._settings)
        return self._resolver

    def _get_detector(self) -> EndpointDetector:
        if self._detector is None:
            settings = self._settings
            self._detector = EndpointDetector(
                endpoints=load_endpoints(settings.endpoints_file),
                store=EndpointCacheStore(
                    settings.endpoint_cache_path,
                    ttl_seconds=settings.cache_ttl_seconds,
                ),
                timeout_seconds=settings.request_timeout_seconds,
            )
        return self._detector

    def collect(self, input: InputData) -> SegmentData | None:
        if not self._enabled:
            return None

        credential = self._get_resolver().resolve()
        if credential is None:
            return None

        result = self._get_detector().detect(credential)
        if result is None:
            logger.debug("Quota API unreachable, showing offline segment")
            return offline_segment()

        response = result.response
        return SegmentData(
            primary=format_daily_spent(response.daily_spent_usd),
            secondary=format_opus_status(response.opus_enabled),
            metadata={
                "raw_spent": response.daily_spent_usd,
                "opus_enabled": "true" if response.opus_enabled else "false",
                "endpoint_used": result.endpoint_url,
            },
        )
