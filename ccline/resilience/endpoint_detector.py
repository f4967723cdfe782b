"""Endpoint detection for the account-status API.

Each ``detect`` call runs a small, non-persistent state machine:

- Try-Cached: if the cache holds a valid record for this credential, only
  its endpoint is tried. Success refreshes the record's timestamp and bumps
  its success count. Failure falls through; the record is left alone.
- Probe-All: every configured endpoint is tried in order, one at a time,
  each bounded by the request timeout. The first success replaces the cache
  record with a fresh one (success_count = 1).
- All-Failed: ``None`` is returned. Nothing is raised.

A single attempt succeeds only on HTTP 200 with a body matching
``QuotaResponse``. Any other status, a transport error, a timeout or a body
that does not validate fails that attempt and the loop moves on. There are
no retries within an attempt.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

import httpx
from pydantic import ValidationError

from ccline.errors import EndpointAttemptError
from ccline.models.quota import EndpointCache, EndpointConfig, QuotaResponse
from ccline.resilience.endpoint_cache import EndpointCacheStore, fingerprint, utcnow

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class DetectionResult:
    """The endpoint that answered and what it said."""

    endpoint: EndpointConfig
    response: QuotaResponse

    @property
    def endpoint_url(self) -> str:
        return self.endpoint.url


class EndpointDetector:
    """Finds a working endpoint, preferring the one cached for the credential.

    Parameters
    ----------
    endpoints:
        Candidate endpoints in probe order.
    store:
        Endpoint cache store consulted at the start of every detection.
    timeout_seconds:
        Timeout for each individual attempt (default 5).
    transport:
        Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    clock:
        Returns the current timezone-aware time.
    """

    def __init__(
        self,
        endpoints: Sequence[EndpointConfig],
        store: EndpointCacheStore,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._endpoints = tuple(endpoints)
        self._store = store
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._clock = clock

    @property
    def endpoints(self) -> tuple[EndpointConfig, ...]:
        return self._endpoints

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    def detect(self, credential: str) -> DetectionResult | None:
        """Return the first endpoint that answers for *credential*, or ``None``."""
        try:
            client = httpx.Client(transport=self._transport, timeout=self._timeout_seconds)
        except (ImportError, ValueError) as exc:
            # Proxy settings from the environment are checked here
            logger.debug(
                "HTTP client could not be created, treating all endpoints as failed",
                extra={"error_reason": f"{type(exc).__name__}: {exc}"},
            )
            return None

        with client:
            result = self._try_cached(client, credential)
            if result is not None:
                return result
            return self._probe_all(client, credential)

    def _try_cached(self, client: httpx.Client, credential: str) -> DetectionResult | None:
        record = self._store.load()
        if record is None or not self._store.is_valid(record, credential, now=self._clock()):
            return None

        endpoint = self._find_endpoint(record.successful_endpoint)
        if endpoint is None:
            logger.debug(
                "Cached endpoint is no longer configured",
                extra={"endpoint_url": record.successful_endpoint},
            )
            return None

        response = self._try_endpoint(client, endpoint, credential)
        if response is None:
            logger.debug(
                "Cached endpoint failed, probing all endpoints",
                extra={"endpoint": endpoint.name},
            )
            return None

        self._store.save(
            record.model_copy(
                update={
                    "last_success_time": self._clock(),
                    "success_count": record.success_count + 1,
                }
            )
        )
        return DetectionResult(endpoint=endpoint, response=response)

    def _probe_all(self, client: httpx.Client, credential: str) -> DetectionResult | None:
        for endpoint in self._endpoints:
            response = self._try_endpoint(client, endpoint, credential)
            if response is None:
                continue

            self._store.save(
                EndpointCache(
                    api_key_hash=fingerprint(credential),
                    successful_endpoint=endpoint.url,
                    last_success_time=self._clock(),
                    success_count=1,
                )
            )
            return DetectionResult(endpoint=endpoint, response=response)

        logger.debug("All %d endpoints failed", len(self._endpoints))
        return None

    def _find_endpoint(self, url: str) -> EndpointConfig | None:
        for endpoint in self._endpoints:
            if endpoint.url == url:
                return endpoint
        return None

    # ------------------------------------------------------------------
    # Single attempt
    # ------------------------------------------------------------------

    def _try_endpoint(
        self,
        client: httpx.Client,
        endpoint: EndpointConfig,
        credential: str,
    ) -> QuotaResponse | None:
        """Run one attempt, converting any failure into ``None``."""
        logger.debug("Trying endpoint", extra={"endpoint": endpoint.name, "endpoint_url": endpoint.url})
        start = time.monotonic()
        try:
            response = self._request(client, endpoint, credential)
        except EndpointAttemptError as exc:
            logger.debug(
                "Endpoint failed: %s",
                exc.message,
                extra={
                    "endpoint": endpoint.name,
                    "duration_ms": round((time.monotonic() - start) * 1000, 1),
                    **exc.details,
                },
            )
            return None

        logger.debug(
            "Endpoint succeeded",
            extra={
                "endpoint": endpoint.name,
                "duration_ms": round((time.monotonic() - start) * 1000, 1),
            },
        )
        return response

    def _request(
        self,
        client: httpx.Client,
        endpoint: EndpointConfig,
        credential: str,
    ) -> QuotaResponse:
        """Issue the authenticated GET and validate the body.

        Raises
        ------
        EndpointAttemptError
            On transport error, timeout, non-200 status or an unexpected body.
        """
        try:
            response = client.get(
                endpoint.url,
                headers={
                    "Authorization": f"Bearer {credential}",
                    "accept": "*/*",
                    "content-type": "application/json",
                },
            )
        except httpx.TimeoutException as exc:
            raise EndpointAttemptError("Request timed out", error_reason=type(exc).__name__) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise EndpointAttemptError("Transport error", error_reason=type(exc).__name__) from exc
        except UnicodeEncodeError as exc:
            raise EndpointAttemptError("Credential cannot be sent in an HTTP header") from exc

        if response.status_code != 200:
            raise EndpointAttemptError(
                f"Unexpected status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return QuotaResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise EndpointAttemptError(
                "Response body did not match the expected shape",
                status_code=response.status_code,
                error_reason=f"{exc.error_count()} validation errors",
            ) from exc
