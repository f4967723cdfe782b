"""Single-slot, file-backed cache of the last endpoint that answered.

The cache remembers one record only: which endpoint last succeeded for which
credential. A new credential overwrites the record rather than adding to it.
A record is usable only while the credential fingerprint matches and it is
younger than the TTL; stale records are ignored, never deleted.

Reads and writes are best-effort. A failed read behaves as "no cache" and a
failed write is dropped; both are reported on the debug trace only.

SECURITY: Only the credential fingerprint is persisted, never the credential.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from pydantic import ValidationError

from ccline.models.quota import EndpointCache

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 86400


def fingerprint(credential: str) -> int:
    """Return a stable 64-bit fingerprint of *credential*.

    Deterministic across processes (unlike ``hash()``). Only used to tell
    whether the cached record belongs to the current credential.
    """
    digest = hashlib.blake2b(credential.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EndpointCacheStore:
    """Loads, saves and validates the endpoint cache file.

    Parameters
    ----------
    path:
        Location of the JSON cache file.
    ttl_seconds:
        How long a record stays usable after its last success (default 24h).
    """

    def __init__(self, path: Path, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> None:
        self._path = path
        self._ttl = timedelta(seconds=ttl_seconds)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> EndpointCache | None:
        """Read the cached record, or ``None`` if absent or unreadable."""
        try:
            content = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.debug(
                "Endpoint cache unreadable, ignoring",
                extra={"cache_path": str(self._path), "error_reason": str(exc)},
            )
            return None

        try:
            return EndpointCache.model_validate_json(content)
        except (ValidationError, OverflowError) as exc:
            logger.debug(
                "Endpoint cache malformed, ignoring",
                extra={"cache_path": str(self._path), "error_reason": str(exc)},
            )
            return None

    def save(self, record: EndpointCache) -> None:
        """Write *record*, creating parent directories. Failures are dropped."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(record.model_dump_json(indent=2), encoding="utf-8")
        except OSError as exc:
            logger.debug(
                "Endpoint cache write failed, dropping",
                extra={"cache_path": str(self._path), "error_reason": str(exc)},
            )

    def is_valid(
        self,
        record: EndpointCache,
        credential: str,
        now: datetime | None = None,
    ) -> bool:
        """True iff *record* belongs to *credential* and is younger than the TTL.

        A record timestamped in the future counts as stale.
        """
        if record.api_key_hash != fingerprint(credential):
            return False
        age = (now or utcnow()) - record.last_success_time
        return timedelta(0) <= age < self._ttl
