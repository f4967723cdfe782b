"""Shared test fixtures and hypothesis strategies for the ccline test suite."""

from __future__ import annotations

import logging
import os
import string
from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from pathlib import Path

import httpx
import pytest
from hypothesis import strategies as st

from ccline.config.settings import CclineSettings
from ccline.models.quota import EndpointConfig
from ccline.resilience.endpoint_cache import EndpointCacheStore

MAIN_URL = "https://main.quota.test/api/backend/users/info"
SHARE_URL = "https://share.quota.test/api/backend/users/info"

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Keep the developer's real credentials and config out of every test
# ---------------------------------------------------------------------------

_SCRUBBED_ENV = (
    "PACKYCODE_API_KEY",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_AUTH_TOKEN",
    "PACKYCODE_DEBUG",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Remove credential, ccline and proxy env vars and point HOME at an empty directory."""
    for key in list(os.environ):
        if key in _SCRUBBED_ENV or key.startswith("CCLINE_") or key.upper().endswith("_PROXY"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo any root logger changes made by configure_logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Settings / component fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def claude_dir(tmp_path: Path) -> Path:
    path = tmp_path / ".claude"
    path.mkdir()
    return path


@pytest.fixture
def settings(claude_dir: Path) -> CclineSettings:
    """Test settings rooted in a temporary config directory."""
    return CclineSettings(claude_dir=claude_dir)


@pytest.fixture
def endpoints() -> tuple[EndpointConfig, ...]:
    return (
        EndpointConfig(name="main", url=MAIN_URL),
        EndpointConfig(name="share", url=SHARE_URL),
    )


@pytest.fixture
def cache_store(settings: CclineSettings) -> EndpointCacheStore:
    return EndpointCacheStore(settings.endpoint_cache_path)


# ---------------------------------------------------------------------------
# Fake account-status API
# ---------------------------------------------------------------------------

class FakeQuotaApi:
    """Serves canned outcomes per URL through ``httpx.MockTransport``.

    An outcome is a status code (served with an error body), a dict (served
    as a 200 JSON body), raw bytes (served as a 200 body), or an httpx
    exception class (raised as a transport failure). Unknown URLs get 404.
    """

    def __init__(self, routes: dict[str, object] | None = None) -> None:
        self.routes: dict[str, object] = dict(routes or {})
        self.calls: list[str] = []
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        self.requests.append(request)
        outcome = self.routes.get(url, 404)
        if isinstance(outcome, type) and issubclass(outcome, Exception):
            raise outcome("simulated failure", request=request)
        if isinstance(outcome, int):
            return httpx.Response(outcome, json={"error": "unavailable"})
        if isinstance(outcome, bytes):
            return httpx.Response(200, content=outcome)
        return httpx.Response(200, json=outcome)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api() -> Callable[..., FakeQuotaApi]:
    """Factory fixture: ``fake_api({url: outcome, ...})``."""
    return FakeQuotaApi


def quota_body(spent: str = "12.5", opus: bool = True) -> dict:
    return {"daily_spent_usd": spent, "opus_enabled": opus}


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

credentials = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    min_size=1,
    max_size=64,
)

# Credentials that can travel in an HTTP header
header_safe_credentials = st.text(
    alphabet=string.ascii_letters + string.digits + "-_.",
    min_size=1,
    max_size=64,
)

spend_amounts = st.floats(min_value=0, max_value=1_000_000, allow_nan=False, allow_infinity=False)
