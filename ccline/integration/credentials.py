"""Credential resolution for the account-status API.

A credential is looked up from an ordered chain of sources, first hit wins:

1. ``PACKYCODE_API_KEY`` environment variable
2. ``ANTHROPIC_API_KEY`` environment variable
3. ``ANTHROPIC_AUTH_TOKEN`` environment variable
4. ``env.ANTHROPIC_AUTH_TOKEN`` / ``env.ANTHROPIC_API_KEY`` in ``<claude_dir>/settings.json``
5. ``<claude_dir>/api_key``, whitespace-trimmed

A source that is absent, unreadable, malformed or empty yields ``None`` and
the chain moves on. Nothing is cached between calls.

SECURITY: Never logs or persists credential values.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from ccline.config.settings import (
    PROVIDER_API_KEY_ENV,
    PROVIDER_AUTH_TOKEN_ENV,
    TOOL_API_KEY_ENV,
    CclineSettings,
)

logger = logging.getLogger(__name__)


class CredentialSource(ABC):
    """One place a credential may be found."""

    name: str

    @abstractmethod
    def fetch(self) -> str | None:
        """Return a non-empty credential, or ``None`` if this source has none."""
        ...


class EnvVarSource(CredentialSource):
    """Reads a credential from a single environment variable."""

    def __init__(self, variable: str) -> None:
        self.variable = variable
        self.name = f"env:{variable}"

    def fetch(self) -> str | None:
        return os.environ.get(self.variable) or None


class SettingsFileSource(CredentialSource):
    """Reads a credential from the ``env`` table of a JSON settings file."""

    KEYS = (PROVIDER_AUTH_TOKEN_ENV, PROVIDER_API_KEY_ENV)

    def __init__(self, path: Path) -> None:
        self.path = path
        self.name = f"settings:{path}"

    def fetch(self) -> str | None:
        try:
            settings = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None

        if not isinstance(settings, dict):
            return None
        env = settings.get("env")
        if not isinstance(env, dict):
            return None

        for key in self.KEYS:
            value = env.get(key)
            if isinstance(value, str) and value:
                return value
        return None


class KeyFileSource(CredentialSource):
    """Reads a credential from a plain-text file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.name = f"file:{path}"

    def fetch(self) -> str | None:
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, ValueError):
            return None
        return content.strip() or None


def default_sources(settings: CclineSettings) -> list[CredentialSource]:
    """Build the standard source chain for *settings*, in priority order."""
    return [
        EnvVarSource(TOOL_API_KEY_ENV),
        EnvVarSource(PROVIDER_API_KEY_ENV),
        EnvVarSource(PROVIDER_AUTH_TOKEN_ENV),
        SettingsFileSource(settings.settings_path),
        KeyFileSource(settings.api_key_path),
    ]


class CredentialResolver:
    """Tries each credential source in turn and returns the first hit."""

    def __init__(self, sources: Iterable[CredentialSource]) -> None:
        self._sources = list(sources)

    @classmethod
    def from_settings(cls, settings: CclineSettings) -> CredentialResolver:
        return cls(default_sources(settings))

    @property
    def sources(self) -> list[CredentialSource]:
        return list(self._sources)

    def resolve(self) -> str | None:
        for source in self._sources:
            credential = source.fetch()
            if credential:
                logger.debug("Credential found in %s", source.name)
                return credential
        logger.debug("No credential found in %d sources", len(self._sources))
        return None
