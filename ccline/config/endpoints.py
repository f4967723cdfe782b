"""Ordered endpoint list and its YAML loader.

The order of the list is significant: endpoints are probed first to last and
the first one that answers wins. The loaded list is a tuple and is never
mutated afterwards.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ccline.models.quota import EndpointConfig

logger = logging.getLogger(__name__)

BUNDLED_ENDPOINTS_PATH = Path(__file__).with_name("endpoints.yaml")

DEFAULT_ENDPOINTS: tuple[EndpointConfig, ...] = (
    EndpointConfig(name="main", url="https://www.packycode.com/api/backend/users/info"),
    EndpointConfig(name="share", url="https://share.packycode.com/api/backend/users/info"),
)


def load_endpoints(yaml_path: str | Path | None = None) -> tuple[EndpointConfig, ...]:
    """Parse an endpoints YAML file into an ordered tuple of EndpointConfig.

    Args:
        yaml_path: Path to the YAML file. ``None`` loads the bundled file.

    Returns:
        The endpoints in file order, without duplicate URLs. Falls back to
        ``DEFAULT_ENDPOINTS`` when the file is missing, unparsable, or yields
        no valid entry.
    """
    path = Path(yaml_path) if yaml_path is not None else BUNDLED_ENDPOINTS_PATH

    if not path.exists():
        logger.warning("Endpoints file not found at %s, using built-in endpoints", path)
        return DEFAULT_ENDPOINTS

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        logger.error("Failed to read endpoints YAML at %s: %s", path, exc)
        return DEFAULT_ENDPOINTS

    if not isinstance(raw, dict) or not isinstance(raw.get("endpoints"), list):
        logger.warning("Endpoints YAML missing 'endpoints' list, using built-in endpoints")
        return DEFAULT_ENDPOINTS

    endpoints: list[EndpointConfig] = []
    seen_urls: set[str] = set()
    for index, entry in enumerate(raw["endpoints"]):
        try:
            endpoint = EndpointConfig.model_validate(entry)
        except ValidationError as exc:
            logger.error("Invalid endpoint entry #%d: %s, skipping", index, exc)
            continue
        if endpoint.url in seen_urls:
            logger.warning("Duplicate endpoint URL %s, skipping", endpoint.url)
            continue
        seen_urls.add(endpoint.url)
        endpoints.append(endpoint)

    if not endpoints:
        logger.warning("No valid endpoints in %s, using built-in endpoints", path)
        return DEFAULT_ENDPOINTS

    return tuple(endpoints)
