"""Configuration module — settings and the ordered endpoint list."""

from ccline.config.endpoints import DEFAULT_ENDPOINTS, load_endpoints
from ccline.config.settings import CclineSettings

__all__ = [
    "CclineSettings",
    "DEFAULT_ENDPOINTS",
    "load_endpoints",
]
