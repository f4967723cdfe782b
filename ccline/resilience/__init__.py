"""Endpoint resilience — the endpoint cache and endpoint detection."""

from ccline.resilience.endpoint_cache import EndpointCacheStore, fingerprint
from ccline.resilience.endpoint_detector import DetectionResult, EndpointDetector

__all__ = [
    "DetectionResult",
    "EndpointCacheStore",
    "EndpointDetector",
    "fingerprint",
]
