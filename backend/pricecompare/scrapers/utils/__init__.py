"""Adapter utilities for field normalization, endpoint probing and request headers."""

from .endpoints import EndpointCandidate, probe_endpoints
from .normalizer import (
    IN_STOCK,
    LIMITED_STOCK,
    FieldExtractor,
    PriceNormalizer,
    normalize_site_name,
)
from .user_agents import USER_AGENTS, get_browser_headers, get_random_user_agent


__all__ = [
    # Endpoint probing
    "EndpointCandidate",
    "probe_endpoints",
    # Normalization
    "IN_STOCK",
    "LIMITED_STOCK",
    "FieldExtractor",
    "PriceNormalizer",
    "normalize_site_name",
    # Headers
    "USER_AGENTS",
    "get_browser_headers",
    "get_random_user_agent",
]
