"""Source adapter system for fetching price offers from upstream providers.

This package provides:
- The Offer record and base adapter classes
- Adapters for each upstream contract (structured APIs and HTML scraping)
- Utility modules for field normalization and endpoint probing
- Factory for creating configured adapter instances
"""

from .base import (
    BaseAdapter,
    BaseAPIAdapter,
    BaseScraperAdapter,
    Offer,
    extract_product_list,
)
from .factory import AdapterFactory, adapter_factory, get_adapter_factory

__all__ = [
    # Base classes
    "BaseAdapter",
    "BaseAPIAdapter",
    "BaseScraperAdapter",
    # Data structures
    "Offer",
    "extract_product_list",
    # Factory
    "AdapterFactory",
    "adapter_factory",
    "get_adapter_factory",
]
