"""Factory for creating and managing source adapter instances."""

from typing import Dict, List, Optional, Type

import httpx
import structlog

from pricecompare.scrapers.base import BaseAdapter
from pricecompare.scrapers.utils.normalizer import FieldExtractor


logger = structlog.get_logger(__name__)


class AdapterFactory:
    """Factory for creating and configuring adapter instances.

    Registration order is adapter priority order: it decides the order in
    which each adapter's offers appear in a merged result.
    """

    def __init__(self):
        """Initialize the adapter factory."""
        # dicts keep insertion order, which doubles as priority
        self._adapter_registry: Dict[str, Type[BaseAdapter]] = {}

    def register_adapter(self, shop_slug: str, adapter_class: Type[BaseAdapter]) -> None:
        """Register an adapter class for an upstream.

        Args:
            shop_slug: Adapter slug identifier (e.g., "amazon")
            adapter_class: Adapter class (must inherit from BaseAdapter)
        """
        if not issubclass(adapter_class, BaseAdapter):
            raise ValueError(f"Adapter class must inherit from BaseAdapter: {adapter_class}")

        self._adapter_registry[shop_slug] = adapter_class
        logger.debug("adapter_registered", shop_slug=shop_slug, adapter_type=adapter_class.adapter_type)

    def create_adapter(
        self,
        shop_slug: str,
        http_client: Optional[httpx.AsyncClient] = None,
        extractor: Optional[FieldExtractor] = None,
    ) -> Optional[BaseAdapter]:
        """Create an adapter instance with shared dependencies injected.

        Args:
            shop_slug: Adapter slug identifier
            http_client: Optional shared HTTP client
            extractor: Optional shared field extractor

        Returns:
            Adapter instance, or None if not registered
        """
        adapter_class = self._adapter_registry.get(shop_slug)
        if not adapter_class:
            logger.warning("adapter_not_found", shop_slug=shop_slug)
            return None

        return adapter_class(http_client=http_client, extractor=extractor)

    def create_configured_adapters(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        extractor: Optional[FieldExtractor] = None,
    ) -> List[BaseAdapter]:
        """Create every registered adapter whose credentials are available.

        Adapters without credentials are skipped, not attempted.

        Returns:
            Configured adapters in priority order
        """
        adapters: List[BaseAdapter] = []
        skipped: List[str] = []

        for shop_slug in self._adapter_registry:
            adapter = self.create_adapter(shop_slug, http_client=http_client, extractor=extractor)
            if adapter is None:
                continue
            if adapter.is_configured():
                adapters.append(adapter)
            else:
                skipped.append(shop_slug)

        logger.info(
            "configured_adapters_resolved",
            active=[a.shop_slug for a in adapters],
            skipped=skipped,
        )
        return adapters

    def get_registered_shops(self) -> List[str]:
        """Get registered adapter slugs in priority order."""
        return list(self._adapter_registry.keys())

    def has_adapter(self, shop_slug: str) -> bool:
        return shop_slug in self._adapter_registry


# Global factory instance
adapter_factory = AdapterFactory()


def get_adapter_factory() -> AdapterFactory:
    """Get the global adapter factory instance.

    Returns:
        AdapterFactory instance
    """
    return adapter_factory
