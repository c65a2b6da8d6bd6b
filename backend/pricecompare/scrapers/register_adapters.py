"""Register all source adapters with the factory.

Imported during application startup. The list order below is the adapter
priority order used when merging results.
"""

import structlog

from pricecompare.scrapers.factory import AdapterFactory, get_adapter_factory
from pricecompare.scrapers.adapters import (
    # API adapters
    AmazonRapidAPIAdapter,
    FlipkartRapidAPIAdapter,
    ProductSearchAdapter,
    # Scraper adapters
    FlipkartHTMLAdapter,
)

logger = structlog.get_logger(__name__)


ADAPTERS = [
    ("amazon", AmazonRapidAPIAdapter),
    ("flipkart", FlipkartRapidAPIAdapter),
    ("product_search", ProductSearchAdapter),
    ("flipkart_html", FlipkartHTMLAdapter),
]


def register_all_adapters(factory: AdapterFactory = None) -> AdapterFactory:
    """Register all available adapters with the factory.

    Safe to call more than once; re-registering a slug replaces it in place.

    Args:
        factory: Target factory, the global one by default

    Returns:
        The factory that was populated
    """
    factory = factory or get_adapter_factory()

    for shop_slug, adapter_class in ADAPTERS:
        try:
            factory.register_adapter(shop_slug, adapter_class)
        except ValueError as e:
            logger.error(
                "adapter_registration_failed",
                shop_slug=shop_slug,
                error=str(e),
            )

    logger.info(
        "all_adapters_registered",
        count=len(factory.get_registered_shops()),
        shops=factory.get_registered_shops(),
    )
    return factory
