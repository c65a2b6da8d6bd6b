"""Generic product search API adapter.

Talks to a price-data provider that aggregates several storefronts. The
provider is reachable on a primary host and, optionally, a backup host with
the same contract; the backup is only tried when the primary fails.
"""

from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote_plus

from pricecompare.config import settings
from pricecompare.core.exceptions import UpstreamSchemaError
from pricecompare.scrapers.base import BaseAPIAdapter, Offer, extract_product_list
from pricecompare.scrapers.utils.endpoints import EndpointCandidate
from pricecompare.scrapers.utils.normalizer import (
    AVAILABILITY_FIELDS,
    ORIGINAL_PRICE_FIELDS,
    PRICE_FIELDS,
    RATING_FIELDS,
    SITE_FIELDS,
    URL_FIELDS,
    normalize_site_name,
)


class ProductSearchAdapter(BaseAPIAdapter):
    """Multi-store product search API adapter.

    Requires PRODUCT_SEARCH_API_KEY and PRODUCT_SEARCH_API_URL;
    PRODUCT_SEARCH_BACKUP_API_URL is optional.
    """

    shop_slug = "product_search"
    shop_name = "Online Store"
    max_results = 5

    SEARCH_FALLBACK_URL = "https://www.google.com/search?tbm=shop&q={query}"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_urls: Optional[List[str]] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.api_key = api_key if api_key is not None else settings.PRODUCT_SEARCH_API_KEY
        if base_urls is None:
            base_urls = [
                settings.PRODUCT_SEARCH_API_URL,
                settings.PRODUCT_SEARCH_BACKUP_API_URL,
            ]
        self.base_urls = [url.rstrip("/") for url in base_urls if url]

    def is_configured(self) -> bool:
        return bool(self.api_key and self.base_urls)

    def build_candidates(self, query: str, region: Optional[str] = None) -> List[EndpointCandidate]:
        """One request per configured host, primary first."""
        params: Dict[str, str] = {
            "q": query,
            "country": settings.DEFAULT_COUNTRY,
        }
        if region:
            params["pincode"] = region

        return [
            EndpointCandidate(
                url=f"{base_url}/search",
                params=params,
                headers={"X-API-Key": self.api_key, "Accept": "application/json"},
            )
            for base_url in self.base_urls
        ]

    async def _fetch_offers(self, query: str, region: Optional[str] = None) -> List[Offer]:
        payload = await self._probe_json(self.build_candidates(query, region))
        if payload is None:
            return []

        if not isinstance(payload, (dict, list)):
            raise UpstreamSchemaError(self.shop_slug, "payload is not JSON object or array")

        products = extract_product_list(payload)
        if not products:
            self.logger.info("product_search_no_products", query=query)
            return []

        fallback_url = self.SEARCH_FALLBACK_URL.format(query=quote_plus(query))
        return [
            self._normalize_item(item, fallback_url)
            for item in products[: self.max_results]
        ]

    def _normalize_item(self, item: Mapping[str, Any], fallback_url: str) -> Offer:
        """Convert one product record to an Offer.

        The storefront name comes from the record itself; the adapter's
        own name is used when the record does not say.
        """
        ex = self.extractor
        price = ex.extract_price(ex.first_present(item, PRICE_FIELDS))
        site = ex.first_present(item, SITE_FIELDS)

        return Offer(
            site=(normalize_site_name(site) if isinstance(site, str) else None) or self.shop_name,
            price=price,
            original_price=ex.extract_original_price(
                ex.first_present(item, ORIGINAL_PRICE_FIELDS), price
            ),
            url=ex.extract_url(ex.first_present(item, URL_FIELDS), fallback_url),
            rating=ex.extract_rating(ex.first_present(item, RATING_FIELDS)),
            availability=ex.extract_availability(ex.first_present(item, AVAILABILITY_FIELDS)),
            is_demo=False,
        )
