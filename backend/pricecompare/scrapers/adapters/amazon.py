"""Amazon.in adapter backed by the Real-Time Amazon Data RapidAPI.

Documentation: https://rapidapi.com/letscrape-6bRBa3QguO5/api/real-time-amazon-data
"""

from typing import Any, List, Mapping, Optional
from urllib.parse import quote_plus

from pricecompare.config import settings
from pricecompare.core.exceptions import UpstreamSchemaError
from pricecompare.scrapers.base import BaseAPIAdapter, Offer, extract_product_list
from pricecompare.scrapers.utils.endpoints import EndpointCandidate
from pricecompare.scrapers.utils.normalizer import (
    IN_STOCK,
    LIMITED_STOCK,
    ORIGINAL_PRICE_FIELDS,
    PRICE_FIELDS,
    RATING_FIELDS,
    URL_FIELDS,
)


class AmazonRapidAPIAdapter(BaseAPIAdapter):
    """Amazon.in product search through RapidAPI.

    Requires RAPIDAPI_KEY. Products arrive under ``data.products``.
    """

    shop_slug = "amazon"
    shop_name = "Amazon.in"
    max_results = 3

    API_HOST = "real-time-amazon-data.p.rapidapi.com"
    API_BASE_URL = f"https://{API_HOST}/search"
    SEARCH_FALLBACK_URL = "https://www.amazon.in/s?k={query}"

    def __init__(self, api_key: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key if api_key is not None else settings.RAPIDAPI_KEY

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _build_request(self, query: str) -> EndpointCandidate:
        return EndpointCandidate(
            url=self.API_BASE_URL,
            params={
                "query": query,
                "page": "1",
                "country": settings.DEFAULT_COUNTRY,
                "sort_by": "RELEVANCE",
            },
            headers={
                "X-RapidAPI-Key": self.api_key,
                "X-RapidAPI-Host": self.API_HOST,
            },
        )

    async def _fetch_offers(self, query: str, region: Optional[str] = None) -> List[Offer]:
        # Region is accepted for interface parity; this API has no postal code input.
        payload = await self._request_json(self._build_request(query))
        if payload is None:
            return []

        if not isinstance(payload, dict):
            raise UpstreamSchemaError(self.shop_slug, "payload is not a JSON object")

        products = extract_product_list(payload)
        if not products:
            self.logger.info("amazon_no_products", query=query)
            return []

        self.logger.info("amazon_products_received", query=query, count=len(products))
        fallback_url = self.SEARCH_FALLBACK_URL.format(query=quote_plus(query))
        return [
            self._normalize_item(item, fallback_url)
            for item in products[: self.max_results]
        ]

    def _normalize_item(self, item: Mapping[str, Any], fallback_url: str) -> Offer:
        """Convert one RapidAPI product record to an Offer."""
        ex = self.extractor
        price = ex.extract_price(ex.first_present(item, PRICE_FIELDS))

        return Offer(
            site=self.shop_name,
            price=price,
            original_price=ex.extract_original_price(
                ex.first_present(item, ORIGINAL_PRICE_FIELDS), price
            ),
            url=ex.extract_url(ex.first_present(item, URL_FIELDS), fallback_url),
            rating=ex.extract_rating(ex.first_present(item, RATING_FIELDS)),
            availability=IN_STOCK if item.get("delivery") else LIMITED_STOCK,
            is_demo=False,
        )
