"""Flipkart adapter backed by the Real-Time Flipkart Data2 RapidAPI.

The route layout of this API is not stable across plan versions, so the
adapter probes the known shapes in a fixed order and keeps the first one
that answers 2xx.
"""

from typing import Any, List, Mapping, Optional
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
    URL_FIELDS,
)


class FlipkartRapidAPIAdapter(BaseAPIAdapter):
    """Flipkart product search through RapidAPI.

    Requires RAPIDAPI_FLIPKART_KEY.
    """

    shop_slug = "flipkart"
    shop_name = "Flipkart"
    max_results = 5

    API_HOST = "real-time-flipkart-data2.p.rapidapi.com"

    # (path, query parameter name) in probe order
    ROUTES = (
        ("/search", "q"),
        ("/products/search", "query"),
        ("/api/search", "q"),
    )
    SEARCH_FALLBACK_URL = "https://www.flipkart.com/search?q={query}"

    def __init__(self, api_key: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key if api_key is not None else settings.RAPIDAPI_FLIPKART_KEY

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def build_candidates(self, query: str) -> List[EndpointCandidate]:
        """Build one request per known route shape, in probe order."""
        headers = {
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": self.API_HOST,
        }
        return [
            EndpointCandidate(
                url=f"https://{self.API_HOST}{path}",
                params={param: query},
                headers=headers,
            )
            for path, param in self.ROUTES
        ]

    async def _fetch_offers(self, query: str, region: Optional[str] = None) -> List[Offer]:
        payload = await self._probe_json(self.build_candidates(query))
        if payload is None:
            return []

        if not isinstance(payload, (dict, list)):
            raise UpstreamSchemaError(self.shop_slug, "payload is not JSON object or array")

        products = extract_product_list(payload)
        if not products:
            self.logger.info("flipkart_no_products", query=query)
            return []

        fallback_url = self.SEARCH_FALLBACK_URL.format(query=quote_plus(query))
        offers = [
            self._normalize_item(item, fallback_url)
            for item in products[: self.max_results]
        ]
        self.logger.info("flipkart_offers_normalized", query=query, count=len(offers))
        return offers

    def _normalize_item(self, item: Mapping[str, Any], fallback_url: str) -> Offer:
        """Convert one Flipkart API product record to an Offer."""
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
            availability=ex.extract_availability(ex.first_present(item, AVAILABILITY_FIELDS)),
            is_demo=False,
        )
