"""Base source adapter interface.

All upstream-specific adapters inherit from BaseAdapter and implement
``_fetch_offers``. Callers only ever use ``fetch_offers``, which absorbs
every upstream failure into an empty list.
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, List, Mapping, Optional, Sequence

import httpx
import structlog

from pricecompare.config import settings
from pricecompare.core.exceptions import AdapterError
from pricecompare.scrapers.utils.endpoints import EndpointCandidate, probe_endpoints
from pricecompare.scrapers.utils.normalizer import IN_STOCK, FieldExtractor
from pricecompare.scrapers.utils.user_agents import get_browser_headers


# Keys under which upstream APIs nest their product lists, in priority order
PRODUCT_LIST_KEYS = ("products", "data", "results")


@dataclass(frozen=True)
class Offer:
    """Normalized price offer returned by every adapter and the demo generator."""

    site: str
    price: int
    url: str
    original_price: Optional[int] = None
    rating: Optional[float] = None
    availability: str = IN_STOCK
    is_demo: bool = False

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.site:
            raise ValueError("site is required")
        if not self.url:
            raise ValueError("url is required")
        if isinstance(self.price, bool) or not isinstance(self.price, int) or self.price < 0:
            raise ValueError("price must be a non-negative int")
        if self.original_price is not None and self.original_price <= self.price:
            raise ValueError("original_price must be greater than price")
        if self.rating is not None and not 0 <= self.rating <= 5:
            raise ValueError("rating must be between 0 and 5")

    @property
    def savings(self) -> int:
        """Rupees saved against the original price, 0 without one."""
        if self.original_price is None:
            return 0
        return self.original_price - self.price

    @property
    def discount_percentage(self) -> Optional[int]:
        """Whole-percent discount against the original price."""
        if not self.original_price:
            return None
        return round(self.savings / self.original_price * 100)


def extract_product_list(
    payload: Any, keys: Sequence[str] = PRODUCT_LIST_KEYS
) -> List[Mapping[str, Any]]:
    """Find the product list in an upstream payload.

    Tries each key in order and returns the first non-empty list. A dict
    under one of the keys (``{"data": {"products": [...]}}``) is searched
    one level deeper with the same keys.

    Args:
        payload: Decoded JSON body
        keys: Candidate keys in priority order

    Returns:
        List of product records (dicts only), empty if none found
    """
    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, Mapping)]
    if not isinstance(payload, Mapping):
        return []

    for key in keys:
        value = payload.get(key)
        if isinstance(value, Mapping):
            value = extract_product_list(value, keys)
        if isinstance(value, list):
            products = [item for item in value if isinstance(item, Mapping)]
            if products:
                return products
    return []


class BaseAdapter(ABC):
    """Abstract base class for all source adapters (API and scraper).

    Adapters can be API-based or scraper-based, distinguished by adapter_type.
    """

    shop_slug: str = ""  # Must be overridden in subclass (e.g., "amazon")
    shop_name: str = ""  # Storefront label on offers (e.g., "Amazon.in")
    adapter_type: str = ""  # Must be 'api' or 'scraper'
    max_results: int = 5

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        extractor: Optional[FieldExtractor] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the adapter with dependency injection points.

        Args:
            http_client: Shared client; a short-lived one is created per call if None
            extractor: Field extractor (injectable random source)
            timeout: Per-request timeout in seconds
        """
        self.http_client = http_client
        self.extractor = extractor or FieldExtractor()
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self.logger = structlog.get_logger(__name__).bind(adapter=self.shop_slug)

    def describe(self) -> dict:
        """Summarize the adapter for health and debug output."""
        return {
            "slug": self.shop_slug,
            "site": self.shop_name,
            "type": self.adapter_type,
            "configured": self.is_configured(),
            "max_results": self.max_results,
        }

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials (or an opt-in flag) allow this adapter to run."""

    @abstractmethod
    async def _fetch_offers(self, query: str, region: Optional[str] = None) -> List[Offer]:
        """Fetch and normalize offers from the upstream.

        May raise anything; ``fetch_offers`` absorbs it.
        """

    async def fetch_offers(self, query: str, region: Optional[str] = None) -> List[Offer]:
        """Fetch offers for a query, never raising.

        Args:
            query: Sanitized search query
            region: Optional postal code, passed through unmodified

        Returns:
            Up to ``max_results`` offers; empty on any upstream failure
        """
        try:
            offers = await self._fetch_offers(query, region)
        except httpx.TimeoutException as e:
            self.logger.warning("adapter_timeout", query=query, error=str(e))
            return []
        except httpx.HTTPError as e:
            self.logger.warning("adapter_transport_failed", query=query, error=str(e))
            return []
        except AdapterError as e:
            self.logger.warning("adapter_upstream_error", query=query, error=e.message)
            return []
        except Exception as e:
            self.logger.error(
                "adapter_fetch_failed",
                query=query,
                error=str(e),
                exc_info=True,
            )
            return []

        offers = list(offers or [])[: self.max_results]
        self.logger.info("adapter_fetch_complete", query=query, count=len(offers))
        return offers

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a per-call one closed afterwards."""
        if self.http_client is not None:
            yield self.http_client
            return
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            yield client


class BaseAPIAdapter(BaseAdapter):
    """Base class for structured-API adapters.

    Provides the common request paths: a single authenticated GET, or an
    ordered probe across alternate endpoint shapes.
    """

    adapter_type = "api"

    async def _request_json(self, candidate: EndpointCandidate) -> Any:
        """Perform one GET and decode the JSON body.

        Returns:
            Decoded JSON, or None on a non-2xx status
        """
        async with self._client() as client:
            response = await client.get(
                candidate.url,
                params=candidate.params or None,
                headers=candidate.headers or None,
                timeout=self.timeout,
            )

        if not response.is_success:
            self.logger.warning(
                "upstream_http_error",
                url=candidate.url,
                status_code=response.status_code,
            )
            return None
        return response.json()

    async def _probe_json(self, candidates: Sequence[EndpointCandidate]) -> Any:
        """Decode the JSON body of the first candidate that answers 2xx."""
        async with self._client() as client:
            response = await probe_endpoints(
                client, candidates, timeout=self.timeout, adapter=self.shop_slug
            )
        if response is None:
            return None
        return response.json()


class BaseScraperAdapter(BaseAdapter):
    """Base class for HTML scraping adapters.

    Fragile by nature: any markup change yields zero blocks, which is
    reported as an empty result rather than an error.
    """

    adapter_type = "scraper"

    async def _fetch_html(self, url: str, params: Optional[Mapping[str, str]] = None) -> Optional[str]:
        """Fetch a rendered page with browser-like headers.

        Returns:
            Page HTML, or None on a non-2xx status
        """
        async with self._client() as client:
            response = await client.get(
                url,
                params=dict(params) if params else None,
                headers=get_browser_headers(),
                timeout=self.timeout,
            )

        if not response.is_success:
            self.logger.warning("page_http_error", url=url, status_code=response.status_code)
            return None
        return response.text
