"""Price comparison service - orchestrates source adapters for one query.

Adapters run concurrently and each one's failure or timeout resolves to an
empty list, so one bad upstream never hides another's offers. When nothing
comes back, the demo generator fills in so a valid query is never answered
with an empty list.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import structlog

from pricecompare.config import settings
from pricecompare.core.exceptions import InvalidQueryError
from pricecompare.scrapers.base import BaseAdapter, Offer
from pricecompare.services.demo_generator import DemoOfferGenerator

logger = structlog.get_logger(__name__)


LIVE_NOTE = "Live data from upstream price APIs"
DEMO_NOTE = "Using demo data. Configure upstream API keys for real prices."


def sanitize_query(query: Any, max_length: Optional[int] = None) -> str:
    """Validate and normalize a search query.

    Args:
        query: Raw query from the caller
        max_length: Truncation length, MAX_QUERY_LENGTH by default

    Returns:
        Trimmed query, truncated to ``max_length`` characters

    Raises:
        InvalidQueryError: If the query is not a string or is blank
    """
    if not isinstance(query, str):
        raise InvalidQueryError("Valid search query is required")

    limit = max_length if max_length is not None else settings.MAX_QUERY_LENGTH
    # Truncation can leave trailing whitespace behind; strip again
    sanitized = query.strip()[:limit].strip()
    if not sanitized:
        raise InvalidQueryError("Search query cannot be empty")
    return sanitized


def sanitize_region(region: Any) -> Optional[str]:
    """Trim an optional region qualifier; blanks and non-strings become None."""
    if not isinstance(region, str):
        return None
    return region.strip() or None


def provenance_note(offers: Sequence[Offer]) -> str:
    """Describe where the offers came from, based on the first offer."""
    if offers and offers[0].is_demo:
        return DEMO_NOTE
    return LIVE_NOTE


@dataclass(frozen=True)
class ComparisonSummary:
    """Headline numbers for a set of offers."""

    offer_count: int
    lowest_price: int
    highest_price: int
    average_price: int
    max_savings: int
    best_site: str

    @classmethod
    def from_offers(cls, offers: Sequence[Offer]) -> Optional["ComparisonSummary"]:
        if not offers:
            return None

        best = min(offers, key=lambda o: o.price)
        highest = max(o.price for o in offers)
        return cls(
            offer_count=len(offers),
            lowest_price=best.price,
            highest_price=highest,
            average_price=round(sum(o.price for o in offers) / len(offers)),
            max_savings=highest - best.price,
            best_site=best.site,
        )


@dataclass(frozen=True)
class ComparisonResult:
    """Offers for one query plus where they came from."""

    query: str
    offers: List[Offer]
    note: str
    is_demo: bool
    sources: Dict[str, int] = field(default_factory=dict)
    search_time_ms: int = 0

    @property
    def summary(self) -> Optional[ComparisonSummary]:
        return ComparisonSummary.from_offers(self.offers)

    def sorted_by_price(self) -> List[Offer]:
        """Offers cheapest first; ``offers`` itself stays in adapter order."""
        return sorted(self.offers, key=lambda o: o.price)


class PriceComparisonService:
    """Aggregates offers from all configured adapters for a query."""

    def __init__(
        self,
        adapters: Sequence[BaseAdapter],
        generator: Optional[DemoOfferGenerator] = None,
        adapter_deadline: Optional[float] = None,
    ):
        """Initialize the comparison service.

        Args:
            adapters: Configured adapters in priority order
            generator: Demo offer generator used as the last resort
            adapter_deadline: Upper bound in seconds for one adapter run
        """
        self.adapters = list(adapters)
        self.generator = generator or DemoOfferGenerator()
        self.adapter_deadline = (
            adapter_deadline if adapter_deadline is not None else settings.ADAPTER_DEADLINE_SECONDS
        )
        self.logger = logger.bind(service="comparison_service")

    async def compare(self, query: Any, region: Any = None) -> ComparisonResult:
        """Compare prices for a query across every configured adapter.

        Args:
            query: Search query; must be a non-blank string
            region: Optional postal code, passed through to adapters

        Returns:
            ComparisonResult whose offers are all live or all demo

        Raises:
            InvalidQueryError: Before any adapter call, for a bad query
        """
        sanitized = sanitize_query(query)
        region = sanitize_region(region)
        started = time.perf_counter()

        self.logger.info(
            "comparison_started",
            query=sanitized,
            region=region,
            adapters=[a.shop_slug for a in self.adapters],
        )

        batches = await asyncio.gather(
            *(self._run_adapter(adapter, sanitized, region) for adapter in self.adapters)
        )

        offers: List[Offer] = []
        sources: Dict[str, int] = {}
        for adapter, batch in zip(self.adapters, batches):
            sources[adapter.shop_slug] = len(batch)
            offers.extend(batch)

        if offers:
            is_demo = False
        else:
            self.logger.info("comparison_falling_back_to_demo", query=sanitized)
            offers = self.generator.generate(sanitized)
            is_demo = True

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        result = ComparisonResult(
            query=sanitized,
            offers=offers,
            note=provenance_note(offers),
            is_demo=is_demo,
            sources=sources,
            search_time_ms=elapsed_ms,
        )

        self.logger.info(
            "comparison_complete",
            query=sanitized,
            count=len(offers),
            is_demo=is_demo,
            sources=sources,
            search_time_ms=elapsed_ms,
        )
        return result

    async def _run_adapter(
        self, adapter: BaseAdapter, query: str, region: Optional[str]
    ) -> List[Offer]:
        """Run one adapter; any exception or deadline overrun becomes []."""
        try:
            offers = await asyncio.wait_for(
                adapter.fetch_offers(query, region),
                timeout=self.adapter_deadline,
            )
        except asyncio.TimeoutError:
            self.logger.warning(
                "adapter_deadline_exceeded",
                adapter=adapter.shop_slug,
                deadline=self.adapter_deadline,
            )
            return []
        except Exception as e:
            self.logger.error(
                "adapter_run_failed",
                adapter=adapter.shop_slug,
                error=str(e),
                exc_info=True,
            )
            return []

        # Demo offers never mix with live ones
        return [offer for offer in offers or [] if not offer.is_demo]
