"""Synthetic offer generation for when no upstream returns data."""

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote_plus

import structlog

from pricecompare.scrapers.base import Offer
from pricecompare.scrapers.utils.normalizer import IN_STOCK, LIMITED_STOCK

logger = structlog.get_logger(__name__)


BASE_PRICE_MIN = 5000
BASE_PRICE_MAX = 55000  # exclusive
PRICE_VARIANCE = 0.15
# A draw above the threshold adds a discount (~60%) / marks In Stock (~80%)
DISCOUNT_THRESHOLD = 0.4
DISCOUNT_MARKUP_MIN = 0.10
DISCOUNT_MARKUP_SPAN = 0.30
IN_STOCK_THRESHOLD = 0.2


@dataclass(frozen=True)
class DemoSite:
    """A storefront the generator produces an offer for."""

    name: str
    base_url: str
    rating_range: Tuple[float, float]

    def search_url(self, query: str) -> str:
        return f"{self.base_url}/search?q={quote_plus(query)}"


DEMO_SITES: Tuple[DemoSite, ...] = (
    DemoSite("Amazon.in", "https://www.amazon.in", (4.0, 4.8)),
    DemoSite("Flipkart", "https://www.flipkart.com", (3.8, 4.6)),
    DemoSite("Myntra", "https://www.myntra.com", (4.2, 4.7)),
)


class DemoOfferGenerator:
    """Produces a plausible, internally consistent demo offer set.

    All sites share one random base price and each gets its own variance,
    so the spread looks like a real comparison. Every value is drawn from
    ``rng``; pass a seeded or stubbed ``random.Random`` for exact values.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        sites: Sequence[DemoSite] = DEMO_SITES,
    ):
        if not sites:
            raise ValueError("at least one demo site is required")
        self._rng = rng or random.Random()
        self.sites = tuple(sites)

    def generate(self, query: str) -> List[Offer]:
        """Generate one demo offer per configured site.

        Args:
            query: Search query, only used to build the search links

        Returns:
            Offers with ``is_demo=True``, in site order
        """
        rng = self._rng
        base_price = rng.randrange(BASE_PRICE_MIN, BASE_PRICE_MAX)

        offers = []
        for site in self.sites:
            variance = rng.uniform(-PRICE_VARIANCE, PRICE_VARIANCE)
            price = int(base_price * (1 + variance))

            original_price = None
            if rng.random() > DISCOUNT_THRESHOLD:
                markup = DISCOUNT_MARKUP_MIN + rng.random() * DISCOUNT_MARKUP_SPAN
                candidate = int(price * (1 + markup))
                if candidate > price:
                    original_price = candidate

            low, high = site.rating_range
            rating = round(rng.uniform(low, high), 1)

            availability = IN_STOCK if rng.random() > IN_STOCK_THRESHOLD else LIMITED_STOCK

            offers.append(
                Offer(
                    site=site.name,
                    price=price,
                    original_price=original_price,
                    url=site.search_url(query),
                    rating=rating,
                    availability=availability,
                    is_demo=True,
                )
            )

        logger.info("demo_offers_generated", query=query, count=len(offers), base_price=base_price)
        return offers
