"""Price comparison Pydantic schemas for request/response validation.

Response fields use the camelCase names the web front end reads
(``originalPrice``, ``isDemo``).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pricecompare.scrapers.base import Offer
from pricecompare.services.comparison_service import ComparisonResult, ComparisonSummary


class CompareRequest(BaseModel):
    """Request body for a price comparison.

    ``query`` is validated by the service so that a missing, non-string or
    blank query produces the same input error on every entry point.
    ``region`` is likewise left loose; anything but a non-blank string is
    dropped rather than rejected.
    """

    query: Any = Field(default=None, description="Product name to search for")
    region: Any = Field(default=None, description="Optional postal code (PIN); non-strings are ignored")


class OfferResponse(BaseModel):
    """One offer as shown to the front end."""

    model_config = ConfigDict(populate_by_name=True)

    site: str
    price: int
    original_price: Optional[int] = Field(default=None, alias="originalPrice")
    url: str
    rating: Optional[float] = None
    availability: str
    is_demo: bool = Field(alias="isDemo")
    discount_percentage: Optional[int] = Field(default=None, alias="discountPercent")

    @classmethod
    def from_offer(cls, offer: Offer) -> "OfferResponse":
        return cls(
            site=offer.site,
            price=offer.price,
            original_price=offer.original_price,
            url=offer.url,
            rating=offer.rating,
            availability=offer.availability,
            is_demo=offer.is_demo,
            discount_percentage=offer.discount_percentage,
        )


class SummaryResponse(BaseModel):
    """Headline numbers for the result set."""

    model_config = ConfigDict(populate_by_name=True)

    offer_count: int = Field(alias="offerCount")
    lowest_price: int = Field(alias="lowestPrice")
    highest_price: int = Field(alias="highestPrice")
    average_price: int = Field(alias="averagePrice")
    max_savings: int = Field(alias="maxSavings")
    best_site: str = Field(alias="bestSite")

    @classmethod
    def from_summary(cls, summary: ComparisonSummary) -> "SummaryResponse":
        return cls(
            offer_count=summary.offer_count,
            lowest_price=summary.lowest_price,
            highest_price=summary.highest_price,
            average_price=summary.average_price,
            max_savings=summary.max_savings,
            best_site=summary.best_site,
        )


class ComparisonResponse(BaseModel):
    """Offers for a query, in adapter priority order, plus provenance."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    results: List[OfferResponse]
    note: str
    is_demo: bool = Field(alias="isDemo")
    summary: Optional[SummaryResponse] = None
    sources: Dict[str, int] = {}

    @classmethod
    def from_result(cls, result: ComparisonResult) -> "ComparisonResponse":
        summary = result.summary
        return cls(
            query=result.query,
            results=[OfferResponse.from_offer(o) for o in result.offers],
            note=result.note,
            is_demo=result.is_demo,
            summary=SummaryResponse.from_summary(summary) if summary else None,
            sources=result.sources,
        )
