"""Price comparison endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from pricecompare.dependencies import get_comparison_service
from pricecompare.schemas import ApiResponse, CompareRequest, ComparisonResponse, ResponseMeta
from pricecompare.services.comparison_service import ComparisonResult, PriceComparisonService

router = APIRouter()


def _envelope(result: ComparisonResult) -> ApiResponse[ComparisonResponse]:
    return ApiResponse(
        data=ComparisonResponse.from_result(result),
        meta=ResponseMeta(
            search_time_ms=result.search_time_ms,
            adapters_queried=len(result.sources),
        ),
    )


@router.post("", response_model=ApiResponse[ComparisonResponse])
async def compare_prices(
    request: CompareRequest,
    service: PriceComparisonService = Depends(get_comparison_service),
):
    """Compare prices for a product across the configured storefronts.

    Offers come back in adapter priority order, not price order; the
    ``summary`` block carries the cheapest offer and price spread. When no
    upstream returns data the offers are demo data and ``isDemo`` is true.
    """
    result = await service.compare(request.query, request.region)
    return _envelope(result)


@router.get("", response_model=ApiResponse[ComparisonResponse])
async def compare_prices_get(
    q: str = Query("", description="Product name to search for"),
    region: Optional[str] = Query(None, description="Optional postal code (PIN)"),
    service: PriceComparisonService = Depends(get_comparison_service),
):
    """Query-string variant of ``POST /compare``."""
    result = await service.compare(q, region)
    return _envelope(result)
