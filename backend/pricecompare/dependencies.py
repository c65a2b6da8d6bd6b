"""FastAPI dependency injection providers."""

from typing import Optional

import httpx
from fastapi import Request

from pricecompare.scrapers.factory import get_adapter_factory
from pricecompare.services.comparison_service import PriceComparisonService
from pricecompare.services.demo_generator import DemoOfferGenerator


def get_http_client(request: Request) -> Optional[httpx.AsyncClient]:
    """Return the application-wide HTTP client opened in the lifespan, if any."""
    return getattr(request.app.state, "http_client", None)


def get_comparison_service(request: Request) -> PriceComparisonService:
    """Build a request-scoped comparison service.

    Adapters are created fresh per request from the read-only registry and
    share only the pooled HTTP client, so nothing mutable crosses requests.

    Usage:
        @router.get("/compare")
        async def compare(service: PriceComparisonService = Depends(get_comparison_service)):
            return await service.compare("iPhone 15")
    """
    adapters = get_adapter_factory().create_configured_adapters(
        http_client=get_http_client(request),
    )
    return PriceComparisonService(adapters=adapters, generator=DemoOfferGenerator())
