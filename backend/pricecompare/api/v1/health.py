"""Health check endpoint."""

from fastapi import APIRouter

from pricecompare import __version__
from pricecompare.config import settings
from pricecompare.scrapers.factory import get_adapter_factory
from pricecompare.schemas import HealthCheckResponse

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Return service health and which adapters can run.

    The service is healthy without any upstream credentials; it then
    answers every query with demo data.
    """
    factory = get_adapter_factory()
    adapters = []
    for slug in factory.get_registered_shops():
        adapter = factory.create_adapter(slug)
        if adapter is not None:
            adapters.append(adapter.describe())

    return HealthCheckResponse(
        status="ok",
        version=__version__,
        environment=settings.ENVIRONMENT,
        adapters=adapters,
        live_data_available=any(a["configured"] for a in adapters),
    )


@router.get("/debug/config")
async def debug_config():
    """Debug endpoint to check config (redacted)."""
    if not settings.DEBUG:
        return {"error": "only available in debug mode"}
    return {
        "credentials": settings.get_configured_credentials(),
        "environment": settings.ENVIRONMENT,
        "http_timeout_seconds": settings.HTTP_TIMEOUT_SECONDS,
        "adapter_deadline_seconds": settings.ADAPTER_DEADLINE_SECONDS,
    }
