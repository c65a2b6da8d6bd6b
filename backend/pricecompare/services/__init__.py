"""Business logic services."""

from .comparison_service import (
    DEMO_NOTE,
    LIVE_NOTE,
    ComparisonResult,
    ComparisonSummary,
    PriceComparisonService,
    sanitize_query,
)
from .demo_generator import DEMO_SITES, DemoOfferGenerator, DemoSite

__all__ = [
    "DEMO_NOTE",
    "LIVE_NOTE",
    "ComparisonResult",
    "ComparisonSummary",
    "PriceComparisonService",
    "sanitize_query",
    "DEMO_SITES",
    "DemoOfferGenerator",
    "DemoSite",
]
