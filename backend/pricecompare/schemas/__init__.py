"""Pydantic schemas for API request/response validation."""

from .common import ApiResponse, ErrorDetail, ErrorResponse, ResponseMeta
from .comparison import CompareRequest, ComparisonResponse, OfferResponse, SummaryResponse
from .health import HealthCheckResponse

__all__ = [
    # Common
    "ApiResponse",
    "ErrorDetail",
    "ErrorResponse",
    "ResponseMeta",
    # Comparison
    "CompareRequest",
    "ComparisonResponse",
    "OfferResponse",
    "SummaryResponse",
    # Health
    "HealthCheckResponse",
]
