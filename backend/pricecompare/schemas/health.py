"""Health check schemas."""

from typing import Any, Dict, List

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str
    version: str
    environment: str
    adapters: List[Dict[str, Any]] = []
    live_data_available: bool = False
