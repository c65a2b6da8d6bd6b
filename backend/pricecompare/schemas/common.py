"""Response envelope shared by every endpoint."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ResponseMeta(BaseModel):
    """Request timing and fan-out details, kept out of the payload itself."""

    model_config = ConfigDict(populate_by_name=True)

    search_time_ms: int = Field(default=0, alias="searchTimeMs")
    adapters_queried: int = Field(default=0, alias="adaptersQueried")


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response envelope."""

    status: str = "success"
    data: T
    meta: Optional[ResponseMeta] = None


class ErrorDetail(BaseModel):
    """Error detail for error responses.

    ``field`` names the offending request field for input errors.
    """

    code: str
    message: str
    field: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error envelope; never carries partial data."""

    status: str = "error"
    error: ErrorDetail
