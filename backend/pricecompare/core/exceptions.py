"""Custom exception classes for the application."""


class PriceCompareException(Exception):
    """Base exception for all PriceCompare errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class InvalidQueryError(PriceCompareException):
    """Raised when a search query is missing, not a string, or blank."""

    def __init__(self, message: str = "Valid search query is required"):
        super().__init__(message)


class AdapterError(PriceCompareException):
    """Raised inside an adapter when its upstream call fails.

    Never escapes ``BaseAdapter.fetch_offers``.
    """

    def __init__(self, platform: str, message: str):
        self.platform = platform
        super().__init__(f"Adapter error for {platform}: {message}")


class UpstreamSchemaError(AdapterError):
    """Raised when an upstream payload has no recognizable product list."""

    def __init__(self, platform: str, detail: str = "no product list in payload"):
        super().__init__(platform, detail)
