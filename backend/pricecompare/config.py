"""Application configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # App
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Frontend
    FRONTEND_URL: str = "http://localhost:5173"

    # RapidAPI: real-time-amazon-data
    RAPIDAPI_KEY: str = ""

    # RapidAPI: real-time-flipkart-data2
    RAPIDAPI_FLIPKART_KEY: str = ""

    # Generic product search API (primary host + optional backup host)
    PRODUCT_SEARCH_API_KEY: str = ""
    PRODUCT_SEARCH_API_URL: str = ""
    PRODUCT_SEARCH_BACKUP_API_URL: str = ""

    # Flipkart search page scraping has no credential; it is opt-in.
    FLIPKART_SCRAPE_ENABLED: bool = False

    # Outbound call limits. HTTP_TIMEOUT_SECONDS bounds one request;
    # ADAPTER_DEADLINE_SECONDS caps a whole adapter run, including every
    # probed route, so a multi-route probe can be cut short before its
    # last candidate times out on its own.
    HTTP_TIMEOUT_SECONDS: float = 8.0
    ADAPTER_DEADLINE_SECONDS: float = 20.0

    # Query handling
    MAX_QUERY_LENGTH: int = 200
    DEFAULT_COUNTRY: str = "IN"

    def get_configured_credentials(self) -> dict:
        """Report which upstream credentials are set, without their values.

        Returns:
            Mapping of credential name to a boolean
        """
        return {
            "RAPIDAPI_KEY": bool(self.RAPIDAPI_KEY),
            "RAPIDAPI_FLIPKART_KEY": bool(self.RAPIDAPI_FLIPKART_KEY),
            "PRODUCT_SEARCH_API_KEY": bool(
                self.PRODUCT_SEARCH_API_KEY and self.PRODUCT_SEARCH_API_URL
            ),
            "FLIPKART_SCRAPE_ENABLED": self.FLIPKART_SCRAPE_ENABLED,
        }


settings = Settings()
