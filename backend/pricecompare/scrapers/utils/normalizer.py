"""Data normalization utilities for price, rating and availability fields.

Upstream records are loosely typed: the same concept arrives under different
field names, as numbers or as localized currency strings, or not at all.
Everything here degrades to a plausible default instead of raising.
"""

import math
import random
import re
from typing import Any, Mapping, Optional, Sequence, Tuple

import structlog

logger = structlog.get_logger(__name__)


IN_STOCK = "In Stock"
LIMITED_STOCK = "Limited Stock"

# Placeholder bounds for an unrecoverable price (upper bound exclusive)
PLACEHOLDER_PRICE_MIN = 5000
PLACEHOLDER_PRICE_MAX = 55000

# Default rating range when the upstream gives none
DEFAULT_RATING_MIN = 4.0
DEFAULT_RATING_MAX = 4.8

MAX_RATING = 5.0

# Candidate field names per logical field, in priority order
PRICE_FIELDS: Tuple[str, ...] = (
    "product_price",
    "price",
    "current_price",
    "selling_price",
    "extracted_price",
)
ORIGINAL_PRICE_FIELDS: Tuple[str, ...] = (
    "product_original_price",
    "original_price",
    "mrp",
    "list_price",
)
RATING_FIELDS: Tuple[str, ...] = (
    "product_star_rating",
    "rating",
    "ratings",
    "average_rating",
)
URL_FIELDS: Tuple[str, ...] = (
    "product_url",
    "url",
    "link",
    "product_link",
)
SITE_FIELDS: Tuple[str, ...] = (
    "source",
    "store",
    "merchant",
    "seller",
)
AVAILABILITY_FIELDS: Tuple[str, ...] = (
    "availability",
    "stock_status",
    "in_stock",
)

# First number in a string, with optional thousands separators and fraction
_NUMBER_PATTERN = re.compile(r"\d[\d,]*(?:\.\d+)?")


class PriceNormalizer:
    """Stateless price parsing helpers.

    Prices are whole rupees: fractions are truncated, never rounded.
    """

    @staticmethod
    def clean_price_string(raw: Any) -> Optional[int]:
        """Parse a price string and extract its integer rupee value.

        Handles various formats:
        - "₹12,345" -> 12345
        - "12,345.00" -> 12345
        - "Rs. 1,299" -> 1299
        - "N/A" -> None

        Args:
            raw: Raw price string

        Returns:
            Integer price, or None if no number can be recovered
        """
        if raw is None:
            return None

        text = str(raw).strip()
        if not text:
            return None

        match = _NUMBER_PATTERN.search(text)
        if not match:
            return None

        cleaned = match.group(0).replace(",", "")
        whole = cleaned.split(".", 1)[0]
        if not whole:
            return None

        try:
            return int(whole)
        except ValueError:
            # Past the interpreter's int digit limit
            return None

    @staticmethod
    def coerce_number(value: Any) -> Optional[int]:
        """Convert a numeric or string price value to a non-negative int.

        Args:
            value: int, float or string price

        Returns:
            Integer price, or None for booleans, negatives, NaN or garbage
        """
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return None
            if value < 0:
                return None
            return int(value)
        if isinstance(value, str):
            return PriceNormalizer.clean_price_string(value)
        return None

    @staticmethod
    def extract_price_from_text(text: str) -> Optional[int]:
        """Extract the first positive price-like number from text.

        Useful for HTML text nodes that carry labels around the price.

        Args:
            text: Text containing price information

        Returns:
            Extracted price, or None if not found
        """
        if not text:
            return None

        for match in _NUMBER_PATTERN.findall(text):
            price = PriceNormalizer.clean_price_string(match)
            if price and price > 0:
                return price

        return None


class FieldExtractor:
    """Turns loosely typed upstream fields into Offer-ready values.

    The random source is injectable so tests can pin the synthetic defaults.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    @staticmethod
    def first_present(record: Mapping[str, Any], candidates: Sequence[str]) -> Any:
        """Return the value of the first candidate key that is set.

        Args:
            record: Upstream record
            candidates: Field names in priority order

        Returns:
            First value that is neither None nor an empty string, else None
        """
        if not isinstance(record, Mapping):
            return None

        for key in candidates:
            value = record.get(key)
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            return value
        return None

    def placeholder_price(self) -> int:
        return self._rng.randrange(PLACEHOLDER_PRICE_MIN, PLACEHOLDER_PRICE_MAX)

    def extract_price(self, value: Any) -> int:
        """Extract a whole-rupee price, falling back to a placeholder.

        Args:
            value: Raw price value (number or currency string)

        Returns:
            Parsed price, or a random value in [5000, 55000)
        """
        price = PriceNormalizer.coerce_number(value)
        if price is None:
            placeholder = self.placeholder_price()
            raw = value[:50] if isinstance(value, str) else type(value).__name__
            logger.debug("price_placeholder_used", raw=raw, price=placeholder)
            return placeholder
        return price

    def extract_original_price(self, value: Any, price: int) -> Optional[int]:
        """Extract a pre-discount price, only when it exceeds ``price``."""
        original = PriceNormalizer.coerce_number(value)
        if original is not None and original > price:
            return original
        return None

    def extract_rating(self, value: Any) -> float:
        """Extract a 0-5 rating rounded to one decimal.

        Absent, unparseable or out-of-range values become a random
        default in [4.0, 4.8].
        """
        rating = self._parse_rating(value)
        if rating is None:
            return round(self._rng.uniform(DEFAULT_RATING_MIN, DEFAULT_RATING_MAX), 1)
        return rating

    @staticmethod
    def _parse_rating(value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None

        try:
            if isinstance(value, (int, float)):
                number = float(value)
            else:
                match = re.search(r"\d+(?:\.\d+)?", str(value))
                if not match:
                    return None
                number = float(match.group(0))
        except (ValueError, OverflowError):
            return None

        if not math.isfinite(number) or number < 0 or number > MAX_RATING:
            return None
        return round(number, 1)

    @staticmethod
    def extract_availability(value: Any) -> str:
        """Map an upstream stock field to an availability label.

        Booleans map to In Stock / Limited Stock, strings pass through.
        """
        if isinstance(value, bool):
            return IN_STOCK if value else LIMITED_STOCK
        if isinstance(value, str) and value.strip():
            return value.strip()
        return IN_STOCK

    @staticmethod
    def extract_url(value: Any, fallback: str) -> str:
        """Return an http(s) deep link, or ``fallback`` if there is none."""
        if isinstance(value, str):
            candidate = value.strip()
            if candidate.startswith(("http://", "https://")):
                return candidate
        return fallback


# Known storefront spellings -> display name
_SITE_ALIASES = {
    "amazon": "Amazon.in",
    "flipkart": "Flipkart",
    "myntra": "Myntra",
    "croma": "Croma",
    "reliance digital": "Reliance Digital",
    "tata cliq": "Tata CLiQ",
    "tatacliq": "Tata CLiQ",
    "snapdeal": "Snapdeal",
}


def normalize_site_name(source: Optional[str]) -> Optional[str]:
    """Normalize store names from aggregated search results.

    - "amazon.in", "Amazon India" => "Amazon.in"
    - "FLIPKART.COM" => "Flipkart"
    - unknown names keep their own spelling with collapsed whitespace
    """
    if not source:
        return source

    name = re.sub(r"\s+", " ", source).strip()
    name = re.sub(r"\.(com|in|co\.in)$", "", name, flags=re.IGNORECASE)

    low = name.lower()
    for alias, display in _SITE_ALIASES.items():
        if alias in low:
            return display
    return name or None
