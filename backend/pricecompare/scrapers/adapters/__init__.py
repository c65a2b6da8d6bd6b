"""Source adapters, one per upstream contract."""

from .amazon import AmazonRapidAPIAdapter
from .flipkart import FlipkartRapidAPIAdapter
from .flipkart_html import FlipkartHTMLAdapter
from .product_search import ProductSearchAdapter

__all__ = [
    # API adapters
    "AmazonRapidAPIAdapter",
    "FlipkartRapidAPIAdapter",
    "ProductSearchAdapter",
    # Scraper adapters
    "FlipkartHTMLAdapter",
]
