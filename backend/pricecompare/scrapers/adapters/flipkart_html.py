"""Flipkart search page scraper adapter.

Used when no Flipkart API key is available. Parses product cards out of the
server-rendered search page with several selector generations, since
Flipkart rotates its obfuscated class names regularly.
"""

import re
from typing import List, Optional
from urllib.parse import quote_plus, urljoin

from bs4 import BeautifulSoup

from pricecompare.config import settings
from pricecompare.scrapers.base import BaseScraperAdapter, Offer
from pricecompare.scrapers.utils.normalizer import IN_STOCK, LIMITED_STOCK, PriceNormalizer

# Product card containers, newest layout first
_CARD_SELECTORS = [
    "div[data-id]",
    "div._1AtVbE",
    "div._4ddWXP",
]

_TITLE_SELECTORS = ["div.KzDlHZ", "a.wjcEIp", "div._4rR01T", "a.s1Q9rs", "a[title]"]
_PRICE_SELECTORS = ["div.Nx9bqj", "div._30jeq3", "div[class*='price']"]
_ORIGINAL_PRICE_SELECTORS = ["div.yRaY8j", "div._3I9_wc"]
_RATING_SELECTORS = ["div.XQDdHH", "div._3LWZlK"]
_LINK_SELECTORS = ["a[href*='/p/']", "a[href]"]

_BASE_URL = "https://www.flipkart.com"


class FlipkartHTMLAdapter(BaseScraperAdapter):
    """Flipkart search results scraper.

    Opt-in through FLIPKART_SCRAPE_ENABLED.
    """

    shop_slug = "flipkart_html"
    shop_name = "Flipkart"
    max_results = 5

    SEARCH_URL = f"{_BASE_URL}/search"

    def __init__(self, enabled: Optional[bool] = None, **kwargs):
        super().__init__(**kwargs)
        self.enabled = settings.FLIPKART_SCRAPE_ENABLED if enabled is None else enabled

    def is_configured(self) -> bool:
        return self.enabled

    async def _fetch_offers(self, query: str, region: Optional[str] = None) -> List[Offer]:
        html = await self._fetch_html(self.SEARCH_URL, params={"q": query})
        if not html:
            return []
        return self.parse_offers(html, query)

    def parse_offers(self, html: str, query: str) -> List[Offer]:
        """Parse offers from a search results page.

        Args:
            html: Page HTML
            query: Query used for the fallback search link

        Returns:
            Offers in page order, at most ``max_results``; empty if no card matched
        """
        soup = BeautifulSoup(html, "html.parser")
        fallback_url = f"{self.SEARCH_URL}?q={quote_plus(query)}"

        for selector in _CARD_SELECTORS:
            cards = soup.select(selector)
            if not cards:
                continue

            offers = []
            for card in cards:
                offer = self._parse_card(card, fallback_url)
                if offer:
                    offers.append(offer)
                if len(offers) >= self.max_results:
                    break

            if offers:
                self.logger.info("flipkart_cards_parsed", selector=selector, count=len(offers))
                return offers

        self.logger.warning("flipkart_no_cards_matched", query=query)
        return []

    def _parse_card(self, card, fallback_url: str) -> Optional[Offer]:
        """Parse one product card; None if it carries no price."""
        title = self._select_text(card, _TITLE_SELECTORS)
        price_text = self._select_text(card, _PRICE_SELECTORS)
        price = PriceNormalizer.extract_price_from_text(price_text or "")
        if not price:
            return None

        original_price = self.extractor.extract_original_price(
            self._select_text(card, _ORIGINAL_PRICE_SELECTORS), price
        )

        rating = None
        rating_text = self._select_text(card, _RATING_SELECTORS)
        if rating_text and re.search(r"\d", rating_text):
            rating = self.extractor.extract_rating(rating_text)

        url = fallback_url
        for sel in _LINK_SELECTORS:
            link = card.select_one(sel)
            if link and link.get("href"):
                url = urljoin(_BASE_URL, link["href"])
                break

        card_text = card.get_text(" ", strip=True).lower()
        availability = LIMITED_STOCK if "only few left" in card_text else IN_STOCK

        self.logger.debug("flipkart_card_parsed", title=title, price=price)

        return Offer(
            site=self.shop_name,
            price=price,
            original_price=original_price,
            url=url,
            rating=rating,
            availability=availability,
            is_demo=False,
        )

    @staticmethod
    def _select_text(card, selectors: List[str]) -> Optional[str]:
        for sel in selectors:
            elem = card.select_one(sel)
            if elem:
                text = elem.get_text(strip=True)
                if text:
                    return text
        return None
