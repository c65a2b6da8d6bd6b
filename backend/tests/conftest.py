"""Pytest configuration and shared fixtures."""

import asyncio
import json
import random
from typing import Callable, List, Optional

import httpx
import pytest

from pricecompare.scrapers.base import BaseAdapter, Offer
from pricecompare.scrapers.utils.normalizer import FieldExtractor


@pytest.fixture
def anyio_backend():
    """Use asyncio as the async backend for tests."""
    return "asyncio"


class ScriptedRandom(random.Random):
    """random.Random whose draws are fixed up front.

    ``uniform(a, b)`` is computed by ``random.Random`` as ``a + (b-a) *
    self.random()``, so scripting ``random()`` pins uniform draws too.
    """

    def __init__(self, floats=(), ints=()):
        super().__init__(0)
        self._floats = list(floats)
        self._ints = list(ints)

    def random(self):
        return self._floats.pop(0)

    def randrange(self, start, stop=None, step=1):
        return self._ints.pop(0)


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRandom]:
    """Factory for a random source with pre-chosen draws."""
    return ScriptedRandom


@pytest.fixture
def extractor() -> FieldExtractor:
    """Field extractor with a seeded random source."""
    return FieldExtractor(rng=random.Random(1234))


def json_response(payload, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"Content-Type": "application/json"},
    )


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient that routes every request through ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class FakeAdapter(BaseAdapter):
    """In-memory adapter for aggregator tests.

    Records every call so tests can assert it was (or was not) contacted.
    """

    adapter_type = "api"

    def __init__(
        self,
        slug: str,
        offers: Optional[List[Offer]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.shop_slug = slug
        self.shop_name = slug.title()
        super().__init__()
        self._offers = offers or []
        self._error = error
        self._delay = delay
        self.calls = []

    def is_configured(self) -> bool:
        return True

    async def _fetch_offers(self, query: str, region: Optional[str] = None) -> List[Offer]:
        self.calls.append((query, region))
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error:
            raise self._error
        return list(self._offers)


class UnguardedAdapter(FakeAdapter):
    """Fake adapter that bypasses the fail-soft wrapper and raises directly."""

    async def fetch_offers(self, query: str, region: Optional[str] = None) -> List[Offer]:
        return await self._fetch_offers(query, region)


def make_offer(site: str = "Amazon.in", price: int = 10000, **kwargs) -> Offer:
    kwargs.setdefault("url", f"https://example.com/{site.lower()}")
    return Offer(site=site, price=price, **kwargs)
