"""Command-line price comparison for testing and debugging adapters.

Runs the same aggregation as the API against whichever adapters have
credentials in the environment (or .env), and prints the offers.

Usage:
    python scripts/compare_prices.py --query "iPhone 15"
    python scripts/compare_prices.py --query "Sony WH-1000XM5" --region 560001
    python scripts/compare_prices.py --query "PS5" --adapter amazon --sort
"""

import argparse
import asyncio
import os
import sys

# Add backend to path so the package imports from a plain checkout too
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from pricecompare.core.exceptions import InvalidQueryError
from pricecompare.scrapers.factory import get_adapter_factory
from pricecompare.scrapers.register_adapters import register_all_adapters
from pricecompare.services.comparison_service import PriceComparisonService


async def run_comparison(query: str, region: str = None, only: str = None, sort: bool = False) -> int:
    """Run one comparison and display the results.

    Args:
        query: Product name to search for
        region: Optional postal code passed through to adapters
        only: Restrict to a single adapter slug
        sort: Print offers cheapest first instead of adapter order

    Returns:
        Process exit code
    """
    factory = register_all_adapters(get_adapter_factory())

    if only:
        if not factory.has_adapter(only):
            print(f"\n❌ Error: Unknown adapter '{only}'")
            print(f"\n📋 Available adapters:")
            for slug in factory.get_registered_shops():
                print(f"   - {slug}")
            return 2
        adapter = factory.create_adapter(only)
        adapters = [adapter] if adapter.is_configured() else []
        if not adapters:
            print(f"⚠️  Adapter '{only}' has no credentials configured; demo data will be used.")
    else:
        adapters = factory.create_configured_adapters()

    print(f"\n{'='*70}")
    print(f"  Comparing prices for: {query}")
    print(f"{'='*70}")
    if region:
        print(f"  📍 Region: {region}")
    print(f"  🔌 Adapters: {', '.join(a.shop_slug for a in adapters) or 'none (demo)'}")
    print(f"{'='*70}\n")

    service = PriceComparisonService(adapters=adapters)
    try:
        result = await service.compare(query, region)
    except InvalidQueryError as e:
        print(f"❌ {e.message}")
        return 2

    offers = result.sorted_by_price() if sort else result.offers
    for i, offer in enumerate(offers, 1):
        print(f"[{i}] {offer.site}")
        print(f"    💰 Price: {_format_price(offer.price)}")
        if offer.original_price:
            print(f"    🔖 Original: {_format_price(offer.original_price)} ({offer.discount_percentage}% off)")
        if offer.rating is not None:
            print(f"    ⭐ Rating: {offer.rating}")
        print(f"    📦 {offer.availability}")
        print(f"    🔗 URL: {offer.url[:80]}")
        print()

    summary = result.summary
    print(f"{'='*70}")
    print(f"  Summary")
    print(f"{'='*70}")
    print(f"  Note: {result.note}")
    print(f"  Offers: {summary.offer_count}")
    print(f"  Best: {summary.best_site} at {_format_price(summary.lowest_price)}")
    print(f"  Avg. Price: {_format_price(summary.average_price)}")
    print(f"  Save up to: {_format_price(summary.max_savings)}")
    if result.sources:
        print(f"  Sources:")
        for slug, count in result.sources.items():
            print(f"    - {slug}: {count}")
    print(f"  Time: {result.search_time_ms} ms")
    print(f"{'='*70}\n")
    return 0


def _format_price(price: int) -> str:
    """Format a rupee amount with Indian digit grouping (12,34,567)."""
    digits = str(price)
    if len(digits) <= 3:
        return f"₹{digits}"
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return f"₹{','.join(groups)},{tail}"


def main():
    """Parse arguments and run the comparison."""
    parser = argparse.ArgumentParser(
        description="Compare product prices across configured storefront adapters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/compare_prices.py --query "iPhone 15"
  python scripts/compare_prices.py --query "iPhone 15" --region 560001
  python scripts/compare_prices.py --query "PS5" --adapter flipkart --sort
        """,
    )

    parser.add_argument("--query", required=True, help="Product name to search for")
    parser.add_argument("--region", help="Optional postal code (PIN), passed through to adapters")
    parser.add_argument("--adapter", help="Only run this adapter slug (e.g., 'amazon')")
    parser.add_argument("--sort", action="store_true", help="Show offers cheapest first")

    args = parser.parse_args()

    sys.exit(asyncio.run(run_comparison(args.query, args.region, args.adapter, args.sort)))


if __name__ == "__main__":
    main()
