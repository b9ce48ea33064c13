#!/usr/bin/env python3
"""
Medicine Search

Searches all enabled pharmacies for a medicine and prints availability.
Falls back to demo data when no pharmacy is enabled (or with --demo).

Usage:
    python3 search_medicines.py аспирин
    python3 search_medicines.py ибупрофен --available-only --city София
    python3 search_medicines.py парацетамол --json
    python3 search_medicines.py аспирин --demo
"""

import argparse
import asyncio
import dataclasses
import json
import sys

from dotenv import load_dotenv

from getmeds.common import (
    SearchFailedError,
    ValidationError,
    load_messages,
    load_retailers,
    load_settings,
    setup_logging,
)
from getmeds.search import Aggregator, SearchSession
from getmeds.transport import RelayClient, create_http_client


def print_report(results: list, query: str, messages: dict):
    """Print search results grouped as cards."""
    labels = messages.get("availability", {})

    print("\n" + "=" * 80)
    print(f"SEARCH RESULTS: {query} ({len(results)})")
    print("=" * 80)

    for result in results:
        medicine = result.medicine
        pharmacy = result.pharmacy
        stock = result.stock
        label = labels.get(stock.availability.value, stock.availability.value)

        print(f"\n{pharmacy.name}  [{label}]")
        print(f"  {medicine.name}")
        if medicine.manufacturer:
            print(f"    Мрежа:      {medicine.manufacturer}")
        if medicine.packaging:
            print(f"    Опаковка:   {medicine.packaging}")
        stock_info = stock.status_text or (f"{stock.quantity} бр. на склад" if stock.in_stock else label)
        print(f"    Наличност:  {stock_info}")
        if stock.in_stock:
            print(f"    Цена:       {result.price} лв.")
        print(f"    Адрес:      {pharmacy.address}")
        if pharmacy.phone:
            print(f"    Телефон:    {pharmacy.phone}")
        print(f"    Раб. време: {pharmacy.working_hours}")
        if medicine.product_link:
            print(f"    Линк:       {medicine.product_link}")

    print("\n" + "=" * 80)


def print_no_results(query: str, messages: dict):
    print(f"\n{messages.get('no_results_title', '')}")
    print(messages.get("no_results", "").format(query=query))
    print(messages.get("no_results_hint", ""))


async def run_search(args, settings) -> list:
    retailers = load_retailers()
    if args.demo:
        retailers = [dataclasses.replace(r, enabled=False) for r in retailers]

    async with create_http_client(settings) as client:
        transport = RelayClient.from_settings(client, settings)
        aggregator = Aggregator(retailers, transport, min_query_length=settings.min_query_length)
        session = SearchSession(aggregator)
        await session.search(args.query)

        results = session.filter(available_only=args.available_only, city=args.city)
        return session.page(0, args.limit or None, results=results)


def main():
    parser = argparse.ArgumentParser(
        description="Search Bulgarian pharmacies for medicine availability"
    )
    parser.add_argument("query", help="Medicine name (at least 2 characters)")
    parser.add_argument("--demo", action="store_true", help="Use demo data instead of live pharmacies")
    parser.add_argument("--no-relay", action="store_true", help="Fetch retailers directly, without the relay")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--available-only", action="store_true", help="Only show in-stock results")
    parser.add_argument("--city", help="Only show results in this city")
    parser.add_argument("--limit", type=int, default=0, help="Maximum results to show (0 = all)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")

    args = parser.parse_args()

    load_dotenv()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    settings = load_settings()
    if args.no_relay:
        settings.use_relay = False
    messages = load_messages(settings.language)

    try:
        results = asyncio.run(run_search(args, settings))
    except ValidationError:
        print(messages["query_too_short"].format(min_length=settings.min_query_length), file=sys.stderr)
        sys.exit(1)
    except SearchFailedError as e:
        print(messages["search_failed"].format(reason=e), file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
    elif not results:
        print_no_results(args.query, messages)
    else:
        print_report(results, args.query, messages)


if __name__ == "__main__":
    main()
