#!/usr/bin/env python
"""
Print a priced order for the seed catalog.

Usage:
    python scripts/quote_order.py [LOCATION] [ITEM_ID=QTY ...]
    python scripts/quote_order.py Mykonos 3=2 13=1
"""
import logging
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from catering_pricing.engine import PricingEngine


def parse_items(args: list[str]) -> dict[str, int]:
    items = {}
    for arg in args:
        item_id, _, qty = arg.partition('=')
        items[item_id] = int(qty or 1)
    return items


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    location = sys.argv[1] if len(sys.argv) > 1 else "Thessaloniki"
    items = parse_items(sys.argv[2:]) or {"1": 10, "3": 2}

    engine = PricingEngine(location=location)
    catalog = engine.load_catalog()

    print("=" * 60)
    print(f"ORDER QUOTE - {engine.location}")
    print("=" * 60)

    result = engine.quote(items)
    display = result.to_display_dict(engine.settings.currency_symbol)

    for line in display["Lines"]:
        print(f"  {line['Quantity']:>3} × {line['Name']:<40} {line['Unit Price']:>10} {line['Total']:>10}")
    print()
    print(f"  Subtotal:     {display['Subtotal']}")
    print(f"  Delivery fee: {display['Delivery Fee']}")
    print(f"  Total:        {display['Total']}")
    print(f"  VAT:          {engine.format_display(engine.compute_vat(result.total))}")
    print()
    print(f"Catalog: {len(catalog)} items (hash {result.catalog_hash})")

    if result.warnings:
        print("\nWarnings:")
        for warning in result.warnings:
            print(f"  ⚠ {warning}")

    print("\nTrace:")
    print(result.get_trace_text())


if __name__ == "__main__":
    main()
