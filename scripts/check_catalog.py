#!/usr/bin/env python3
"""
Script to preview the menus users will see.
Run: python -m scripts.check_catalog [--fallback]
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.conversation.messages import render_categories, render_items
from src.integrations.catalog import CatalogGateway, get_catalog_source


async def main(fallback_only: bool = False) -> None:
    """Print the category menu and every category's item menu."""
    source = None if fallback_only else get_catalog_source()
    catalog = CatalogGateway(source=source)

    print(f"Source: {source.name if source else 'built-in'}")
    print("=" * 50)

    categories = await catalog.list_categories()
    print(render_categories(categories))

    for category in categories:
        items = await catalog.list_items(category.name)
        print("\n" + "=" * 50)
        print(render_items(category, items))
        print(f"\n{len(items)} items")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Preview catalog menus")
    parser.add_argument(
        "--fallback",
        action="store_true",
        help="Use the built-in catalog instead of Google Sheets",
    )

    args = parser.parse_args()
    asyncio.run(main(args.fallback))
