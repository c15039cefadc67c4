"""
Catalog gateway.
Maps sheet rows onto typed records and degrades to cached or built-in data on any failure.
"""

import logging
import re
from typing import Optional

from src.config import settings
from src.core.conversation.models import Category, MenuItem
from src.integrations.catalog.base import (
    CatalogFetchError,
    CatalogMismatchError,
    CatalogSchemaError,
    CatalogSource,
)
from src.integrations.catalog.fallback import StaticCatalogSource

logger = logging.getLogger(__name__)


CATEGORY_FIELDS = ("category", "description", "type")
ITEM_FIELDS = ("parent_category", "item_name", "price", "options", "type")

WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_header(header: str) -> str:
    """'Parent Category ' -> 'parent_category'."""
    return WHITESPACE_PATTERN.sub("_", header.strip().casefold())


def map_rows(rows: list[list[str]], fields: tuple[str, ...]) -> list[dict[str, str]]:
    """
    Map data rows onto header names.

    The header row must name exactly the expected fields, in order.
    Short rows are padded with empty strings, blank rows are skipped.

    Raises:
        CatalogSchemaError: If the header does not match
    """
    if not rows:
        raise CatalogSchemaError("Sheet is empty")

    headers = tuple(normalize_header(h) for h in rows[0])
    if headers != fields:
        raise CatalogSchemaError(f"Unexpected headers {headers}, expected {fields}")

    records = []
    for row in rows[1:]:
        cells = [cell.strip() for cell in row[: len(fields)]]
        if not any(cells):
            continue
        cells += [""] * (len(fields) - len(cells))
        records.append(dict(zip(fields, cells)))
    return records


def parse_price(raw: str) -> int:
    """Parse a whole-currency price like '2,500'."""
    cleaned = raw.replace(",", "").strip()
    try:
        return int(cleaned)
    except ValueError:
        raise CatalogSchemaError(f"Invalid price: {raw!r}") from None


class CatalogGateway:
    """
    Typed access to categories and items.

    Each sheet degrades on failure to its last successful fetch, then to
    the built-in rows.
    """

    FALLBACK_CATEGORIES = "categories"
    FALLBACK_ITEMS = "items"

    def __init__(
        self,
        source: Optional[CatalogSource] = None,
        fallback: Optional[CatalogSource] = None,
        categories_sheet: str | None = None,
        items_sheet: str | None = None,
    ):
        self.source = source
        self.fallback = fallback or StaticCatalogSource()
        self.categories_sheet = categories_sheet or settings.categories_sheet
        self.items_sheet = items_sheet or settings.items_sheet
        self._last_good: dict[str, list] = {}

    async def list_categories(self) -> list[Category]:
        """All categories in sheet order."""
        categories, _ = await self._load(self.categories_sheet, self.FALLBACK_CATEGORIES, self._to_categories)
        return categories

    async def list_items(self, category_name: str) -> list[MenuItem]:
        """
        Items belonging to the category, in sheet order.

        Raises:
            CatalogMismatchError: If only built-in items are available and
                the category is not a built-in one
        """
        items, builtin = await self._load(self.items_sheet, self.FALLBACK_ITEMS, self._to_items)
        matching = [item for item in items if item.parent_category == category_name]
        if builtin and not matching:
            names = {category.name for category in await self.fallback_categories()}
            if category_name not in names:
                raise CatalogMismatchError(f"Built-in items have no category {category_name!r}")
        return matching

    async def fallback_categories(self) -> list[Category]:
        """Built-in categories, consistent with the built-in items."""
        return self._to_categories(await self.fallback.fetch(self.FALLBACK_CATEGORIES))

    async def _load(self, sheet_name: str, fallback_key: str, convert) -> tuple[list, bool]:
        """
        Fetch and convert a sheet.

        Returns:
            Tuple of (records, served from built-in rows)
        """
        if self.source is not None:
            try:
                records = convert(await self.source.fetch(sheet_name))
            except (CatalogFetchError, CatalogSchemaError) as e:
                logger.warning(f"{self.source.name} failed for {sheet_name}: {e}")
            except Exception as e:
                logger.error(f"Unexpected catalog error for {sheet_name}: {e}", exc_info=True)
            else:
                self._last_good[sheet_name] = records
                return list(records), False

            if sheet_name in self._last_good:
                logger.warning(f"Serving last known {sheet_name}")
                return list(self._last_good[sheet_name]), False

            logger.warning(f"Using fallback {fallback_key}")
        return convert(await self.fallback.fetch(fallback_key)), True

    @staticmethod
    def _to_categories(rows: list[list[str]]) -> list[Category]:
        return [
            Category(name=r["category"], description=r["description"], kind=r["type"])
            for r in map_rows(rows, CATEGORY_FIELDS)
        ]

    @staticmethod
    def _to_items(rows: list[list[str]]) -> list[MenuItem]:
        return [
            MenuItem(
                parent_category=r["parent_category"],
                item_name=r["item_name"],
                price=parse_price(r["price"]),
                options=r["options"],
                kind=r["type"],
            )
            for r in map_rows(rows, ITEM_FIELDS)
        ]
