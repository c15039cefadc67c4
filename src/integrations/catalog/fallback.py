"""
Built-in Uncle's Fries catalog used whenever the live source is unavailable.
"""

from src.integrations.catalog.base import CatalogSource

FALLBACK_SHEETS: dict[str, list[list[str]]] = {
    "categories": [
        ["Category", "Description", "Type"],
        ["Uncles Favorite Fries", "Tongue grabbing fries", "Basic Fries"],
        ["Uncles Wing Thing", "Tongue grabbing wings", "Basic Wings"],
        ["Uncles Loaded Fries", "One of Wun Fries", "Loaded fries"],
        ["Uncles Deals", "Uncles Pro Deals", "Special Deals"],
        ["Add Ons", "add-ons for your order", "Limited Add Ons"],
    ],
    "items": [
        ["Parent Category", "Item Name", "Price", "Options", "Type"],
        ["Uncles Favorite Fries", "Regular Fries", "2000", "Basic Fries", "item"],
        ["Uncles Favorite Fries", "Red Hot Fries", "2500", "Spicy", "item"],
        ["Uncles Wing Thing", "4pc Chilli Wings", "5500", "Spicy Wings", "item"],
        ["Uncles Wing Thing", "4 Crunch Craft Wings", "5000", "Crunchy Wings", "item"],
        ["Uncles Loaded Fries", "Regular Mince Meat Miracle", "6000", "Minced Meat", "item"],
        ["Uncles Loaded Fries", "Regular Beef Suya", "6000", "Beef suya", "item"],
        ["Uncles Loaded Fries", "Cheesy Beef Suya", "7000", "Cheesy Beef", "item"],
        ["Uncles Loaded Fries", "Cheesed Minced Meat Miracle", "7000", "Cheesy Minced Meat", "item"],
        ["Uncles Deals", "Regular Fries+Crunch Craft", "6500", "Fries and Crunch craft", "item"],
        ["Uncles Deals", "Regular Fries+Chilli Wings", "7000", "Fries and Spicy Wings", "item"],
        ["Uncles Deals", "Red Hot Fries+Chilli Wings", "8000", "spicy fries and spicy wings", "item"],
        ["Uncles Deals", "Red Hot Fries+Crunch Craft", "7500", "spicy fries and crunch craft", "item"],
        ["Add Ons", "Extra Cheese", "1000", "extra cheese on the food", "item"],
        ["Add Ons", "Extra Fries", "1000", "extra fries on the food", "item"],
    ],
}


class StaticCatalogSource(CatalogSource):
    """Serves the built-in rows. Never fails."""

    def __init__(self, sheets: dict[str, list[list[str]]] | None = None):
        self.sheets = sheets if sheets is not None else FALLBACK_SHEETS

    async def fetch(self, sheet_name: str) -> list[list[str]]:
        return [list(row) for row in self.sheets.get(sheet_name, [])]

    @property
    def name(self) -> str:
        return "static"
