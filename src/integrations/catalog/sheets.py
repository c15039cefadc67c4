"""
Google Sheets catalog source.
Reads sheet values through the Sheets v4 REST API with an API key.
"""

import asyncio
import logging
from urllib.parse import quote

import aiohttp

from src.config import settings
from src.integrations.catalog.base import CatalogFetchError, CatalogSource

logger = logging.getLogger(__name__)


class GoogleSheetsSource(CatalogSource):
    """Catalog rows from a Google spreadsheet."""

    BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"

    def __init__(
        self,
        sheet_id: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        base_url: str | None = None,
    ):
        self.sheet_id = sheet_id or settings.sheet_id
        self.api_key = api_key or settings.sheet_api_key
        self.timeout = timeout or settings.catalog_timeout_seconds
        self.base_url = base_url or self.BASE_URL

        if not self.sheet_id or not self.api_key:
            raise ValueError(
                "Google Sheets not configured. "
                "Set SHEET_ID and SHEET_API_KEY in .env file."
            )

    def _values_url(self, sheet_name: str) -> str:
        return f"{self.base_url}/{self.sheet_id}/values/{quote(sheet_name, safe='')}"

    async def fetch(self, sheet_name: str) -> list[list[str]]:
        """Fetch sheet values."""
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    self._values_url(sheet_name),
                    params={"key": self.api_key},
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    response.raise_for_status()
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise CatalogFetchError(f"Sheets request for {sheet_name!r} failed: {e}") from e

        values = data.get("values") if isinstance(data, dict) else None
        if not isinstance(values, list):
            raise CatalogFetchError(f"Sheets response for {sheet_name!r} has no values")

        logger.debug(f"Fetched {len(values)} rows from sheet {sheet_name}")
        return [[str(cell) for cell in row] for row in values if isinstance(row, list)]

    @property
    def name(self) -> str:
        return "google_sheets"
