"""
Base interface for catalog sources.
A source returns raw sheet rows: header row first, then data rows.
"""

from abc import ABC, abstractmethod


class CatalogFetchError(Exception):
    """Raised when a catalog source cannot deliver rows."""


class CatalogSchemaError(Exception):
    """Raised when fetched rows do not match the expected sheet schema."""


class CatalogMismatchError(Exception):
    """Raised when items can only come from the built-in data, which lacks the chosen category."""


class CatalogSource(ABC):
    """Abstract base class for catalog row providers."""

    @abstractmethod
    async def fetch(self, sheet_name: str) -> list[list[str]]:
        """
        Fetch all rows of a sheet.

        Args:
            sheet_name: Sheet (table) name

        Returns:
            Rows as lists of string cells, header row first

        Raises:
            CatalogFetchError: If the rows cannot be fetched
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name."""
        pass
