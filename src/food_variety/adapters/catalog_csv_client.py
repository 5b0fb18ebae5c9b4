"""HTTP client for the published food catalog spreadsheet."""

import csv
import io
from dataclasses import dataclass

import httpx

from food_variety.services.catalog import CatalogSource


@dataclass
class HttpxCatalogCsvClient(CatalogSource):
    """HTTPX-backed client that downloads and parses the catalog CSV."""

    url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, url: str) -> "HttpxCatalogCsvClient":
        """Create a catalog client with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient(follow_redirects=True))

    async def fetch_rows(self) -> list[list[str]]:
        """Download the CSV and return its rows."""
        response = await self.http_client.get(self.url, timeout=15)
        response.raise_for_status()
        return parse_csv(response.text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def parse_csv(text: str) -> list[list[str]]:
    """Parse CSV text into rows of cells, dropping blank lines."""
    return [row for row in csv.reader(io.StringIO(text)) if row]
