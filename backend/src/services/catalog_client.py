"""HTTP client for the external movie catalog (TMDB) search API."""
import logging
from typing import Any

import httpx

from core.config import Settings
from services.exceptions import UpstreamFailureError

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Thin async wrapper over the catalog's search endpoints.

    Any transport error or non-2xx response becomes UpstreamFailureError.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        """Get common headers for catalog requests."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def search(self, search_type: str, query: str) -> list[dict[str, Any]]:
        """
        Search people, movies, or tv shows.

        Args:
            search_type: One of "person", "movie", "tv".
            query: Free-text query.

        Returns:
            The catalog's result objects, best match first.

        Raises:
            UpstreamFailureError: If the catalog is unreachable or answers with an error.
        """
        params = {
            "query": query,
            "include_adult": "false",
            "language": "en-US",
            "page": 1,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self._get_headers(),
            ) as client:
                response = await client.get(f"/search/{search_type}", params=params)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Catalog search failed with status %s", e.response.status_code, exc_info=True,
            )
            raise UpstreamFailureError("Catalog service error") from e
        except httpx.HTTPError as e:
            logger.error("Catalog search request failed: %s", e, exc_info=True)
            raise UpstreamFailureError("Catalog service unavailable") from e
        except ValueError as e:
            logger.error("Catalog returned a non-JSON body", exc_info=True)
            raise UpstreamFailureError("Catalog service error") from e

        results = body.get("results", []) if isinstance(body, dict) else []
        return [r for r in results if isinstance(r, dict)]


def build_catalog_client(settings: Settings) -> CatalogClient:
    """Build a catalog client from settings."""
    return CatalogClient(
        base_url=settings.tmdb_base_url,
        api_key=settings.tmdb_api_key,
        timeout=settings.tmdb_timeout,
    )
