"""Service layer for catalog search and per-profile search history."""
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.search_history import SearchHistoryEntry
from services.catalog_client import CatalogClient
from services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

# Result field holding the display title and image for each search type
_TITLE_FIELD = {"person": "name", "movie": "title", "tv": "name"}
_IMAGE_FIELD = {"person": "profile_path", "movie": "poster_path", "tv": "poster_path"}


async def search(
    db: AsyncSession,
    catalog: CatalogClient,
    account_id: UUID,
    profile_id: UUID,
    search_type: str,
    query: str,
) -> list[dict[str, Any]]:
    """
    Search the catalog and record the top hit in the profile's history.

    Raises:
        NotFoundError: If the catalog returns no results (nothing is recorded).
        UpstreamFailureError: If the catalog call fails.
    """
    results = await catalog.search(search_type, query)
    if not results:
        raise NotFoundError("No results found")

    top = results[0]
    entry = SearchHistoryEntry(
        account_id=account_id,
        profile_id=profile_id,
        media_id=int(top.get("id", 0)),
        search_type=search_type,
        title=str(top.get(_TITLE_FIELD[search_type]) or top.get("title") or top.get("name") or ""),
        image=top.get(_IMAGE_FIELD[search_type]),
    )
    db.add(entry)
    await db.flush()
    return results


async def get_search_history(
    db: AsyncSession,
    account_id: UUID,
    profile_id: UUID,
) -> list[SearchHistoryEntry]:
    """Get a profile's search history in the order the searches were made."""
    result = await db.execute(
        select(SearchHistoryEntry)
        .where(
            SearchHistoryEntry.account_id == account_id,
            SearchHistoryEntry.profile_id == profile_id,
        )
        .order_by(SearchHistoryEntry.created_at, SearchHistoryEntry.id),
    )
    return list(result.scalars().all())


async def remove_search_history_item(
    db: AsyncSession,
    account_id: UUID,
    profile_id: UUID,
    media_id: int,
) -> int:
    """
    Remove every history entry for a media id from a profile's history.

    Returns:
        Number of entries removed.

    Raises:
        NotFoundError: If nothing matched.
    """
    result = await db.execute(
        delete(SearchHistoryEntry).where(
            SearchHistoryEntry.account_id == account_id,
            SearchHistoryEntry.profile_id == profile_id,
            SearchHistoryEntry.media_id == media_id,
        ),
    )
    if result.rowcount == 0:
        raise NotFoundError("Item not found in search history")
    return result.rowcount
