from typing import List
import httpx
from loguru import logger
from ..config import settings
from ..schemas.movies_schemas import Movie
from ..utils.utils_catalog_client import get_popular, get_search_results


async def fetch_popular() -> List[Movie]:
    """
    Fetch the popular movies listing.

    Failures of any kind (transport, HTTP status, malformed payload) are
    logged and reported as an empty list, so this never raises.

    :return: List of popular movies, or an empty list on failure.
    """
    try:
        async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT) as client:
            return await get_popular(client)
    except Exception:
        logger.exception("[Catalog] Error fetching popular movies")
        return []


async def search_by_query(query: str) -> List[Movie]:
    """
    Search movies by free text.

    An empty query returns an empty list without touching the network.
    Failures are logged and reported as an empty list.

    :param query: Raw query text; callers decide on trimming.
    :return: List of matching movies, or an empty list on failure.
    """
    if not query:
        return []
    try:
        async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT) as client:
            return await get_search_results(client, query)
    except Exception:
        logger.exception(f"[Catalog] Error searching movies for '{query}'")
        return []
