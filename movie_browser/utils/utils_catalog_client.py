import httpx
from typing import List, Optional
from ..config import settings
from ..schemas.movies_schemas import (
    BrowserView,
    CatalogPage,
    Movie,
    MovieCard,
    ViewState,
)

TMDB_API_KEY = settings.TMDB_API_KEY
BASE_URL = settings.TMDB_BASE_URL
IMAGE_BASE_URL = settings.IMAGE_BASE_URL

MISSING_LABEL = '—'
NO_OVERVIEW_LABEL = 'No description available.'
EMPTY_RESULTS_MESSAGE = 'No movies found'
SKELETON_CARDS = 10


async def get_popular(client: httpx.AsyncClient) -> List[Movie]:
    """
    Get the popular movies listing from the catalog service.

    :param client: HTTP client for making API requests.
    :return: List of popular movies, in the order the service returned them.
    :raises httpx.HTTPError: on transport failures or non-2xx responses.
    :raises pydantic.ValidationError: when the payload is not a results page.
    """
    resp = await client.get(
        f"{BASE_URL}/movie/popular",
        params={'api_key': TMDB_API_KEY}
    )
    resp.raise_for_status()
    return CatalogPage.model_validate(resp.json()).results


async def get_search_results(
    client: httpx.AsyncClient,
    query: str
) -> List[Movie]:
    """
    Search the catalog service for movies by free text.

    :param client: HTTP client for making API requests.
    :param query: Raw query text, sent as-is (URL-escaped by httpx).
    :return: List of matching movies.
    :raises httpx.HTTPError: on transport failures or non-2xx responses.
    :raises pydantic.ValidationError: when the payload is not a results page.
    """
    resp = await client.get(
        f"{BASE_URL}/search/movie",
        params={'query': query, 'api_key': TMDB_API_KEY}
    )
    resp.raise_for_status()
    return CatalogPage.model_validate(resp.json()).results


def poster_url(poster_path: Optional[str]) -> Optional[str]:
    """
    Build the full poster image URL, or None when the movie has no poster.
    """
    if not poster_path:
        return None
    return f"{IMAGE_BASE_URL}{poster_path}"


def to_card(movie: Movie) -> MovieCard:
    rating = (
        format(movie.vote_average, 'g')
        if movie.vote_average is not None else MISSING_LABEL
    )
    return MovieCard(
        id=movie.id,
        title=movie.title,
        poster_url=poster_url(movie.poster_path),
        rating_label=rating,
        release_label=movie.release_date or MISSING_LABEL,
        overview_label=movie.overview or NO_OVERVIEW_LABEL
    )


def to_view(state: ViewState) -> BrowserView:
    """
    Turn a view state into what a front end draws: skeleton placeholders
    while loading, the empty-state message when there is nothing to show,
    otherwise one card per movie.
    """
    cards = [] if state.loading else [to_card(m) for m in state.movies]
    return BrowserView(
        loading=state.loading,
        error=state.error,
        cards=cards,
        skeletons=SKELETON_CARDS if state.loading else 0,
        empty_message=(
            EMPTY_RESULTS_MESSAGE
            if not state.loading and not cards else None
        )
    )
