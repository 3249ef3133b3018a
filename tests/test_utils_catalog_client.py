import pytest
from httpx import HTTPStatusError
from pydantic import ValidationError
from movie_browser.utils import utils_catalog_client as uclient
from movie_browser.utils.utils_catalog_client import (
    get_popular,
    get_search_results,
    poster_url,
    to_card,
    to_view,
)
from movie_browser.schemas.movies_schemas import Movie, ViewState


class FakeResp:
    status_code = 200

    def __init__(self, payload):
        self.payload = payload

    def raise_for_status(self): pass
    def json(self): return self.payload


class DummyClient:
    def __init__(self, payload):
        self.payload = payload
        self.calls = []

    async def get(self, url, params=None):
        self.calls.append((url, params))
        return FakeResp(self.payload)


@pytest.fixture(autouse=True)
def catalog_settings(monkeypatch):
    monkeypatch.setattr(uclient, "BASE_URL", "https://catalog.test/3")
    monkeypatch.setattr(uclient, "TMDB_API_KEY", "secret")
    monkeypatch.setattr(uclient, "IMAGE_BASE_URL",
                        "https://image.tmdb.org/t/p/w500")


# --- raw endpoint calls ---


@pytest.mark.asyncio
async def test_get_popular_hits_popular_endpoint_and_keeps_order():
    client = DummyClient({"results": [
        {"id": 3, "title": "C"},
        {"id": 1, "title": "A"},
        {"id": 2, "title": "B", "adult": False, "genre_ids": [18]},
    ]})
    movies = await get_popular(client)
    assert [m.id for m in movies] == [3, 1, 2]
    assert client.calls == [
        ("https://catalog.test/3/movie/popular", {"api_key": "secret"})
    ]


@pytest.mark.asyncio
async def test_get_search_results_sends_raw_query():
    client = DummyClient({"results": [{"id": 7, "title": "Dog Day Afternoon"}]})
    movies = await get_search_results(client, "  dog  ")
    assert movies[0].title == "Dog Day Afternoon"
    url, params = client.calls[0]
    assert url == "https://catalog.test/3/search/movie"
    assert params == {"query": "  dog  ", "api_key": "secret"}


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"results": None}, {"page": 1}])
async def test_missing_results_mean_empty_list(payload):
    assert await get_popular(DummyClient(payload)) == []


@pytest.mark.asyncio
async def test_malformed_payload_raises_validation_error():
    client = DummyClient({"results": [{"title": "no id"}]})
    with pytest.raises(ValidationError):
        await get_popular(client)


@pytest.mark.asyncio
async def test_http_error_propagates():
    class BadResp:
        status_code = 500

        def raise_for_status(self):
            raise HTTPStatusError("Error", request=None, response=None)

        def json(self): return {}

    class BadClient:
        async def get(self, *args, **kwargs):
            return BadResp()

    with pytest.raises(HTTPStatusError):
        await get_search_results(BadClient(), "x")


# --- presentation ---


def test_poster_url_joins_image_host():
    assert poster_url("/abc.jpg") == "https://image.tmdb.org/t/p/w500/abc.jpg"
    assert poster_url(None) is None
    assert poster_url("") is None


def test_to_card_applies_placeholders():
    card = to_card(Movie(id=1, title="Untitled"))
    assert card.poster_url is None
    assert card.rating_label == "—"
    assert card.release_label == "—"
    assert card.overview_label == "No description available."


def test_to_card_formats_present_fields():
    card = to_card(Movie(
        id=2, title="Dune", poster_path="/dune.jpg", vote_average=8.0,
        release_date="2021-09-15", overview="Spice."
    ))
    assert card.poster_url == "https://image.tmdb.org/t/p/w500/dune.jpg"
    assert card.rating_label == "8"
    assert card.release_label == "2021-09-15"
    assert card.overview_label == "Spice."


def test_to_view_while_loading_shows_skeletons_only():
    view = to_view(ViewState(movies=[Movie(id=1, title="A")], loading=True))
    assert view.skeletons == 10
    assert view.cards == []
    assert view.empty_message is None


def test_to_view_empty_results_shows_message():
    view = to_view(ViewState(movies=[], loading=False, error="Search failed. Try again."))
    assert view.skeletons == 0
    assert view.empty_message == "No movies found"
    assert view.error == "Search failed. Try again."


def test_to_view_lists_cards_in_order():
    view = to_view(ViewState(
        movies=[Movie(id=2, title="B"), Movie(id=1, title="A")], loading=False))
    assert [c.title for c in view.cards] == ["B", "A"]
    assert view.empty_message is None
