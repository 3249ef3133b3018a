import asyncio
from functools import partial
from typing import Awaitable, Callable, List, Optional, Set
from loguru import logger
from ..clients import catalog_client
from ..config import settings
from ..schemas.movies_schemas import Movie, ViewState

LOAD_FAILED_MESSAGE = "Failed to load movies. Try again later."
RELOAD_FAILED_MESSAGE = "Failed to load movies."
SEARCH_FAILED_MESSAGE = "Search failed. Try again."


class SearchCoordinator:
    """
    Owns the view state of one browsing session and turns keystrokes into
    catalog calls.

    The popular list is loaded once on mount. Every keystroke replaces the
    single pending debounce timer; when the timer fires, a query shorter than
    ``min_query_length`` (after trimming) reloads the popular list and a
    longer one runs a search. Only the most recently started fetch may write
    its result, and nothing is written after ``teardown()``.

    :param catalog: Object exposing async ``fetch_popular()`` and
        ``search_by_query(query)``; defaults to the catalog client module.
    :param debounce_seconds: Quiet period before a keystroke is acted on.
    :param min_query_length: Shortest trimmed query that triggers a search.
    :param on_change: Called with the new ViewState after every state write.
    """

    def __init__(
        self,
        catalog=catalog_client,
        *,
        debounce_seconds: Optional[float] = None,
        min_query_length: Optional[int] = None,
        on_change: Optional[Callable[[ViewState], None]] = None
    ):
        self.catalog = catalog
        self.debounce_seconds = (
            settings.SEARCH_DEBOUNCE_SECONDS
            if debounce_seconds is None else debounce_seconds
        )
        self.min_query_length = (
            settings.SEARCH_MIN_QUERY_LENGTH
            if min_query_length is None else min_query_length
        )
        self._on_change = on_change
        self._state = ViewState()
        self._search_timer: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()
        self._alive = True
        self._latest_request = 0

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def pending(self) -> bool:
        """Whether a debounced action is scheduled and has not fired yet."""
        return self._search_timer is not None

    def mount(self) -> asyncio.Task:
        """
        Start the initial popular-list load.

        :return: The task running the load, for callers that want to await it.
        """
        return self._spawn(self._fetch_into_state(
            self.catalog.fetch_popular, LOAD_FAILED_MESSAGE
        ))

    def on_search_change(self, query: Optional[str]) -> None:
        """
        Handle one text-input change: clear the error, then (re)schedule the
        debounced action for ``query``. Must be called from the event loop.
        """
        if not self._alive:
            return
        self._write(error="")
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._search_timer = loop.call_later(
            self.debounce_seconds, self._fire, query
        )

    def teardown(self) -> None:
        """
        Stop the session. The pending timer is cancelled; in-flight fetches
        are left to finish but their results are discarded.
        """
        self._alive = False
        self._cancel_timer()
        logger.debug(
            f"[Coordinator] Torn down with {len(self._tasks)} fetch(es) in flight")

    async def wait_idle(self) -> None:
        """Wait until every fetch started so far has completed."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _cancel_timer(self) -> None:
        if self._search_timer is not None:
            self._search_timer.cancel()
            self._search_timer = None

    def _fire(self, query: Optional[str]) -> None:
        self._search_timer = None
        if not self._alive:
            return
        term = (query or '').strip()
        if len(term) < self.min_query_length:
            logger.debug(
                f"[Coordinator] Query '{term}' below {self.min_query_length} chars, reloading popular")
            self._spawn(self._fetch_into_state(
                self.catalog.fetch_popular, RELOAD_FAILED_MESSAGE
            ))
        else:
            logger.debug(f"[Coordinator] Searching for '{term}'")
            self._spawn(self._fetch_into_state(
                partial(self.catalog.search_by_query, term),
                SEARCH_FAILED_MESSAGE
            ))

    def _spawn(self, coro: Awaitable[None]) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _fetch_into_state(
        self,
        fetch: Callable[[], Awaitable[List[Movie]]],
        failure_message: str
    ) -> None:
        self._latest_request += 1
        request_id = self._latest_request
        self._write(request_id, loading=True)

        changes = {}
        try:
            changes['movies'] = list(await fetch())
        except Exception:
            logger.exception(f"[Coordinator] Request {request_id} failed")
            changes['error'] = failure_message
        finally:
            changes['loading'] = False
            if request_id != self._latest_request:
                logger.debug(
                    f"[Coordinator] Discarding stale response for request {request_id}")
            self._write(request_id, **changes)

    def _write(self, request_id: Optional[int] = None, **changes) -> None:
        if not self._alive:
            return
        if request_id is not None and request_id != self._latest_request:
            return
        new_state = self._state.model_copy(update=changes)
        if new_state == self._state:
            return
        self._state = new_state
        if self._on_change is not None:
            self._on_change(new_state)
