import asyncio
from typing import List
from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from loguru import logger
from .config import settings
from .logging_setup import configure_logging
from .clients import catalog_client
from .clients.catalog_client import fetch_popular, search_by_query
from .coordinator.search_coordinator import SearchCoordinator
from .schemas.movies_schemas import ErrorResponse, MovieCard, ViewState
from .utils.utils_catalog_client import to_card, to_view

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Movie Browser")


@app.get('/health')
async def health():
    return {'status': 'ok'}


@app.get('/movies/popular', response_model=List[MovieCard], responses={502: {'model': ErrorResponse}})
async def popular_movies():
    try:
        movies = await fetch_popular()
    except Exception as e:
        raise HTTPException(
            status_code=502, detail=f"Catalog service error: {str(e)}")
    return [to_card(m) for m in movies]


@app.get('/movies/search', response_model=List[MovieCard], responses={502: {'model': ErrorResponse}})
async def search_movies(query: str = ''):
    try:
        movies = await search_by_query(query)
    except Exception as e:
        raise HTTPException(
            status_code=502, detail=f"Catalog service error: {str(e)}")
    return [to_card(m) for m in movies]


async def _push_views(websocket: WebSocket, updates: "asyncio.Queue[ViewState]"):
    while True:
        state = await updates.get()
        await websocket.send_json(to_view(state).model_dump())


@app.websocket('/ws/browse')
async def browse(websocket: WebSocket):
    """
    One browsing session per connection: the client sends the search box
    text on every change and receives a fresh view after every state change.
    """
    await websocket.accept()
    updates: "asyncio.Queue[ViewState]" = asyncio.Queue()
    coordinator = SearchCoordinator(
        catalog=catalog_client, on_change=updates.put_nowait)
    sender = asyncio.create_task(_push_views(websocket, updates))
    updates.put_nowait(coordinator.state)
    coordinator.mount()
    logger.info("[API] Browse session opened")
    try:
        while True:
            coordinator.on_search_change(await websocket.receive_text())
    except WebSocketDisconnect:
        logger.info("[API] Browse session closed")
    finally:
        coordinator.teardown()
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("[API] Browse session push failed")
