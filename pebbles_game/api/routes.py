from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

import redis
from fastapi import APIRouter, Depends, HTTPException, status

from pebbles_game.api.deps import get_controller, get_redis, get_settings
from pebbles_game.api.models import (
    ActionResponse,
    EventLogResponse,
    GameConfig,
    GameState,
    parse_action,
)
from pebbles_game.config import Settings
from pebbles_game.controller import GameController
from pebbles_game.errors import (
    GameBusyError,
    GameNotInitializedError,
    GameOverError,
    RandomSourceUnavailable,
)
from pebbles_game.lock import game_lock
from pebbles_game.streams import EVENTS_STREAM, event_fields, game_started_fields, publish, read_recent

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_http(e: Exception) -> HTTPException:
    if isinstance(e, GameNotInitializedError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, (GameOverError, GameBusyError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, RandomSourceUnavailable):
        logger.error("Random source unavailable: %s", e)
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/game", response_model=GameState, status_code=status.HTTP_201_CREATED)
async def initialize_game_route(
    payload: GameConfig,
    r: redis.Redis = Depends(get_redis),
    controller: GameController = Depends(get_controller),
    settings: Settings = Depends(get_settings),
) -> GameState:
    message_id = uuid4().hex
    try:
        with game_lock(r=r, ttl_ms=settings.lock_ttl_ms):
            controller.initialize(payload, message_id=message_id)
            state = controller.query_state()
    except (ValueError, RandomSourceUnavailable) as e:
        raise _to_http(e) from e

    publish(r=r, fields=game_started_fields(state=state, message_id=message_id))
    return state


@router.get("/game", response_model=GameState)
async def get_game_route(controller: GameController = Depends(get_controller)) -> GameState:
    try:
        return controller.query_state()
    except GameNotInitializedError as e:
        raise _to_http(e) from e


@router.post("/game/actions", response_model=ActionResponse)
async def action_route(
    body: dict[str, Any],
    r: redis.Redis = Depends(get_redis),
    controller: GameController = Depends(get_controller),
    settings: Settings = Depends(get_settings),
) -> ActionResponse:
    message_id = uuid4().hex
    try:
        action = parse_action(body)
        with game_lock(r=r, ttl_ms=settings.lock_ttl_ms):
            event = controller.handle(action, message_id=message_id)
            state = controller.query_state()
    except (ValueError, RandomSourceUnavailable) as e:
        raise _to_http(e) from e

    if event is None:
        publish(r=r, fields=game_started_fields(state=state, message_id=message_id))
    else:
        publish(r=r, fields=event_fields(event=event, message_id=message_id))
    return ActionResponse(event=event, state=state)


@router.get("/game/events", response_model=EventLogResponse)
async def get_events_route(count: int = 20, r: redis.Redis = Depends(get_redis)) -> EventLogResponse:
    """Debug endpoint: read the most recent entries of the event outbox stream."""

    if count < 1 or count > 200:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 200")
    return EventLogResponse(stream=EVENTS_STREAM, messages=read_recent(r=r, count=count))
