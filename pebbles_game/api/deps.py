from __future__ import annotations

from collections.abc import Generator

import redis
from fastapi import Request

from pebbles_game.config import Settings
from pebbles_game.controller import GameController
from pebbles_game.infra.redis_client import create_redis


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        client.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_controller(request: Request) -> GameController:
    return request.app.state.controller
