from __future__ import annotations

from collections.abc import Callable, Generator

import fakeredis
import pytest
from fastapi.testclient import TestClient

from pebbles_game.controller import GameController
from pebbles_game.random_source import ScriptedRandomSource


@pytest.fixture()
def scripted_random() -> ScriptedRandomSource:
    """Empty scripted source; tests push the draws they expect to be consumed."""

    return ScriptedRandomSource([])


@pytest.fixture()
def controller(scripted_random: ScriptedRandomSource) -> GameController:
    return GameController(random_source=scripted_random)


@pytest.fixture()
def make_state() -> Callable[..., object]:
    from pebbles_game.api.models import DifficultyLevel, GameState

    def _make(
        *,
        pebbles_count: int = 100,
        max_pebbles_per_turn: int = 20,
        pebbles_remaining: int | None = None,
        difficulty: DifficultyLevel = DifficultyLevel.easy,
        winner=None,
    ) -> GameState:
        return GameState(
            pebbles_count=pebbles_count,
            max_pebbles_per_turn=max_pebbles_per_turn,
            pebbles_remaining=pebbles_count if pebbles_remaining is None else pebbles_remaining,
            difficulty=difficulty,
            winner=winner,
        )

    return _make


@pytest.fixture()
def client_and_redis(
    controller: GameController,
) -> Generator[tuple[TestClient, fakeredis.FakeRedis], None, None]:
    """FastAPI TestClient wired to fakeredis and the scripted-random controller."""

    from pebbles_game.api.deps import get_controller, get_redis
    from pebbles_game.main import app

    r = fakeredis.FakeRedis(decode_responses=True)

    def _override_redis() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override_redis
    app.dependency_overrides[get_controller] = lambda: controller
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()
