import logging

from fastapi import FastAPI

from pebbles_game.api.routes import router
from pebbles_game.config import load_settings
from pebbles_game.controller import GameController
from pebbles_game.random_source import build_random_source

_settings = load_settings()

app = FastAPI(title="pebbles-game", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=getattr(logging, _settings.log_level, logging.INFO))
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def _startup() -> None:
    # One controller (and so one live game) per process.
    app.state.settings = _settings
    app.state.controller = GameController(random_source=build_random_source(_settings))
    logger.info("Pebbles game controller ready")


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "pebbles-game", "version": "0.1.0"}
