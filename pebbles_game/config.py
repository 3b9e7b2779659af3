from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Settings:
    redis_url: str = "redis://localhost:6379/0"
    # When set, opponent/first-player draws are reproducible across runs.
    random_seed: int | None = None
    log_level: str = "INFO"
    lock_ttl_ms: int = 5_000


def _optional_int(raw: str | None, *, name: str) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def load_settings() -> Settings:
    """Read settings from the process environment."""

    lock_ttl_ms = _optional_int(os.environ.get("PEBBLES_LOCK_TTL_MS"), name="PEBBLES_LOCK_TTL_MS")
    return Settings(
        redis_url=os.environ.get("REDIS_URL", "redis://localhost:6379/0"),
        random_seed=_optional_int(os.environ.get("PEBBLES_RANDOM_SEED"), name="PEBBLES_RANDOM_SEED"),
        log_level=os.environ.get("PEBBLES_LOG_LEVEL", "INFO").upper(),
        lock_ttl_ms=lock_ttl_ms if lock_ttl_ms is not None else 5_000,
    )
