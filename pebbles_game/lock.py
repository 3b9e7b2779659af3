from __future__ import annotations

from contextlib import contextmanager
from uuid import uuid4

import redis

from pebbles_game.errors import GameBusyError

GAME_LOCK_KEY = "lock:pebbles:game"


@contextmanager
def game_lock(*, r: redis.Redis, ttl_ms: int = 5_000):
    """Best-effort lock serializing mutating requests against the single game.

    A second request arriving while the lock is held fails fast instead of waiting.
    Release only deletes the key while it still holds our token, so a holder whose
    TTL expired cannot drop a lock someone else took since. The check and delete are
    two commands, not one atomic Lua script; a multi-replica deployment would want that.
    """

    token = uuid4().hex
    acquired = r.set(GAME_LOCK_KEY, token, nx=True, px=ttl_ms)
    if not acquired:
        raise GameBusyError()
    try:
        yield token
    finally:
        # decode_responses=True clients return str; raw clients return bytes.
        if r.get(GAME_LOCK_KEY) in (token, token.encode()):
            r.delete(GAME_LOCK_KEY)
