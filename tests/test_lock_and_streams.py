from __future__ import annotations

import fakeredis
import pytest

from pebbles_game.errors import GameBusyError
from pebbles_game.lock import GAME_LOCK_KEY, game_lock
from pebbles_game.streams import EVENTS_MAXLEN, EVENTS_STREAM, publish


def test_lock_holds_token_and_releases() -> None:
    r = fakeredis.FakeRedis(decode_responses=True)

    with game_lock(r=r) as token:
        assert r.get(GAME_LOCK_KEY) == token
        with pytest.raises(GameBusyError):
            with game_lock(r=r):
                pass

    assert r.get(GAME_LOCK_KEY) is None


def test_lock_release_keeps_foreign_holder() -> None:
    r = fakeredis.FakeRedis(decode_responses=True)

    with game_lock(r=r):
        # Our TTL lapsed and another request took the lock meanwhile.
        r.set(GAME_LOCK_KEY, "someone-else")

    assert r.get(GAME_LOCK_KEY) == "someone-else"


def test_lock_released_on_error() -> None:
    r = fakeredis.FakeRedis(decode_responses=True)

    with pytest.raises(RuntimeError):
        with game_lock(r=r):
            raise RuntimeError("boom")

    assert r.get(GAME_LOCK_KEY) is None


def test_publish_caps_outbox(monkeypatch: pytest.MonkeyPatch) -> None:
    r = fakeredis.FakeRedis(decode_responses=True)
    calls: list[dict[str, object]] = []
    real_xadd = r.xadd

    def _spy(name, fields, **kwargs):  # type: ignore[no-untyped-def]
        calls.append(kwargs)
        return real_xadd(name, fields, **kwargs)

    monkeypatch.setattr(r, "xadd", _spy)

    publish(r=r, fields={"type": "game_started"})

    assert r.xlen(EVENTS_STREAM) == 1
    assert calls == [{"maxlen": EVENTS_MAXLEN, "approximate": True}]
