from __future__ import annotations

from datetime import UTC, datetime
from typing import Mapping, cast

import redis

from pebbles_game.api.models import CounterTurnEvent, GameState, PebblesEvent, WonEvent

EVENTS_STREAM = "pebbles:events"
# Approximate cap on outbox entries; restarts keep appending to the same stream.
EVENTS_MAXLEN = 1_000


def _now_iso() -> str:
    return datetime.now(tz=UTC).isoformat()


def event_fields(*, event: PebblesEvent, message_id: str) -> dict[str, str]:
    fields = {"type": event.event, "message_id": message_id, "ts": _now_iso()}
    if isinstance(event, CounterTurnEvent):
        fields["amount"] = str(event.amount)
    elif isinstance(event, WonEvent):
        fields["winner"] = event.winner.value
    return fields


def game_started_fields(*, state: GameState, message_id: str) -> dict[str, str]:
    return {
        "type": "game_started",
        "message_id": message_id,
        "difficulty": state.difficulty.value,
        "first_player": state.first_player.value,
        "pebbles_remaining": str(state.pebbles_remaining),
        "ts": _now_iso(),
    }


def publish(
    *,
    r: redis.Redis,
    fields: Mapping[str, str],
    stream_key: str = EVENTS_STREAM,
    maxlen: int = EVENTS_MAXLEN,
) -> str:
    """Append an entry to the event outbox stream, trimming old entries."""

    stream_id = r.xadd(stream_key, {str(k): str(v) for k, v in fields.items()}, maxlen=maxlen, approximate=True)
    return cast(str, stream_id)


def read_recent(*, r: redis.Redis, count: int, stream_key: str = EVENTS_STREAM) -> list[dict[str, object]]:
    """Newest-last slice of the outbox."""

    entries = r.xrevrange(stream_key, count=count)
    return [{"id": mid, "fields": fields} for mid, fields in reversed(entries)]
