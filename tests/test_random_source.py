from __future__ import annotations

import pytest

from pebbles_game.config import Settings
from pebbles_game.errors import RandomSourceUnavailable
from pebbles_game.random_source import (
    RandomSource,
    ScriptedRandomSource,
    SeededRandomSource,
    SystemRandomSource,
    build_random_source,
)


def test_system_source_draws_u32() -> None:
    src = SystemRandomSource()
    for i in range(20):
        assert 0 <= src.next_u32(f"ctx:{i}") < 2**32


def test_system_source_wraps_entropy_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    src = SystemRandomSource()

    def _boom(k: int) -> int:
        raise OSError("no entropy")

    monkeypatch.setattr(src._rng, "getrandbits", _boom)
    with pytest.raises(RandomSourceUnavailable):
        src.next_u32("ctx")


def test_seeded_source_replays_same_stream() -> None:
    a = SeededRandomSource(7)
    b = SeededRandomSource(7)

    # Contexts differ per request (random message ids) and must not change the stream.
    draws_a = [a.next_u32(f"{i}:first_player") for i in range(5)]
    draws_b = [b.next_u32(f"other-{i}") for i in range(5)]

    assert draws_a == draws_b
    assert all(0 <= v < 2**32 for v in draws_a)


def test_scripted_source_replays_then_fails() -> None:
    src = ScriptedRandomSource([3, 2**33 + 5])
    assert src.next_u32("a") == 3
    assert src.next_u32("b") == 5
    assert src.contexts == ["a", "b"]

    with pytest.raises(RandomSourceUnavailable):
        src.next_u32("c")


def test_sources_satisfy_protocol() -> None:
    for src in (SystemRandomSource(), SeededRandomSource(1), ScriptedRandomSource([])):
        assert isinstance(src, RandomSource)


def test_build_random_source_respects_seed() -> None:
    seeded = build_random_source(Settings(random_seed=99))
    assert isinstance(seeded, SeededRandomSource)
    assert seeded.seed == 99
    assert isinstance(build_random_source(Settings()), SystemRandomSource)
