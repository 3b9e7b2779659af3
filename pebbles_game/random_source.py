from __future__ import annotations

import logging
import random
from collections import deque
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from pebbles_game.config import Settings
from pebbles_game.errors import RandomSourceUnavailable

logger = logging.getLogger(__name__)

_U32_BITS = 32


@runtime_checkable
class RandomSource(Protocol):
    """Supplies uniformly distributed 32-bit values.

    `context` disambiguates draws made within a single request (message id plus a
    per-draw suffix), so a seeded source can derive independent values from it.
    """

    def next_u32(self, context: str) -> int: ...


class SystemRandomSource:
    """OS entropy via `random.SystemRandom`."""

    def __init__(self) -> None:
        self._rng = random.SystemRandom()

    def next_u32(self, context: str) -> int:
        try:
            return self._rng.getrandbits(_U32_BITS)
        except (NotImplementedError, OSError) as e:
            raise RandomSourceUnavailable(f"random draw failed for {context!r}") from e


class SeededRandomSource:
    """Reproducible draws: one `random.Random(seed)` stream shared by every call.

    Message ids are random, so `context` is ignored here; the sequence of draws alone
    determines the game.
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def next_u32(self, context: str) -> int:
        return self._rng.getrandbits(_U32_BITS)


class ScriptedRandomSource:
    """Returns a fixed sequence of values, then fails.

    Intended for tests that need deterministic first-player and Easy-opponent draws.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = deque(values)
        self.contexts: list[str] = []

    @property
    def remaining(self) -> int:
        return len(self._values)

    def push(self, *values: int) -> None:
        self._values.extend(values)

    def next_u32(self, context: str) -> int:
        if not self._values:
            raise RandomSourceUnavailable(f"scripted random source exhausted at {context!r}")
        self.contexts.append(context)
        return self._values.popleft() & 0xFFFFFFFF


def build_random_source(settings: Settings) -> RandomSource:
    if settings.random_seed is not None:
        logger.info("Using seeded random source (seed=%s)", settings.random_seed)
        return SeededRandomSource(settings.random_seed)
    return SystemRandomSource()
