from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pebbles_game.api.models import DifficultyLevel


class OpponentStrategy(ABC):
    """Computes how many pebbles the opponent removes from the current position."""

    def needs_draw(self, *, pebbles_remaining: int, max_pebbles_per_turn: int) -> bool:
        """Whether `choose_amount` uses `random_value` in this position."""

        return False

    @abstractmethod
    def choose_amount(self, *, pebbles_remaining: int, max_pebbles_per_turn: int, random_value: int = 0) -> int:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class EasyStrategy(OpponentStrategy):
    """Random removal in [0, max]; takes the rest once the pile is within reach.

    Zero is a legal opponent move at this level.
    """

    def needs_draw(self, *, pebbles_remaining: int, max_pebbles_per_turn: int) -> bool:
        return max_pebbles_per_turn < pebbles_remaining

    def choose_amount(self, *, pebbles_remaining: int, max_pebbles_per_turn: int, random_value: int = 0) -> int:
        if self.needs_draw(pebbles_remaining=pebbles_remaining, max_pebbles_per_turn=max_pebbles_per_turn):
            return random_value % (max_pebbles_per_turn + 1)
        return pebbles_remaining


@dataclass(frozen=True, slots=True)
class HardStrategy(OpponentStrategy):
    """Optimal play for last-pebble-wins: leave a multiple of (max + 1) when possible.

    From a losing position (already a multiple) take a single pebble.
    """

    def choose_amount(self, *, pebbles_remaining: int, max_pebbles_per_turn: int, random_value: int = 0) -> int:
        remainder = pebbles_remaining % (max_pebbles_per_turn + 1)
        if remainder == 0:
            return 1
        return remainder


STRATEGIES: dict[DifficultyLevel, OpponentStrategy] = {
    DifficultyLevel.easy: EasyStrategy(),
    DifficultyLevel.hard: HardStrategy(),
}


def strategy_for(difficulty: DifficultyLevel) -> OpponentStrategy:
    strategy = STRATEGIES.get(difficulty)
    if strategy is None:
        raise ValueError(f"Unknown difficulty: {difficulty}")
    return strategy
