from __future__ import annotations

import logging

from pebbles_game.api.models import GameState, Player
from pebbles_game.errors import InvalidTurnAmountError
from pebbles_game.random_source import RandomSource
from pebbles_game.turn_processing.strategies import strategy_for

logger = logging.getLogger(__name__)


def is_over(state: GameState) -> bool:
    return state.winner is not None


def _remove(*, state: GameState, amount: int, player: Player) -> None:
    state.pebbles_remaining -= amount
    if state.pebbles_remaining == 0:
        state.winner = player


def choose_first_player(*, state: GameState, random_source: RandomSource, context: str) -> Player:
    """Pick who moves first with a single draw: even -> user, odd -> program."""

    value = random_source.next_u32(context)
    state.first_player = Player.user if value % 2 == 0 else Player.program
    return state.first_player


def apply_user_turn(*, state: GameState, amount: int) -> None:
    """Remove `amount` pebbles on behalf of the user.

    The [1, max] bound is checked by the action validators before we get here.
    """

    if amount > state.pebbles_remaining:
        raise InvalidTurnAmountError(
            f"Cannot remove {amount} pebbles, only {state.pebbles_remaining} remaining"
        )
    _remove(state=state, amount=amount, player=Player.user)
    logger.debug("User removed %s, %s remaining", amount, state.pebbles_remaining)


def apply_opponent_turn(*, state: GameState, random_source: RandomSource, context: str) -> int:
    """Let the program move and return how many pebbles it removed."""

    strategy = strategy_for(state.difficulty)
    random_value = 0
    # A forced move (pile within reach) never costs a draw.
    if strategy.needs_draw(pebbles_remaining=state.pebbles_remaining, max_pebbles_per_turn=state.max_pebbles_per_turn):
        random_value = random_source.next_u32(context)
    amount = strategy.choose_amount(
        pebbles_remaining=state.pebbles_remaining,
        max_pebbles_per_turn=state.max_pebbles_per_turn,
        random_value=random_value,
    )
    _remove(state=state, amount=amount, player=Player.program)
    logger.debug(
        "Program (%s) removed %s, %s remaining",
        state.difficulty.value,
        amount,
        state.pebbles_remaining,
    )
    return amount
