from __future__ import annotations

from statemachine import State, StateMachine

from pebbles_game.api.models import GamePhase, GameState
from pebbles_game.turn_processing.turns import is_over


def phase_of(game: GameState) -> GamePhase:
    return GamePhase.over if is_over(game) else GamePhase.active


class PebblesFSM(StateMachine):
    """FSM wrapper around GameState.

    - phases: active -> over
    - restart never transitions out of `over`; it replaces the game and builds a new FSM.
    """

    active = State(GamePhase.active.value, value=GamePhase.active.value, initial=True)
    over = State(GamePhase.over.value, value=GamePhase.over.value, final=True)

    finish = active.to(over)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=phase_of(game).value)

    @property
    def phase(self) -> GamePhase:
        return GamePhase(str(self.current_state.value))

    def sync_from_model(self) -> None:
        """Advance to `over` once a move has produced a winner."""

        if is_over(self.game) and self.current_state == self.active:
            self.finish()
