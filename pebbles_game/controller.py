from __future__ import annotations

import logging
from uuid import uuid4

from pebbles_game.api.models import (
    CounterTurnEvent,
    GameConfig,
    GamePhase,
    GameState,
    GiveUpAction,
    PebblesAction,
    PebblesEvent,
    Player,
    RestartAction,
    TurnAction,
    WonEvent,
)
from pebbles_game.errors import GameNotInitializedError, PebblesError
from pebbles_game.fsm import PebblesFSM
from pebbles_game.random_source import RandomSource
from pebbles_game.turn_processing.turns import apply_opponent_turn, apply_user_turn, choose_first_player
from pebbles_game.turn_processing.validators import ValidationContext, pipeline_for_action, validate_config

logger = logging.getLogger(__name__)


class GameController:
    """Owns the single live GameState and applies actions to it.

    Every transition validates first, then works on a copy of the state and only
    swaps it in once the whole transition (including any opponent move) succeeded.
    Callers only ever get snapshots back.
    """

    def __init__(self, *, random_source: RandomSource) -> None:
        self._random_source = random_source
        self._state: GameState | None = None

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    def initialize(self, config: GameConfig, *, message_id: str | None = None) -> None:
        validate_config(config)
        self._state = self._new_game(config, message_id=message_id or uuid4().hex)

    def handle(self, action: PebblesAction, *, message_id: str | None = None) -> PebblesEvent | None:
        """Apply one inbound action and return the event to reply with.

        Restart returns None: it behaves like `initialize` and has no reply payload.
        """

        state = self._require_state()
        mid = message_id or uuid4().hex

        ctx = ValidationContext(action=action.action, payload=action)
        try:
            pipeline_for_action(action.action).validate(ctx=ctx, state=state)
        except PebblesError as e:
            logger.warning("Rejected %s action: %s", action.action, e)
            raise

        if isinstance(action, RestartAction):
            self._state = self._new_game(action.to_config(), message_id=mid)
            return None

        working = state.model_copy(deep=True)
        fsm = PebblesFSM(working)

        if isinstance(action, TurnAction):
            apply_user_turn(state=working, amount=action.amount)
            fsm.sync_from_model()
            if fsm.phase == GamePhase.over:
                event: PebblesEvent = WonEvent(winner=Player.user)
            else:
                event = self._counter_turn(working, fsm=fsm, message_id=mid)
        elif isinstance(action, GiveUpAction):
            event = self._counter_turn(working, fsm=fsm, message_id=mid)
        else:
            raise ValueError(f"Unknown action: {action.action}")

        self._state = working
        logger.info("Handled %s -> %s (%s remaining)", action.action, event.event, working.pebbles_remaining)
        return event

    def query_state(self) -> GameState:
        return self._require_state().model_copy(deep=True)

    def _require_state(self) -> GameState:
        if self._state is None:
            raise GameNotInitializedError()
        return self._state

    def _new_game(self, config: GameConfig, *, message_id: str) -> GameState:
        state = GameState.from_config(config)
        first = choose_first_player(
            state=state,
            random_source=self._random_source,
            context=f"{message_id}:first_player",
        )
        if first == Player.program:
            apply_opponent_turn(
                state=state,
                random_source=self._random_source,
                context=f"{message_id}:program_turn",
            )

        logger.info(
            "New %s game: %s pebbles, max %s per turn, %s moves first",
            state.difficulty.value,
            state.pebbles_count,
            state.max_pebbles_per_turn,
            first.value,
        )
        return state

    def _counter_turn(self, state: GameState, *, fsm: PebblesFSM, message_id: str) -> PebblesEvent:
        amount = apply_opponent_turn(
            state=state,
            random_source=self._random_source,
            context=f"{message_id}:program_turn",
        )
        fsm.sync_from_model()
        if fsm.phase == GamePhase.over:
            return WonEvent(winner=Player.program)
        return CounterTurnEvent(amount=amount)
