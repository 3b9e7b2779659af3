from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

U32_MAX = 2**32 - 1

U32 = Annotated[int, Field(ge=0, le=U32_MAX)]


class DifficultyLevel(StrEnum):
    easy = "easy"
    hard = "hard"


class Player(StrEnum):
    user = "user"
    program = "program"


class GamePhase(StrEnum):
    active = "active"
    over = "over"


class GameConfig(BaseModel):
    difficulty: DifficultyLevel = DifficultyLevel.easy
    pebbles_count: U32
    max_pebbles_per_turn: U32


class GameState(BaseModel):
    pebbles_count: U32
    max_pebbles_per_turn: U32
    pebbles_remaining: U32
    difficulty: DifficultyLevel = DifficultyLevel.easy
    first_player: Player = Player.user

    # Set iff pebbles_remaining hit zero; terminal until a restart.
    winner: Player | None = None

    @classmethod
    def from_config(cls, config: GameConfig) -> "GameState":
        return cls(
            pebbles_count=config.pebbles_count,
            max_pebbles_per_turn=config.max_pebbles_per_turn,
            pebbles_remaining=config.pebbles_count,
            difficulty=config.difficulty,
        )


class TurnAction(BaseModel):
    action: Literal["turn"] = "turn"
    amount: U32


class GiveUpAction(BaseModel):
    action: Literal["give_up"] = "give_up"


class RestartAction(BaseModel):
    action: Literal["restart"] = "restart"
    difficulty: DifficultyLevel = DifficultyLevel.easy
    pebbles_count: U32
    max_pebbles_per_turn: U32

    def to_config(self) -> GameConfig:
        return GameConfig(
            difficulty=self.difficulty,
            pebbles_count=self.pebbles_count,
            max_pebbles_per_turn=self.max_pebbles_per_turn,
        )


PebblesAction = Annotated[TurnAction | GiveUpAction | RestartAction, Field(discriminator="action")]

_ACTION_ADAPTER: TypeAdapter[PebblesAction] = TypeAdapter(PebblesAction)


def parse_action(body: object) -> PebblesAction:
    """Validate a raw action body; raises pydantic.ValidationError (a ValueError)."""

    return _ACTION_ADAPTER.validate_python(body)


class CounterTurnEvent(BaseModel):
    event: Literal["counter_turn"] = "counter_turn"
    amount: U32


class WonEvent(BaseModel):
    event: Literal["won"] = "won"
    winner: Player


PebblesEvent = Annotated[CounterTurnEvent | WonEvent, Field(discriminator="event")]


class ActionResponse(BaseModel):
    # None for restart: a fresh game has nothing to report.
    event: PebblesEvent | None = None
    state: GameState


class EventLogResponse(BaseModel):
    stream: str
    messages: list[dict[str, object]]
