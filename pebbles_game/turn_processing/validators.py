from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pebbles_game.api.models import GameConfig, GameState, PebblesAction, RestartAction, TurnAction
from pebbles_game.errors import ConfigValidationError, GameOverError, InvalidTurnAmountError
from pebbles_game.turn_processing.turns import is_over


def validate_config(config: GameConfig) -> None:
    """Reject configurations that cannot produce a playable game."""

    if config.pebbles_count <= config.max_pebbles_per_turn:
        raise ConfigValidationError("pebbles_count must be greater than max_pebbles_per_turn")
    if config.max_pebbles_per_turn < 1:
        raise ConfigValidationError("max_pebbles_per_turn must be at least 1")


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators."""

    action: str
    payload: PebblesAction


class TurnValidator(ABC):
    """A small, composable validation unit for an incoming action."""

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class GameOverValidator(TurnValidator):
    """Deny every action except those explicitly allowed once a winner exists."""

    allow_actions: frozenset[str] = frozenset({"restart"})

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if is_over(state) and ctx.action not in self.allow_actions:
            raise GameOverError()


@dataclass(frozen=True, slots=True)
class TurnAmountValidator(TurnValidator):
    """The user must remove between 1 and max_pebbles_per_turn pebbles."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if not isinstance(ctx.payload, TurnAction):
            return
        amount = ctx.payload.amount
        if amount < 1 or amount > state.max_pebbles_per_turn:
            raise InvalidTurnAmountError(
                f"Invalid turn amount {amount} (allowed: 1..{state.max_pebbles_per_turn})"
            )


@dataclass(frozen=True, slots=True)
class RestartConfigValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if isinstance(ctx.payload, RestartAction):
            validate_config(ctx.payload.to_config())


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[TurnValidator, ...]

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, state=state)


DEFAULT_ACTION_PIPELINES: dict[str, ValidatorPipeline] = {
    "turn": ValidatorPipeline(
        validators=(
            GameOverValidator(),
            TurnAmountValidator(),
        )
    ),
    "give_up": ValidatorPipeline(validators=(GameOverValidator(),)),
    "restart": ValidatorPipeline(validators=(RestartConfigValidator(),)),
}


def pipeline_for_action(action: str) -> ValidatorPipeline:
    pipe = DEFAULT_ACTION_PIPELINES.get(action)
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe
