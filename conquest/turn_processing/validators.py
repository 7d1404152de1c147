from __future__ import annotations

from dataclasses import dataclass
from abc import ABC, abstractmethod

from conquest.core.errors import (
    IllegalAttackSourceError,
    IllegalAttackTargetError,
    IndexOutOfRangeError,
    InsufficientTroopsError,
)
from conquest.game_store import require_territory
from conquest.models import GamePhase, GameState


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators.

    `origin`/`destination` are only set for attacks.
    """

    action: str
    origin: int | None = None
    destination: int | None = None


class CommandValidator(ABC):
    """A small, composable validation unit for an incoming command."""

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class PhaseValidator(CommandValidator):
    """Validates current game phase for a given action."""

    allowed_phases: set[GamePhase]

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if state.phase not in self.allowed_phases:
            allowed = ",".join(sorted(p.value for p in self.allowed_phases))
            raise ValueError(f"Action '{ctx.action}' not allowed in phase '{state.phase.value}' (allowed: {allowed})")


@dataclass(frozen=True, slots=True)
class IndexRangeValidator(CommandValidator):
    """Both attack indices must name an existing territory."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        for idx in (ctx.origin, ctx.destination):
            if idx is None:
                raise IndexOutOfRangeError(f"Action '{ctx.action}' needs an origin and a destination")
            require_territory(state=state, index=idx)


@dataclass(frozen=True, slots=True)
class AttackSourceValidator(CommandValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        origin = require_territory(state=state, index=ctx.origin)
        if not origin.is_owned_by(state.player_faction):
            raise IllegalAttackSourceError(
                f"You can only attack from territories that belong to your army ({state.player_faction})."
            )


@dataclass(frozen=True, slots=True)
class AttackTargetValidator(CommandValidator):
    """The destination must belong to someone else; this also rules out self-attacks."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        destination = require_territory(state=state, index=ctx.destination)
        if destination.is_owned_by(state.player_faction):
            raise IllegalAttackTargetError("You cannot attack a territory that is already yours.")


@dataclass(frozen=True, slots=True)
class TroopsValidator(CommandValidator):
    min_troops: int = 2

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        origin = require_territory(state=state, index=ctx.origin)
        if origin.troops < self.min_troops:
            raise InsufficientTroopsError(f"You need more than {self.min_troops - 1} troop to attack.")


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[CommandValidator, ...]

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, state=state)


# Order matters: the first failing rule is the one reported to the player.
DEFAULT_ACTION_PIPELINES: dict[str, ValidatorPipeline] = {
    "attack": ValidatorPipeline(
        validators=(
            PhaseValidator(allowed_phases={GamePhase.playing}),
            IndexRangeValidator(),
            AttackSourceValidator(),
            AttackTargetValidator(),
            TroopsValidator(),
        )
    ),
    "check_mission": ValidatorPipeline(
        validators=(PhaseValidator(allowed_phases={GamePhase.playing}),)
    ),
    "quit": ValidatorPipeline(
        validators=(PhaseValidator(allowed_phases={GamePhase.playing}),)
    ),
}


def pipeline_for_action(action: str) -> ValidatorPipeline:
    pipe = DEFAULT_ACTION_PIPELINES.get(action)
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe
