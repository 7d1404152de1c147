from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from conquest.combat import resolve_attack
from conquest.core.events import GameEvent
from conquest.core.game_state_text import (
    battle_text,
    mission_complete_text,
    mission_pending_text,
    quitting_text,
)
from conquest.fsm import GameFSM
from conquest.game_store import require_territory, touch
from conquest.missions import describe_progress, is_satisfied
from conquest.models import BattleReport, GameState
from conquest.turn_processing.validators import ValidationContext, pipeline_for_action

logger = logging.getLogger(__name__)

ActionName = Literal["attack", "check_mission", "quit"]


@dataclass(frozen=True, slots=True)
class ActionResult:
    state: GameState
    # Outcome text for the player.
    message: str
    events: list[GameEvent]


def _attack(*, state: GameState, rng: random.Random, origin: int, destination: int) -> ActionResult:
    attacker = require_territory(state=state, index=origin)
    defender = require_territory(state=state, index=destination)

    attacker_name = attacker.name
    defender_name = defender.name
    outcome = resolve_attack(attacker=attacker, defender=defender, rng=rng)

    report = BattleReport(
        seq=(state.battles[-1].seq + 1) if state.battles else 1,
        origin=origin,
        destination=destination,
        attacker_name=attacker_name,
        defender_name=defender_name,
        outcome=outcome,
        created_at=datetime.now(tz=UTC),
    )
    state.battles.append(report)

    event = GameEvent.now(
        type="ATTACK_RESOLVED",
        payload={
            "seq": report.seq,
            "origin": origin,
            "destination": destination,
            "outcome": outcome.value,
            "attacker_troops": attacker.troops,
            "defender_troops": defender.troops,
            "defender_faction": defender.faction,
        },
    )
    return ActionResult(state=state, message=battle_text(report=report), events=[event])


def _check_mission(*, state: GameState, fsm: GameFSM) -> ActionResult:
    if state.mission is None:
        raise ValueError("Mission not assigned yet")

    satisfied = is_satisfied(mission=state.mission, territories=state.territories, player_faction=state.player_faction)
    events = [GameEvent.now(type="MISSION_CHECKED", payload={"mission": state.mission.kind.value, "satisfied": satisfied})]

    if satisfied:
        fsm.win()
        logger.info("Game %s won (mission=%s)", state.game_id, state.mission.kind.value)
        events.append(GameEvent.now(type="GAME_WON", payload={"mission": state.mission.kind.value}))
        return ActionResult(state=state, message=mission_complete_text(), events=events)

    progress = describe_progress(mission=state.mission, territories=state.territories, player_faction=state.player_faction)
    return ActionResult(state=state, message=mission_pending_text(progress=progress), events=events)


def dispatch_action(
    *,
    state: GameState,
    rng: random.Random,
    action: ActionName,
    payload: dict[str, Any] | None = None,
) -> ActionResult:
    """Entry point for every playing-phase command.

    Applies a command by:
    - validating it through the action's pipeline (no mutation on failure)
    - mutating territories / advancing the FSM
    - syncing the phase back onto the state

    Rule violations raise `GameError`; unknown actions raise `ValueError`.
    """

    payload = payload or {}
    pipeline = pipeline_for_action(action)

    ctx = ValidationContext(
        action=action,
        origin=payload.get("origin"),
        destination=payload.get("destination"),
    )
    pipeline.validate(ctx=ctx, state=state)

    fsm = GameFSM(state)

    if action == "attack":
        result = _attack(state=state, rng=rng, origin=int(payload["origin"]), destination=int(payload["destination"]))

    elif action == "check_mission":
        result = _check_mission(state=state, fsm=fsm)

    elif action == "quit":
        fsm.leave()
        logger.info("Game %s quit by player", state.game_id)
        result = ActionResult(state=state, message=quitting_text(), events=[GameEvent.now(type="GAME_QUIT", payload={})])

    else:
        raise ValueError(f"Unknown action: {action}")

    fsm.sync_phase_to_model()
    touch(state=state)
    return result
