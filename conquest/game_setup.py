from __future__ import annotations

import logging
import random

from conquest.core.events import GameEvent
from conquest.fsm import GameFSM
from conquest.game_store import TerritoryFactory, initialize_territories, touch
from conquest.missions import draw_mission
from conquest.models import GamePhase, GameState, Mission

logger = logging.getLogger(__name__)


def assign_mission(*, state: GameState, rng: random.Random) -> Mission:
    """Draw the game's single mission. It never changes afterwards."""

    if state.mission is not None:
        raise ValueError("Mission already assigned")

    state.mission = draw_mission(rng=rng)
    return state.mission


def start_game(
    *,
    state: GameState,
    rng: random.Random,
    player_faction: str,
    factory: TerritoryFactory,
) -> list[GameEvent]:
    """Run the setup phase and move the game into play.

    Order matches the table: faction first, then the map, then the mission draw.
    """

    if state.phase != GamePhase.setup:
        raise ValueError("Game is not in setup phase")

    fsm = GameFSM(state)

    state.player_faction = player_faction
    initialize_territories(state=state, factory=factory)
    mission = assign_mission(state=state, rng=rng)

    fsm.begin()
    fsm.sync_phase_to_model()
    touch(state=state)

    logger.info("Game %s started: faction=%s mission=%s", state.game_id, state.player_faction, mission.kind.value)

    return [
        GameEvent.now(
            type="GAME_STARTED",
            payload={"faction": state.player_faction, "territories": len(state.territories), "seed": state.seed},
        ),
        GameEvent.now(type="MISSION_ASSIGNED", payload={"mission": mission.kind.value}),
    ]
