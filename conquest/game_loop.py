from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any

from conquest.actions import ActionName, dispatch_action
from conquest.console import GameIO
from conquest.core.errors import GameError, InvalidOptionError
from conquest.core.events import GameEvent
from conquest.core.game_state_text import (
    attack_header,
    banner,
    game_state_to_paragraph,
    goodbye_text,
    map_table,
    menu_text,
    mission_text,
    round_separator,
)
from conquest.fsm import GameFSM
from conquest.game_setup import start_game
from conquest.game_store import (
    DEFAULT_TERRITORY_COUNT,
    TerritoryFactory,
    create_game,
    release_territories,
)
from conquest.models import GamePhase, GameState, Territory

logger = logging.getLogger(__name__)

MENU_OPTIONS: dict[int, ActionName] = {
    1: "attack",
    2: "check_mission",
    0: "quit",
}


@dataclass(slots=True)
class GameSession:
    """One game: its state, its random source and what happened so far.

    The random source is seeded once, when the session is created.
    """

    state: GameState
    rng: random.Random
    history: list[GameEvent] = field(default_factory=list)

    @staticmethod
    def new(*, territory_count: int = DEFAULT_TERRITORY_COUNT, seed: int | None = None) -> "GameSession":
        state = create_game(territory_count=territory_count, seed=seed)
        return GameSession(state=state, rng=random.Random(state.seed))


def make_territory_factory(io: GameIO) -> TerritoryFactory:
    def _read_territory(idx: int) -> Territory:
        io.show(f"Territory {idx + 1}:")
        name = io.prompt_line("Name: ")
        faction = io.prompt_line("Dominant army color: ")
        troops = io.prompt_non_negative_int("Number of troops: ")
        io.show("")
        return Territory(name=name, faction=faction, troops=troops)

    return _read_territory


def run_setup(*, session: GameSession, io: GameIO) -> None:
    io.show(f"{banner()}\n")
    faction = io.prompt_line("Enter the color of your army (e.g. Blue, Red): ")

    io.show("\n=== Territory Registration ===\n")
    events = start_game(
        state=session.state,
        rng=session.rng,
        player_faction=faction,
        factory=make_territory_factory(io),
    )
    session.history.extend(events)


def _read_attack_payload(io: GameIO) -> dict[str, Any]:
    io.show(attack_header())
    origin = io.prompt_int("Enter the index of the ORIGIN territory of the attack: ")
    destination = io.prompt_int("Enter the index of the DESTINATION territory of the attack: ")
    io.discard_line()
    return {"origin": origin, "destination": destination}


def _report_rejection(*, session: GameSession, io: GameIO, action: str, error: GameError) -> None:
    logger.info("Rejected %s: %s (%s)", action, error, type(error).__name__)
    session.history.append(
        GameEvent.now(type="ACTION_REJECTED", payload={"action": action, "error": type(error).__name__})
    )
    io.show(str(error))


def play_turn(*, session: GameSession, io: GameIO, pause: bool = True) -> None:
    """Render the board, read one menu option and carry it out."""

    state = session.state
    if state.mission is None:
        raise ValueError("Game has not been set up")

    io.show(round_separator())
    io.show(map_table(state=state))
    io.show(mission_text(mission=state.mission))
    io.show(menu_text())

    try:
        option = io.prompt_int("Choose an option: ")
    except GameError as e:
        # Unreadable menu input goes straight back to the menu, without a pause.
        _report_rejection(session=session, io=io, action="menu", error=e)
        return
    io.discard_line()

    action = MENU_OPTIONS.get(option)
    try:
        if action is None:
            raise InvalidOptionError("Invalid option.")
        payload = _read_attack_payload(io) if action == "attack" else {}
        result = dispatch_action(state=state, rng=session.rng, action=action, payload=payload)
    except GameError as e:
        _report_rejection(session=session, io=io, action=action or f"option {option}", error=e)
    else:
        session.history.extend(result.events)
        io.show(result.message)

    if pause and state.phase == GamePhase.playing:
        io.wait_for_enter()


def _end_on_eof(*, session: GameSession) -> None:
    fsm = GameFSM(session.state)
    if not fsm.is_over:
        fsm.leave()
        fsm.sync_phase_to_model()
    session.history.append(GameEvent.now(type="GAME_QUIT", payload={"reason": "eof"}))
    logger.info("Input closed; ending game %s", session.state.game_id)


def run_game(*, session: GameSession, io: GameIO, pause: bool = True) -> GameState:
    """Play one full game: setup, then turns until the player wins or quits.

    Territories are released when the game ends; the returned state keeps the
    final phase and the battle log.
    """

    state = session.state
    try:
        run_setup(session=session, io=io)
        while state.phase == GamePhase.playing:
            play_turn(session=session, io=io, pause=pause)
    except EOFError:
        _end_on_eof(session=session)

    logger.info(game_state_to_paragraph(state=state))
    release_territories(state=state)
    io.show(goodbye_text())
    return state
