from __future__ import annotations

from collections.abc import Sequence

from conquest.game_loop import GameSession, play_turn, run_game
from conquest.game_store import create_game
from conquest.models import GamePhase, GameState, MissionKind
from fakes import ConsoleFactory, ScriptedRng

# Five territories; the player (Red) owns the first two.
SETUP_LINES = [
    "Red",
    "Alpha", "Red", "5",
    "Bravo", "Red", "2",
    "Charlie", "Green", "3",
    "Delta", "Blue", "4",
    "Echo", "Green", "1",
]


def _script(*lines: str) -> str:
    return "\n".join([*SETUP_LINES, *lines]) + "\n"


def _session(scripted_rng: type[ScriptedRng], *, bits: Sequence[int] = (), mission_index: int = 0, territory_count: int = 5) -> GameSession:
    state = create_game(territory_count=territory_count, seed=99)
    return GameSession(state=state, rng=scripted_rng(bits=bits, choices=[mission_index]))


def test_conquer_three_and_win(console: ConsoleFactory, scripted_rng: type[ScriptedRng]) -> None:
    io, out = console(_script("1", "0 2", "", "2"))
    session = _session(scripted_rng, bits=[1], mission_index=0)

    state = run_game(session=session, io=io)

    assert state.phase == GamePhase.won
    assert state.won is True
    assert state.mission is not None and state.mission.kind == MissionKind.conquer_three
    assert state.battles[0].defender_name == "Charlie"
    # Territories are released once the game ends.
    assert state.territories == []

    text = out.getvalue()
    assert "=== Current Map ===" in text
    assert "Conquer at least 3 territories" in text
    assert "You conquered 'Charlie'" in text
    assert "CONGRATULATIONS" in text
    assert text.rstrip().endswith("Thanks for playing!")

    types = [e.type for e in session.history]
    assert types[:2] == ["GAME_STARTED", "MISSION_ASSIGNED"]
    assert types[-1] == "GAME_WON"


def test_attack_indices_on_separate_lines(console: ConsoleFactory, scripted_rng: type[ScriptedRng]) -> None:
    io, _ = console(_script("1", "0", "3", "", "0"))
    session = _session(scripted_rng, bits=[0])

    state = run_game(session=session, io=io)

    assert state.phase == GamePhase.quit
    assert state.battles[0].destination == 3
    assert state.battles[0].outcome == "defender_won"


def test_rejections_keep_playing(console: ConsoleFactory, scripted_rng: type[ScriptedRng]) -> None:
    io, out = console(
        _script(
            "9", "",            # invalid option
            "1", "2 3", "",     # attack from a foreign territory
            "1", "0 1", "",     # attack own territory
            "1", "0 7", "",     # index out of range
            "1", "0 x", "",     # unreadable index
            "2", "",            # mission not complete
            "0",
        )
    )
    session = _session(scripted_rng)

    state = run_game(session=session, io=io)

    assert state.phase == GamePhase.quit
    assert state.battles == []

    text = out.getvalue()
    assert "Invalid option." in text
    assert "You can only attack from territories that belong to your army (Red)." in text
    assert "You cannot attack a territory that is already yours." in text
    assert "Invalid territory index: 7" in text
    assert "Invalid input." in text
    assert "Mission not complete yet (2/3 territories conquered)" in text
    assert "Quitting the game..." in text

    rejected = [e.payload["error"] for e in session.history if e.type == "ACTION_REJECTED"]
    assert rejected == [
        "InvalidOptionError",
        "IllegalAttackSourceError",
        "IllegalAttackTargetError",
        "IndexOutOfRangeError",
        "InvalidInputError",
    ]


def test_unreadable_menu_choice_skips_pause(console: ConsoleFactory, scripted_rng: type[ScriptedRng]) -> None:
    # No ENTER line after "abc": the menu comes straight back.
    io, out = console(_script("abc", "0"))
    state = run_game(session=_session(scripted_rng), io=io)

    assert state.phase == GamePhase.quit
    assert "Invalid input." in out.getvalue()
    assert "Press ENTER" not in out.getvalue()


def test_setup_reprompts_for_negative_troops(console: ConsoleFactory, scripted_rng: type[ScriptedRng]) -> None:
    lines = list(SETUP_LINES)
    lines[3] = "-2\n5"
    io, out = console("\n".join([*lines, "0"]) + "\n")

    state = run_game(session=_session(scripted_rng), io=io)

    assert state.phase == GamePhase.quit
    assert "Invalid value. Enter a non-negative integer" in out.getvalue()


def test_end_of_input_quits(console: ConsoleFactory, scripted_rng: type[ScriptedRng]) -> None:
    io, _ = console(_script("1", "0 2"))
    session = _session(scripted_rng, bits=[1])

    state = run_game(session=session, io=io)

    assert state.phase == GamePhase.quit
    assert len(state.battles) == 1
    assert session.history[-1].payload == {"reason": "eof"}


def test_end_of_input_during_setup_quits(console: ConsoleFactory, scripted_rng: type[ScriptedRng]) -> None:
    io, _ = console("Red\nAlpha\n")
    state = run_game(session=_session(scripted_rng), io=io)

    assert state.phase == GamePhase.quit
    assert state.mission is None


def test_empty_map_conquer_all_is_won_immediately(console: ConsoleFactory, scripted_rng: type[ScriptedRng]) -> None:
    io, out = console("Red\n2\n")
    session = _session(scripted_rng, mission_index=2, territory_count=0)

    state = run_game(session=session, io=io)

    assert state.won is True
    assert "CONGRATULATIONS" in out.getvalue()


def test_play_turn_without_pause(red_state: GameState, console: ConsoleFactory, scripted_rng: type[ScriptedRng]) -> None:
    io, out = console("2\n")
    session = GameSession(state=red_state, rng=scripted_rng())

    play_turn(session=session, io=io, pause=False)

    assert red_state.phase == GamePhase.playing
    assert "Press ENTER" not in out.getvalue()


def test_new_session_seeds_rng_once() -> None:
    a = GameSession.new(territory_count=3, seed=5)
    b = GameSession.new(territory_count=3, seed=5)
    assert a.state.seed == 5
    assert [a.rng.getrandbits(1) for _ in range(16)] == [b.rng.getrandbits(1) for _ in range(16)]


def test_faction_with_leading_spaces_still_owns_its_territories(
    console: ConsoleFactory, scripted_rng: type[ScriptedRng]
) -> None:
    io, out = console("  Red\nA\n  Red\n5\nB\nGreen\n3\n1\n0 1\n\n0\n")
    session = _session(scripted_rng, bits=[1], territory_count=2)

    state = run_game(session=session, io=io)

    assert state.player_faction == "  Red"
    assert len(state.battles) == 1
    assert state.battles[0].outcome == "attacker_won"
    assert "You conquered 'B'" in out.getvalue()
    assert state.phase == GamePhase.quit
