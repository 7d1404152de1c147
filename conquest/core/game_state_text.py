from __future__ import annotations

from conquest.game_store import owned_territories
from conquest.models import BattleOutcome, BattleReport, GameState, Mission

_RULE = "=" * 45
_TABLE_RULE = "-" * 61

MENU_LINES: tuple[str, ...] = (
    "1 - Attack phase",
    "2 - Check whether the mission is complete",
    "0 - Quit",
)


def banner() -> str:
    return "=== WAR: TERRITORY CONQUEST ==="


def round_separator() -> str:
    return f"\n{_RULE}"


def map_table(*, state: GameState) -> str:
    """Current territories as a fixed-width table, one row per index."""

    lines: list[str] = [
        "\n=== Current Map ===",
        f"{'#':<3} | {'Territory':<20} | {'Faction':<15} | {'Troops':<6}",
        _TABLE_RULE,
    ]
    for idx, t in enumerate(state.territories):
        lines.append(f"{idx:<3} | {t.name:<20} | {t.faction:<15} | {t.troops:<6}")
    return "\n".join(lines)


def mission_text(*, mission: Mission) -> str:
    return "\n".join(
        [
            "\n=== Your Mission ===",
            f"ID: {mission.number}",
            f"Description: {mission.description}",
        ]
    )


def menu_text() -> str:
    return "\n".join(["\n=== MAIN MENU ===", *MENU_LINES])


def attack_header() -> str:
    return "\n=== Attack Phase ==="


def battle_text(*, report: BattleReport) -> str:
    lines = [f"\nAttacking from '{report.attacker_name}' to '{report.defender_name}'..."]
    if report.outcome == BattleOutcome.attacker_won:
        lines.append(f"The attack succeeded! You conquered '{report.defender_name}'.")
    else:
        lines.append("The attack failed! The defending troops held their ground.")
    return "\n".join(lines)


def mission_complete_text() -> str:
    return "\n*** CONGRATULATIONS! You completed your mission! ***"


def mission_pending_text(*, progress: str) -> str:
    return f"\nMission not complete yet ({progress}). Keep playing!"


def quitting_text() -> str:
    return "\nQuitting the game..."


def goodbye_text() -> str:
    return "\nThanks for playing!"


def game_state_to_paragraph(*, state: GameState) -> str:
    """Deterministic one-paragraph summary, used for logging."""

    sent: list[str] = [f"Game {state.game_id} is in phase '{state.phase.value}'."]
    if state.player_faction:
        owned = len(owned_territories(state=state, faction=state.player_faction))
        sent.append(f"Faction '{state.player_faction}' holds {owned} of {len(state.territories)} territories.")
    if state.mission is not None:
        sent.append(f"Mission: {state.mission.kind.value}.")
    sent.append(f"Battles fought: {len(state.battles)}.")
    return " ".join(sent)
