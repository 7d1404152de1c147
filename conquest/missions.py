from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from conquest.models import Mission, MissionKind, Territory

CONQUER_THREE_TARGET = 3
REACH_TROOPS_TARGET = 15


@dataclass(frozen=True, slots=True)
class MissionSpec:
    kind: MissionKind
    number: int
    description: str


MISSION_SPECS: dict[MissionKind, MissionSpec] = {
    MissionKind.conquer_three: MissionSpec(
        MissionKind.conquer_three,
        1,
        f"Conquer at least {CONQUER_THREE_TARGET} territories with your color.",
    ),
    MissionKind.reach_fifteen_troops: MissionSpec(
        MissionKind.reach_fifteen_troops,
        2,
        f"Have at least {REACH_TROOPS_TARGET} troops in total across your territories.",
    ),
    MissionKind.conquer_all: MissionSpec(
        MissionKind.conquer_all,
        3,
        "Dominate every territory on the map.",
    ),
}


def make_mission(kind: MissionKind | str) -> Mission:
    mission_kind = MissionKind(kind) if not isinstance(kind, MissionKind) else kind
    spec = MISSION_SPECS[mission_kind]
    return Mission(kind=spec.kind, number=spec.number, description=spec.description)


def draw_mission(*, rng: random.Random) -> Mission:
    """Pick one of the missions uniformly at random."""

    return make_mission(rng.choice(list(MISSION_SPECS)))


def _owned_count_and_troops(territories: Sequence[Territory], player_faction: str) -> tuple[int, int, int]:
    owned = 0
    troops = 0
    for t in territories:
        if t.faction == player_faction:
            owned += 1
            troops += t.troops
    return owned, troops, len(territories)


def is_satisfied(*, mission: Mission, territories: Sequence[Territory], player_faction: str) -> bool:
    """Return whether `player_faction` currently fulfils `mission`.

    Read-only; thresholds are inclusive. An empty map satisfies conquer_all.
    """

    owned, troops, total = _owned_count_and_troops(territories, player_faction)

    if mission.kind == MissionKind.conquer_three:
        return owned >= CONQUER_THREE_TARGET
    if mission.kind == MissionKind.reach_fifteen_troops:
        return troops >= REACH_TROOPS_TARGET
    if mission.kind == MissionKind.conquer_all:
        return owned == total

    raise ValueError(f"Unknown mission: {mission.kind}")


def describe_progress(*, mission: Mission, territories: Sequence[Territory], player_faction: str) -> str:
    owned, troops, total = _owned_count_and_troops(territories, player_faction)

    if mission.kind == MissionKind.conquer_three:
        return f"{owned}/{CONQUER_THREE_TARGET} territories conquered"
    if mission.kind == MissionKind.reach_fifteen_troops:
        return f"{troops}/{REACH_TROOPS_TARGET} troops"
    if mission.kind == MissionKind.conquer_all:
        return f"{owned}/{total} territories dominated"

    raise ValueError(f"Unknown mission: {mission.kind}")
