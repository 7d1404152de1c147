"""Coin-flip combat between two territories.

The caller checks attack legality first (see `turn_processing.validators`);
this module only draws the outcome and applies it.
"""

from __future__ import annotations

import logging
import random

from conquest.models import BattleOutcome, Territory

logger = logging.getLogger(__name__)

# An attacker that loses never drops below this many troops.
GARRISON_FLOOR = 1


def flip_coin(*, rng: random.Random) -> BattleOutcome:
    return BattleOutcome.attacker_won if rng.getrandbits(1) else BattleOutcome.defender_won


def apply_outcome(*, attacker: Territory, defender: Territory, outcome: BattleOutcome) -> None:
    if outcome == BattleOutcome.attacker_won:
        # One troop moves in to hold the conquered territory.
        attacker.troops -= 1
        defender.troops = 1
        defender.faction = attacker.faction
    else:
        attacker.troops = max(attacker.troops - 1, GARRISON_FLOOR)


def resolve_attack(*, attacker: Territory, defender: Territory, rng: random.Random) -> BattleOutcome:
    outcome = flip_coin(rng=rng)
    logger.info("Battle %s -> %s: %s", attacker.name, defender.name, outcome.value)
    apply_outcome(attacker=attacker, defender=defender, outcome=outcome)
    return outcome
