from __future__ import annotations

import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

from conquest.core.errors import IndexOutOfRangeError, StoreAllocationError
from conquest.models import GameState, Territory

logger = logging.getLogger(__name__)

DEFAULT_TERRITORY_COUNT = 5

TerritoryFactory = Callable[[int], Territory]


def _now() -> datetime:
    return datetime.now(tz=UTC)


def create_game(*, territory_count: int = DEFAULT_TERRITORY_COUNT, seed: int | None = None) -> GameState:
    """Allocate a new game with room for `territory_count` territories.

    The territory sequence starts empty and is populated once during setup.
    """

    if territory_count < 0:
        raise StoreAllocationError(f"Territory count must be non-negative (got {territory_count})")

    if seed is None:
        seed = random.SystemRandom().randint(1, 2**31 - 1)

    now = _now()
    state = GameState(
        game_id=uuid4(),
        created_at=now,
        last_updated_at=now,
        seed=seed,
        territory_count=territory_count,
        territories=[],
    )
    logger.debug("Allocated game %s (territories=%d, seed=%d)", state.game_id, territory_count, seed)
    return state


def touch(*, state: GameState) -> None:
    state.last_updated_at = _now()


def initialize_territories(*, state: GameState, factory: TerritoryFactory) -> None:
    """Populate every territory slot by calling `factory(index)` in index order."""

    if state.territories:
        raise ValueError("Territories are already initialized")

    for idx in range(state.territory_count):
        territory = factory(idx)
        state.territories.append(territory)
        logger.debug("Territory %d: %s (%s, %d troops)", idx, territory.name, territory.faction, territory.troops)

    touch(state=state)


def require_territory(*, state: GameState, index: int) -> Territory:
    if index < 0 or index >= len(state.territories):
        raise IndexOutOfRangeError(
            f"Invalid territory index: {index} (valid: 0-{len(state.territories) - 1})"
            if state.territories
            else f"Invalid territory index: {index} (the map is empty)"
        )
    return state.territories[index]


def owned_territories(*, state: GameState, faction: str) -> list[Territory]:
    return [t for t in state.territories if t.is_owned_by(faction)]


def release_territories(*, state: GameState) -> None:
    state.territories.clear()
    touch(state=state)
