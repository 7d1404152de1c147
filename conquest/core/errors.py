from __future__ import annotations


class GameError(ValueError):
    """A recoverable rule violation.

    The game loop reports the message and keeps the game in the playing phase.
    Raised before any territory is mutated.
    """


class InvalidInputError(GameError):
    pass


class IndexOutOfRangeError(GameError):
    pass


class IllegalAttackSourceError(GameError):
    pass


class IllegalAttackTargetError(GameError):
    pass


class InsufficientTroopsError(GameError):
    pass


class InvalidOptionError(GameError):
    pass


class StoreAllocationError(RuntimeError):
    """The territory store could not be created. Fatal: the game never starts."""
