"""Exceptions raised by the Keno engines and workflows."""

from __future__ import annotations


class KenoError(Exception):
    """Base class for all recoverable Keno errors."""


class DrawRangeError(KenoError, ValueError):
    """Requested draw size exceeds the size of the number universe."""


class InvalidPickCountError(KenoError, ValueError):
    """Requested number of player picks is outside the allowed range."""


class InvalidPicksError(KenoError, ValueError):
    """Submitted player picks are out of range, duplicated or wrongly sized."""


class GameNotFoundError(KenoError, LookupError):
    """No game exists with the requested identifier."""


class PlayerNumbersNotSetError(KenoError, ValueError):
    """A draw was requested before the player picked any numbers."""


class InvalidGameStateError(KenoError, ValueError):
    """The game's status does not allow the requested transition."""


__all__ = [
    "KenoError",
    "DrawRangeError",
    "InvalidPickCountError",
    "InvalidPicksError",
    "GameNotFoundError",
    "PlayerNumbersNotSetError",
    "InvalidGameStateError",
]
