"""Random draws and player pick validation."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from ..errors import DrawRangeError, InvalidPickCountError

logger = logging.getLogger(__name__)

UNIVERSE_MIN = 1
UNIVERSE_MAX = 80
DRAW_SIZE = 20
MIN_PICKS = 2
MAX_PICKS = 10


class DrawEngine:
    """Produces duplicate-free random draws and validates player picks.

    The engine holds no state besides its random generator, so a single
    instance may be shared by every game.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """Create a draw engine.

        Parameters
        ----------
        rng : random.Random, optional
            Random generator to use; useful for deterministic tests. If not
            provided, an OS-backed :class:`random.SystemRandom` is used.
        """

        self._rng = rng or random.SystemRandom()

    def draw_numbers(
        self,
        count: int = DRAW_SIZE,
        min_value: int = UNIVERSE_MIN,
        max_value: int = UNIVERSE_MAX,
    ) -> list[int]:
        """Draw ``count`` distinct numbers from ``[min_value, max_value]``.

        Each step picks a uniformly random index into the remaining candidate
        pool and swap-removes it, so no value can be drawn twice within a call.

        Parameters
        ----------
        count : int, default: 20
            How many numbers to draw.
        min_value : int, default: 1
            Smallest number of the universe (inclusive).
        max_value : int, default: 80
            Largest number of the universe (inclusive).

        Returns
        -------
        list[int]
            The drawn numbers sorted ascending.

        Raises
        ------
        DrawRangeError
            If ``count`` is negative or larger than the universe.
        """

        available = max_value - min_value + 1
        if count > available:
            raise DrawRangeError("Cannot draw more numbers than available range")
        if count < 0:
            raise DrawRangeError("Cannot draw a negative amount of numbers")

        pool = list(range(min_value, max_value + 1))
        drawn: list[int] = []
        for _ in range(count):
            idx = self._rng.randrange(len(pool))
            drawn.append(pool[idx])
            pool[idx] = pool[-1]
            pool.pop()

        drawn.sort()
        logger.debug("Drew %d numbers from [%d, %d]", count, min_value, max_value)
        return drawn

    def generate_player_picks(
        self,
        count: int,
        min_value: int = UNIVERSE_MIN,
        max_value: int = UNIVERSE_MAX,
    ) -> list[int]:
        """Quick-pick ``count`` numbers for a player.

        Raises
        ------
        InvalidPickCountError
            If ``count`` is outside ``[2, 10]``.
        """

        if count < MIN_PICKS or count > MAX_PICKS:
            raise InvalidPickCountError(
                f"Player must pick between {MIN_PICKS} and {MAX_PICKS} numbers"
            )
        return self.draw_numbers(count, min_value, max_value)

    @staticmethod
    def validate_player_picks(
        numbers: Iterable[object],
        min_value: int = UNIVERSE_MIN,
        max_value: int = UNIVERSE_MAX,
    ) -> bool:
        """Return ``True`` when ``numbers`` is an acceptable set of picks.

        Picks are acceptable when there are 2 to 10 of them, each is an
        integer within ``[min_value, max_value]`` and none repeats.
        """

        values = list(numbers)
        if len(values) < MIN_PICKS or len(values) > MAX_PICKS:
            return False
        for value in values:
            # bool is an int subclass but never a valid pick
            if isinstance(value, bool) or not isinstance(value, int):
                return False
            if value < min_value or value > max_value:
                return False
        return len(set(values)) == len(values)


__all__ = [
    "DrawEngine",
    "DRAW_SIZE",
    "MAX_PICKS",
    "MIN_PICKS",
    "UNIVERSE_MAX",
    "UNIVERSE_MIN",
]
