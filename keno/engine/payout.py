"""Pay table, payout scoring and house-edge estimation."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .draw import MAX_PICKS, MIN_PICKS, UNIVERSE_MAX

HOUSE_EDGE_MIN = 0.05
HOUSE_EDGE_MAX = 0.08

# picks -> {matches -> multiplier}; cells that are not listed pay nothing.
DEFAULT_PAY_TABLE: dict[int, dict[int, float]] = {
    2: {2: 2.0},
    3: {2: 1.0, 3: 5.0},
    4: {2: 0.5, 3: 2.0, 4: 10.0},
    5: {2: 0.5, 3: 1.0, 4: 5.0, 5: 20.0},
    6: {3: 0.5, 4: 1.0, 5: 5.0, 6: 50.0},
    7: {3: 0.5, 4: 1.0, 5: 2.0, 6: 10.0, 7: 100.0},
    8: {4: 0.5, 5: 1.0, 6: 2.0, 7: 10.0, 8: 200.0},
    9: {4: 0.5, 5: 1.0, 6: 2.0, 7: 5.0, 8: 20.0, 9: 500.0},
    10: {5: 0.5, 6: 1.0, 7: 2.0, 8: 5.0, 9: 20.0, 10: 1000.0},
}


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of pricing a set of picks against a draw.

    Attributes
    ----------
    matches : int
        Number of picks that appear in the draw.
    payout : float
        Amount returned to the player (``stake * multiplier``).
    """

    matches: int
    payout: float


@dataclass(frozen=True)
class HouseEdgeCheck:
    """House-edge report for a single pick count.

    Attributes
    ----------
    house_edge : float
        Raw house edge as a fraction.
    house_edge_percent : float
        ``house_edge`` expressed in percent, rounded to two decimals.
    is_valid : bool
        ``True`` when the edge lies within the nominal 5-8% band.
    """

    house_edge: float
    house_edge_percent: float
    is_valid: bool


def combinations(n: int, k: int) -> float:
    """Return ``C(n, k)`` computed with the floating-point product form."""
    if k > n or k < 0:
        return 0.0
    result = 1.0
    for i in range(k):
        result = result * (n - i) / (i + 1)
    return result


def _freeze(table: Mapping[int, Mapping[int, float]]) -> Mapping[int, Mapping[int, float]]:
    return MappingProxyType(
        {
            int(picks): MappingProxyType(
                {int(matches): float(mult) for matches, mult in row.items()}
            )
            for picks, row in table.items()
        }
    )


class PayoutEngine:
    """Prices matches with a fixed pay table.

    The table is copied and frozen on construction; the engine never mutates
    it afterwards.
    """

    def __init__(
        self, pay_table: Optional[Mapping[int, Mapping[int, float]]] = None
    ) -> None:
        self._pay_table = _freeze(pay_table if pay_table is not None else DEFAULT_PAY_TABLE)

    @property
    def pay_table(self) -> Mapping[int, Mapping[int, float]]:
        """Read-only view of the table, keyed by picks then matches."""
        return self._pay_table

    def get_pay_table(self) -> dict[int, dict[int, float]]:
        """Return a plain-dict copy of the pay table for serialization."""
        return {picks: dict(row) for picks, row in self._pay_table.items()}

    def multiplier(self, picks_count: int, matches: int) -> float:
        """Return the multiplier for ``(picks_count, matches)``.

        Cells absent from the table, including unknown pick counts, return
        ``0.0``.
        """
        row = self._pay_table.get(picks_count)
        if row is None:
            return 0.0
        return row.get(matches, 0.0)

    def calculate_payout(self, picks_count: int, matches: int, stake: float) -> float:
        """Return ``stake`` times the multiplier for ``(picks_count, matches)``.

        Inputs outside the table's domain (picks outside ``[2, 10]`` or matches
        outside ``[0, picks_count]``) yield ``0.0`` instead of raising.
        """

        if picks_count < MIN_PICKS or picks_count > MAX_PICKS:
            return 0.0
        if matches < 0 or matches > picks_count:
            return 0.0
        return stake * self.multiplier(picks_count, matches)

    def calculate_house_edge(self, picks_count: int) -> float:
        """Estimate the house edge for ``picks_count`` picks.

        The probability of ``m`` matches is approximated as
        ``C(picks_count, m) / C(80, picks_count)`` rather than the
        hypergeometric odds of a 20-of-80 draw. :meth:`validate_house_edge`
        and its 5-8% band assume this form.

        Returns
        -------
        float
            ``1 - expected_return``.
        """

        total_combinations = combinations(UNIVERSE_MAX, picks_count)
        expected_return = 0.0
        if total_combinations > 0:
            for matches in range(picks_count + 1):
                probability = combinations(picks_count, matches) / total_combinations
                expected_return += probability * self.multiplier(picks_count, matches)
        return 1.0 - expected_return

    def validate_house_edge(self) -> dict[int, HouseEdgeCheck]:
        """Report the house edge of every pick count against the 5-8% band.

        This is informational only; payouts are computed regardless.
        """

        report: dict[int, HouseEdgeCheck] = {}
        for picks in range(MIN_PICKS, MAX_PICKS + 1):
            edge = self.calculate_house_edge(picks)
            report[picks] = HouseEdgeCheck(
                house_edge=edge,
                house_edge_percent=round(edge * 100, 2),
                is_valid=HOUSE_EDGE_MIN <= edge <= HOUSE_EDGE_MAX,
            )
        return report

    @staticmethod
    def count_matches(player_numbers: Iterable[int], drawn_numbers: Iterable[int]) -> int:
        """Return how many picks appear in the draw."""
        return len(set(player_numbers) & set(drawn_numbers))

    def score(
        self,
        player_numbers: Iterable[int],
        drawn_numbers: Iterable[int],
        stake: float,
    ) -> ScoreResult:
        """Count matches between picks and draw and price them."""
        picks = list(player_numbers)
        matches = self.count_matches(picks, drawn_numbers)
        return ScoreResult(
            matches=matches,
            payout=self.calculate_payout(len(picks), matches, stake),
        )


__all__ = [
    "DEFAULT_PAY_TABLE",
    "HOUSE_EDGE_MAX",
    "HOUSE_EDGE_MIN",
    "HouseEdgeCheck",
    "PayoutEngine",
    "ScoreResult",
    "combinations",
]
