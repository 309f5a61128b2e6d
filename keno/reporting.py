"""Tables for the seed, demo and smoke-test scripts, rendered with rich."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from rich.table import Table

from .engine.payout import HouseEdgeCheck
from .models import Game
from .workflows import GameSummary


def build_table(
    headers: Sequence[str],
    rows: Iterable[Sequence[Any]],
    title: Optional[str] = None,
) -> Table:
    """Return a :class:`rich.table.Table` with one column per header.

    Cells are converted with ``str`` so numbers can be passed through as-is.
    """
    table = Table(title=title)
    for n, header in enumerate(headers):
        table.add_column(header, style="cyan" if n == 0 else None)
    for row in rows:
        table.add_row(*(str(cell) for cell in row))
    return table


def _signed(value: float) -> str:
    return f"+{value:.2f}" if value > 0 else f"{value:.2f}"


def summary_rows(summary: GameSummary) -> list[tuple[str, str]]:
    return [
        ("Total Games", str(summary.games)),
        ("Total Stake", f"{summary.total_stake:.2f}"),
        ("Total Payout", f"{summary.total_payout:.2f}"),
        ("House Profit", f"{summary.house_profit:.2f}"),
        ("House Edge", f"{summary.house_edge_percent:.2f}%"),
        ("Average Stake", f"{summary.average_stake:.2f}"),
        ("Average Payout", f"{summary.average_payout:.2f}"),
    ]


def breakdown_rows(summary: GameSummary) -> list[tuple]:
    """Per pick-count rows: picks, games, stake, payout, wins, win rate, edge."""
    return [
        (
            row.picks_count,
            row.games,
            f"{row.total_stake:.2f}",
            f"{row.total_payout:.2f}",
            row.wins,
            f"{row.win_rate_percent:.1f}",
            f"{row.house_edge_percent:.2f}",
        )
        for row in summary.by_picks.values()
    ]


def game_row(label: str, game: Game) -> tuple:
    return (
        label,
        game.stake,
        game.picks_count,
        game.numbers_matched,
        game.total_payout,
        _signed(game.profit),
    )


def best_worst_rows(summary: GameSummary) -> list[tuple]:
    rows = []
    if summary.best is not None:
        rows.append(game_row("Best", summary.best))
    if summary.worst is not None:
        rows.append(game_row("Worst", summary.worst))
    return rows


def example_rows(games: Iterable[Game], limit: int = 5) -> list[tuple]:
    """Rows for the first ``limit`` games: player, game id, stake and outcome."""
    rows = []
    for game in games:
        if len(rows) >= limit:
            break
        rows.append(
            (
                game.player_id or "-",
                game.game_id,
                f"{game.stake:.2f}",
                game.picks_count,
                game.numbers_matched,
                f"{game.total_payout:.2f}",
                _signed(game.profit),
            )
        )
    return rows


def house_edge_rows(report: Mapping[int, HouseEdgeCheck]) -> list[tuple]:
    return [
        (picks, f"{check.house_edge_percent:.2f}", "yes" if check.is_valid else "no")
        for picks, check in sorted(report.items())
    ]


SUMMARY_HEADERS = ("Metric", "Value")
BREAKDOWN_HEADERS = (
    "Numbers Picked",
    "Games",
    "Total Stake",
    "Total Payout",
    "Wins",
    "Win Rate %",
    "House Edge %",
)
GAME_HEADERS = ("Type", "Stake", "Picked", "Matched", "Payout", "Profit")
HOUSE_EDGE_HEADERS = ("Numbers Picked", "House Edge %", "Valid")
EXAMPLE_HEADERS = ("Player", "Game", "Stake", "Picked", "Matched", "Payout", "Profit")
