from __future__ import annotations

import argparse
import random
from typing import Optional, Sequence

from rich.console import Console

from keno.config import configure_logging
from keno.db.engine import get_sessionmaker, make_engine
from keno.models import Base
from keno.reporting import (
    BREAKDOWN_HEADERS,
    EXAMPLE_HEADERS,
    GAME_HEADERS,
    HOUSE_EDGE_HEADERS,
    SUMMARY_HEADERS,
    best_worst_rows,
    breakdown_rows,
    build_table,
    example_rows,
    house_edge_rows,
    summary_rows,
)
from keno.workflows import (
    auto_pick_numbers,
    create_game,
    play_draw,
    set_stake,
    summarize_games,
    validate_house_edge,
)


def parse_stake_range(value: str) -> tuple[float, float]:
    """Parse ``"min-max"`` into a pair of floats."""
    low, sep, high = value.partition("-")
    if not sep:
        raise argparse.ArgumentTypeError("stake range must look like '0.5-5.0'")
    try:
        return float(low), float(high)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed the development database with played games.")
    parser.add_argument("-p", "--players", type=int, default=5, help="number of test players")
    parser.add_argument("-g", "--games-per-player", type=int, default=10)
    parser.add_argument(
        "-s", "--stake-range", type=parse_stake_range, default=(0.5, 5.0), help="min-max stake"
    )
    parser.add_argument("-e", "--examples", type=int, default=5, help="example games to list")
    parser.add_argument("--simulate", action="store_true", help="print per-picks statistics")
    parser.add_argument("--seed", type=int, default=None, help="seed for stakes and pick counts")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Reset the database and fill it with finished games."""
    args = build_parser().parse_args(argv)
    configure_logging()
    rng = random.Random(args.seed)
    min_stake, max_stake = args.stake_range
    console = Console()

    engine = make_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    Session = get_sessionmaker(engine)

    with Session.begin() as session:
        games = []
        for player in range(1, args.players + 1):
            console.print(f"Creating games for player {player}...")
            for _ in range(args.games_per_player):
                game = create_game(session, f"player_{player}")
                set_stake(session, game.game_id, round(rng.uniform(min_stake, max_stake), 1))
                auto_pick_numbers(session, game.game_id, rng.randint(2, 10))
                games.append(play_draw(session, game.game_id))

    console.print(f"\nCreated {len(games)} games for {args.players} players\n")
    summary = summarize_games(games)
    console.print(build_table(SUMMARY_HEADERS, summary_rows(summary), title="Summary"))
    console.print(
        build_table(
            EXAMPLE_HEADERS,
            example_rows(games, args.examples),
            title="Example Games",
        )
    )

    if args.simulate and games:
        console.print(
            build_table(BREAKDOWN_HEADERS, breakdown_rows(summary), title="Simulation analysis")
        )
        console.print(
            build_table(GAME_HEADERS, best_worst_rows(summary), title="Best and worst games")
        )

    console.print(
        build_table(
            HOUSE_EDGE_HEADERS,
            house_edge_rows(validate_house_edge()),
            title="House edge validation",
        )
    )


if __name__ == "__main__":
    main()
