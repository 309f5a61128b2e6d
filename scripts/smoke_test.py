from __future__ import annotations

import argparse
from typing import Any, Optional, Sequence

from rich.console import Console
from sqlalchemy.orm import Session

from keno.config import configure_logging
from keno.db.engine import get_sessionmaker, make_engine
from keno.errors import KenoError
from keno.models import Base, GameStatus
from keno.reporting import (
    GAME_HEADERS,
    SUMMARY_HEADERS,
    best_worst_rows,
    build_table,
    summary_rows,
)
from keno.workflows import (
    auto_pick_numbers,
    create_game,
    get_game_state,
    play_draw,
    replay_game,
    set_player_numbers,
    set_stake,
    summarize_games,
    validate_house_edge,
)

console = Console()

FIXED_PICKS = [1, 5, 10, 15, 20, 25, 30, 35, 40, 45]


def run_once(session: Session, verbose: bool = False) -> dict[str, Any]:
    """Walk one game through every lifecycle step and record what happened."""
    game = create_game(session, "test_player")
    set_player_numbers(session, game.game_id, FIXED_PICKS)
    set_stake(session, game.game_id, 2.5)
    game = play_draw(session, game.game_id)
    result: dict[str, Any] = {
        "game": game,
        "matches": game.numbers_matched,
        "payout": game.total_payout,
    }
    if verbose:
        console.print(f"  Game {game.game_id}: {game.numbers_matched} matches, payout {game.total_payout}")

    result["state_retrieved"] = bool(get_game_state(session, game.game_id))

    second = create_game(session, "test_player_2")
    result["autopick_numbers"] = list(
        auto_pick_numbers(session, second.game_id, 7).player_numbers
    )

    play_draw(session, second.game_id)
    second = replay_game(session, second.game_id)
    result["replay_successful"] = (
        second.status == GameStatus.READY
        and not second.drawn_numbers
        and second.player_numbers == result["autopick_numbers"]
    )
    result["house_edge_valid"] = all(
        check.is_valid for check in validate_house_edge().values()
    )
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Exercise the full Keno game lifecycle.")
    parser.add_argument("-i", "--iterations", type=int, default=5)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    configure_logging()

    engine = make_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)
    Session = get_sessionmaker(engine)

    results: list[dict[str, Any]] = []
    failures: list[tuple[int, str]] = []
    for i in range(1, args.iterations + 1):
        console.print(f"Running test iteration {i}...")
        try:
            with Session.begin() as session:
                results.append(run_once(session, args.verbose))
        except KenoError as exc:
            console.print(f"[red]Test {i} failed: {exc}[/red]")
            failures.append((i, str(exc)))
    engine.dispose()

    console.print(f"\nTotal tests: {args.iterations}")
    console.print(f"Successful: {len(results)}")
    console.print(f"Failed: {len(failures)}")

    if results:
        summary = summarize_games(r["game"] for r in results)
        console.print(build_table(SUMMARY_HEADERS, summary_rows(summary), title="Summary"))
        console.print(
            build_table(GAME_HEADERS, best_worst_rows(summary), title="Best and Worst Results")
        )
        replays = sum(1 for r in results if r["replay_successful"])
        console.print(f"Replays reset correctly: {replays}/{len(results)}")
        console.print(
            f"House edge within band: {'yes' if results[0]['house_edge_valid'] else 'no'}"
        )
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
