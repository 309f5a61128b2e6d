from __future__ import annotations

import argparse
import random
from typing import Callable, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from sqlalchemy.orm import Session

from keno.config import configure_logging
from keno.db.engine import get_sessionmaker, make_engine
from keno.errors import KenoError
from keno.models import Base, Game
from keno.reporting import (
    GAME_HEADERS,
    HOUSE_EDGE_HEADERS,
    SUMMARY_HEADERS,
    best_worst_rows,
    build_table,
    house_edge_rows,
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

MENU = (
    ("1", "Create new game"),
    ("2", "Set player numbers"),
    ("3", "Auto-pick numbers"),
    ("4", "Set stake"),
    ("5", "Play draw"),
    ("6", "Show game state"),
    ("7", "Replay game"),
    ("8", "Validate house edge"),
    ("9", "Exit"),
)


def _join(numbers: Sequence[int]) -> str:
    return ", ".join(str(n) for n in numbers)


def parse_numbers(text: str) -> list[int]:
    """Parse ``"1, 5,10"`` into ``[1, 5, 10]``; blanks are skipped."""
    return [int(part) for part in text.split(",") if part.strip()]


def _print_outcome(game: Game) -> None:
    console.print(f"Numbers picked: {_join(game.player_numbers)}")
    console.print(f"Drawn numbers: {_join(game.drawn_numbers)}")
    console.print(f"Matches: {game.numbers_matched}")
    console.print(f"Payout: {game.total_payout:.2f}")
    console.print(f"Profit: {game.profit:.2f}")


class InteractiveDemo:
    """Menu loop driving one game at a time through the workflow functions."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.game_id: Optional[str] = None

    def _require_game(self) -> str:
        if self.game_id is None:
            raise KenoError("Create a game first")
        return self.game_id

    def create(self) -> None:
        player = Prompt.ask("Player id", default="demo_player")
        game = create_game(self.session, player)
        self.game_id = game.game_id
        console.print(f"Created game [bold]{game.game_id}[/bold]")

    def set_numbers(self) -> None:
        game_id = self._require_game()
        text = Prompt.ask("Numbers (comma separated)", default="1,5,10,15,20")
        game = set_player_numbers(self.session, game_id, parse_numbers(text))
        console.print(f"Numbers set: {_join(game.player_numbers)}")

    def auto_pick(self) -> None:
        game_id = self._require_game()
        count = IntPrompt.ask("How many numbers", default=5)
        game = auto_pick_numbers(self.session, game_id, count)
        console.print(f"Auto-picked: {_join(game.player_numbers)}")

    def stake(self) -> None:
        game_id = self._require_game()
        amount = FloatPrompt.ask("Stake", default=1.0)
        game = set_stake(self.session, game_id, amount)
        console.print(f"Stake set to {game.stake:.2f}")

    def draw(self) -> None:
        game = play_draw(self.session, self._require_game())
        _print_outcome(game)

    def state(self) -> None:
        state = get_game_state(self.session, self._require_game())
        lines = [
            f"Status: {state['status']}",
            f"Stake: {state['stake']:.2f}",
            f"Numbers picked: {_join(state['player_numbers'])}",
            f"Drawn numbers: {_join(state['drawn_numbers'])}",
            f"Matches: {state['current_matches']}",
            f"Payout: {state['current_payout']:.2f}",
        ]
        console.print(Panel("\n".join(lines), title=state["id"]))

    def replay(self) -> None:
        game = replay_game(self.session, self._require_game())
        console.print(f"Game {game.game_id} is ready to draw again")

    def house_edge(self) -> None:
        console.print(
            build_table(
                HOUSE_EDGE_HEADERS,
                house_edge_rows(validate_house_edge()),
                title="House edge validation",
            )
        )

    def actions(self) -> dict[str, Callable[[], None]]:
        return {
            "1": self.create,
            "2": self.set_numbers,
            "3": self.auto_pick,
            "4": self.stake,
            "5": self.draw,
            "6": self.state,
            "7": self.replay,
            "8": self.house_edge,
        }

    def run(self) -> None:
        actions = self.actions()
        while True:
            console.print(Panel("\n".join(f"{key}. {label}" for key, label in MENU), title="Keno"))
            choice = Prompt.ask("Choose", choices=[key for key, _ in MENU], default="1")
            if choice == "9":
                if Confirm.ask("Exit the demo?", default=True):
                    return
                continue
            try:
                actions[choice]()
                self.session.commit()
            except (KenoError, ValueError) as exc:
                self.session.rollback()
                console.print(f"[red]Error: {exc}[/red]")


def run_auto(Session, rounds: int, rng: random.Random) -> None:
    games = []
    with Session.begin() as session:
        for i in range(1, rounds + 1):
            game = create_game(session, f"demo_player_{i}")
            set_stake(session, game.game_id, round(rng.uniform(0.5, 5.0), 1))
            auto_pick_numbers(session, game.game_id, rng.randint(2, 10))
            game = play_draw(session, game.game_id)
            games.append(game)

            console.print(f"=== Round {i} ===")
            console.print(f"Stake: {game.stake}")
            _print_outcome(game)
            console.print()

    if not games:
        return
    summary = summarize_games(games)
    console.print(build_table(SUMMARY_HEADERS, summary_rows(summary), title="Demo summary"))
    console.print(
        build_table(GAME_HEADERS, best_worst_rows(summary), title="Best and worst games")
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Play Keno against an in-memory store, interactively by default."""
    parser = argparse.ArgumentParser(description="Keno demo.")
    parser.add_argument("--auto", action="store_true", help="play automatic rounds instead of the menu")
    parser.add_argument("-r", "--rounds", type=int, default=5)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    configure_logging()

    engine = make_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)
    Session = get_sessionmaker(engine)
    try:
        if args.auto:
            run_auto(Session, args.rounds, random.Random(args.seed))
        else:
            with Session() as session:
                InteractiveDemo(session).run()
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
