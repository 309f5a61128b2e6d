import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from .engine.draw import DrawEngine
from .engine.payout import HouseEdgeCheck, PayoutEngine
from .errors import (
    GameNotFoundError,
    InvalidGameStateError,
    InvalidPicksError,
    PlayerNumbersNotSetError,
)
from .models import Game, GameStatus
from .models.utils import generate_unique_game_id

logger = logging.getLogger(__name__)

DEFAULT_DRAW_ENGINE = DrawEngine()
DEFAULT_PAYOUT_ENGINE = PayoutEngine()


def _get_game(session: Session, game_id: str) -> Game:
    game = Game.get_by_game_id(session, game_id)
    if game is None:
        raise GameNotFoundError("Game not found")
    return game


def create_game(session: Session, player_id: Optional[str] = None) -> Game:
    """Create and persist a new game in the ``waiting`` state.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session.
    player_id : Optional[str]
        Identifier of the player who owns the game.

    Returns
    -------
    Game
        The newly flushed game with a generated ``game_id``.
    """

    game = Game(game_id=generate_unique_game_id(session), player_id=player_id)
    session.add(game)
    session.flush()
    logger.debug("Created game %s for player %r", game.game_id, player_id)
    return game


def set_player_numbers(
    session: Session,
    game_id: str,
    numbers: Iterable[int],
    *,
    draw_engine: Optional[DrawEngine] = None,
) -> Game:
    """Store the player's own picks and mark the game ``ready``.

    Raises
    ------
    GameNotFoundError
        If no game matches ``game_id``.
    InvalidPicksError
        If ``numbers`` are not 2-10 distinct integers in ``[1, 80]``.
    InvalidGameStateError
        If the game is in the middle of a draw.
    """

    game = _get_game(session, game_id)
    engine = draw_engine or DEFAULT_DRAW_ENGINE
    picks = list(numbers)
    if not engine.validate_player_picks(picks):
        raise InvalidPicksError("Invalid player numbers")
    if game.status == GameStatus.PLAYING:
        raise InvalidGameStateError("Cannot change numbers while a draw is in progress")

    game.player_numbers = sorted(picks)
    game.status = GameStatus.READY
    session.flush()
    return game


def auto_pick_numbers(
    session: Session,
    game_id: str,
    count: int = 5,
    *,
    draw_engine: Optional[DrawEngine] = None,
) -> Game:
    """Quick-pick ``count`` numbers for the game and mark it ``ready``.

    Raises
    ------
    GameNotFoundError
        If no game matches ``game_id``.
    InvalidPickCountError
        If ``count`` is outside ``[2, 10]``.
    """

    game = _get_game(session, game_id)
    engine = draw_engine or DEFAULT_DRAW_ENGINE
    if game.status == GameStatus.PLAYING:
        raise InvalidGameStateError("Cannot change numbers while a draw is in progress")

    game.player_numbers = engine.generate_player_picks(count)
    game.status = GameStatus.READY
    session.flush()
    return game


def set_stake(session: Session, game_id: str, stake: float) -> Game:
    """Update the game's stake. The model clamps it into ``[0.1, 10.0]``."""
    game = _get_game(session, game_id)
    game.stake = stake
    session.flush()
    return game


def play_draw(
    session: Session,
    game_id: str,
    *,
    draw_engine: Optional[DrawEngine] = None,
    payout_engine: Optional[PayoutEngine] = None,
) -> Game:
    """Draw 20 numbers for the game, then score and finish it.

    The game passes through ``playing`` while the draw is recorded and ends
    in ``finished`` with ``numbers_matched`` and ``total_payout`` populated.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session.
    game_id : str
        Identifier of the game to play.
    draw_engine : Optional[DrawEngine]
        Engine producing the draw. Defaults to the module-level engine.
    payout_engine : Optional[PayoutEngine]
        Engine pricing the matches. Defaults to the module-level engine.

    Returns
    -------
    Game
        The finished game.

    Raises
    ------
    GameNotFoundError
        If no game matches ``game_id``.
    PlayerNumbersNotSetError
        If the player has not picked any numbers yet.
    InvalidGameStateError
        If the game is already finished and has not been replayed.
    """

    game = _get_game(session, game_id)
    if not game.player_numbers:
        raise PlayerNumbersNotSetError("Player numbers not set")
    if game.status == GameStatus.FINISHED:
        raise InvalidGameStateError("Game already finished; replay it to draw again")

    drawer = draw_engine or DEFAULT_DRAW_ENGINE
    scorer = payout_engine or DEFAULT_PAYOUT_ENGINE

    game.drawn_numbers = drawer.draw_numbers()
    game.status = GameStatus.PLAYING

    result = scorer.score(game.player_numbers, game.drawn_numbers, game.stake)
    game.numbers_matched = result.matches
    game.total_payout = result.payout
    game.status = GameStatus.FINISHED

    session.flush()
    logger.debug(
        "Game %s finished: %d/%d matched, payout %.2f",
        game.game_id,
        result.matches,
        game.picks_count,
        result.payout,
    )
    return game


def replay_game(session: Session, game_id: str) -> Game:
    """Discard the draw and score, keeping picks and stake, and mark ``ready``."""
    game = _get_game(session, game_id)
    game.drawn_numbers = []
    game.total_payout = 0.0
    game.numbers_matched = 0
    game.status = GameStatus.READY
    session.flush()
    logger.info("Game %s reset for replay", game.game_id)
    return game


def get_game_state(
    session: Session,
    game_id: str,
    *,
    payout_engine: Optional[PayoutEngine] = None,
) -> dict[str, Any]:
    """Return the game's JSON form enriched with live scoring information.

    Adds ``current_matches`` and ``current_payout`` recomputed from the stored
    picks and draw, and the ``pay_table`` used to price them.
    """

    game = _get_game(session, game_id)
    scorer = payout_engine or DEFAULT_PAYOUT_ENGINE

    state = game.to_json()
    result = scorer.score(game.player_numbers, game.drawn_numbers, game.stake)
    state["current_matches"] = result.matches
    state["current_payout"] = result.payout
    state["pay_table"] = scorer.get_pay_table()
    return state


def get_player_games(session: Session, player_id: str) -> Sequence[Game]:
    return Game.find_by_player_id(session, player_id)


def get_active_games(session: Session) -> Sequence[Game]:
    """Return games that have not finished yet (waiting, ready or playing)."""
    return Game.find_by_status(session, GameStatus.ACTIVE)


def get_finished_games(session: Session) -> Sequence[Game]:
    return Game.find_by_status(session, (GameStatus.FINISHED,))


def validate_house_edge(
    payout_engine: Optional[PayoutEngine] = None,
) -> dict[int, HouseEdgeCheck]:
    """Report the theoretical house edge for every pick count from 2 to 10."""
    return (payout_engine or DEFAULT_PAYOUT_ENGINE).validate_house_edge()


@dataclass
class PicksBreakdown:
    """Aggregated results of finished games sharing the same pick count."""

    picks_count: int
    games: int = 0
    total_stake: float = 0.0
    total_payout: float = 0.0
    wins: int = 0

    @property
    def win_rate_percent(self) -> float:
        return self.wins / self.games * 100 if self.games else 0.0

    @property
    def house_edge_percent(self) -> float:
        if not self.total_stake:
            return 0.0
        return (self.total_stake - self.total_payout) / self.total_stake * 100


@dataclass
class GameSummary:
    """Realized results over a collection of games.

    Attributes
    ----------
    games : int
        Number of games summarized.
    total_stake : float
        Sum of all stakes.
    total_payout : float
        Sum of all payouts.
    best : Optional[Game]
        Game with the highest player profit.
    worst : Optional[Game]
        Game with the lowest player profit.
    by_picks : dict[int, PicksBreakdown]
        Per pick-count aggregates, keyed and ordered by pick count.
    """

    games: int = 0
    total_stake: float = 0.0
    total_payout: float = 0.0
    best: Optional[Game] = None
    worst: Optional[Game] = None
    by_picks: dict[int, PicksBreakdown] = field(default_factory=dict)

    @property
    def house_profit(self) -> float:
        return self.total_stake - self.total_payout

    @property
    def house_edge_percent(self) -> float:
        if not self.total_stake:
            return 0.0
        return self.house_profit / self.total_stake * 100

    @property
    def average_stake(self) -> float:
        return self.total_stake / self.games if self.games else 0.0

    @property
    def average_payout(self) -> float:
        return self.total_payout / self.games if self.games else 0.0


def summarize_games(games: Iterable[Game]) -> GameSummary:
    """Aggregate stakes, payouts and per-pick-count results of ``games``.

    The first game wins ties for both best and worst.
    """

    summary = GameSummary()
    for game in games:
        summary.games += 1
        summary.total_stake += game.stake
        summary.total_payout += game.total_payout
        if summary.best is None or game.profit > summary.best.profit:
            summary.best = game
        if summary.worst is None or game.profit < summary.worst.profit:
            summary.worst = game

        row = summary.by_picks.setdefault(
            game.picks_count, PicksBreakdown(picks_count=game.picks_count)
        )
        row.games += 1
        row.total_stake += game.stake
        row.total_payout += game.total_payout
        if game.total_payout > 0:
            row.wins += 1

    summary.by_picks = dict(sorted(summary.by_picks.items()))
    return summary
