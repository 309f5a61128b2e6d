"""Database model for a single Keno game record."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    Index,
    Integer,
    JSON,
    String,
    select,
)
from sqlalchemy.orm import Mapped, Session, mapped_column, validates

from keno.db.utils import dt_iso
from .base import Base
from .id_type import ID_TYPE

MIN_STAKE = 0.1
MAX_STAKE = 10.0
DEFAULT_STAKE = 1.0


class GameStatus:
    """String values accepted by ``Game.status``."""

    WAITING = "waiting"
    READY = "ready"
    PLAYING = "playing"
    FINISHED = "finished"

    ALL = (WAITING, READY, PLAYING, FINISHED)
    ACTIVE = (WAITING, READY, PLAYING)


class Game(Base):
    """A player's game: picks, stake, draw and the scored outcome.

    Lists of numbers are stored as JSON. They are always replaced wholesale
    (never mutated in place) so that SQLAlchemy notices the change.
    """

    def __init__(
        self,
        game_id: str,
        player_id: Optional[str] = None,
        stake: float = DEFAULT_STAKE,
        status: str = GameStatus.WAITING,
        created_at: Optional[datetime] = None,
    ):
        """Create a new game in the ``waiting`` state.

        Parameters
        ----------
        game_id : str
            Public identifier of the game, e.g. ``"game_3kQ..."``.
        player_id : str, optional
            Identifier of the owning player, if known.
        stake : float, optional
            Initial stake. Clamped into ``[MIN_STAKE, MAX_STAKE]``.
        status : str, optional
            Initial status. Defaults to ``"waiting"``.
        created_at : datetime, optional
            Creation timestamp. Defaults to the current UTC time.
        """

        self.game_id = game_id
        self.player_id = player_id
        self.player_numbers = []
        self.drawn_numbers = []
        self.stake = stake
        self.total_payout = 0.0
        self.numbers_matched = 0
        self.status = status
        self.created_at = created_at or datetime.now(timezone.utc)

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    game_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    player_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    player_numbers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    drawn_numbers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    stake: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_STAKE)
    total_payout: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    numbers_matched: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=GameStatus.WAITING
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('waiting','ready','playing','finished')", name="status_enum"
        ),
        Index("ix_games_player_id", "player_id"),
        Index("ix_games_status", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Game(game_id='{self.game_id}', player_id={self.player_id!r}, "
            f"status='{self.status}', stake={self.stake})>"
        )

    @validates("stake")
    def _clamp_stake(self, _key: str, value: float) -> float:
        return max(MIN_STAKE, min(MAX_STAKE, float(value)))

    @validates("status")
    def _check_status(self, _key: str, value: str) -> str:
        if value not in GameStatus.ALL:
            raise ValueError(f"Unknown game status '{value}'")
        return value

    @property
    def picks_count(self) -> int:
        return len(self.player_numbers or [])

    @property
    def profit(self) -> float:
        """Player's net result: payout minus stake."""
        return self.total_payout - self.stake

    def to_json(self) -> dict[str, Any]:
        """Return a JSON-serializable dict describing this game."""
        return {
            "id": self.game_id,
            "player_id": self.player_id,
            "player_numbers": list(self.player_numbers or []),
            "drawn_numbers": list(self.drawn_numbers or []),
            "stake": self.stake,
            "total_payout": self.total_payout,
            "numbers_matched": self.numbers_matched,
            "status": self.status,
            "created_at": dt_iso(self.created_at),
        }

    @classmethod
    def get_by_game_id(cls, session: Session, game_id: str) -> Optional["Game"]:
        """Return the game with the public identifier ``game_id`` if it exists."""
        return session.scalar(select(cls).where(cls.game_id == game_id))

    @classmethod
    def find_by_player_id(cls, session: Session, player_id: str) -> Sequence["Game"]:
        """Return all games owned by ``player_id`` in creation order."""
        stmt = (
            select(cls)
            .where(cls.player_id == player_id)
            .order_by(cls.created_at, cls.id)
        )
        return session.scalars(stmt).all()

    @classmethod
    def find_by_status(
        cls, session: Session, statuses: Sequence[str]
    ) -> Sequence["Game"]:
        """Return all games whose status is one of ``statuses``."""
        stmt = (
            select(cls)
            .where(cls.status.in_(list(statuses)))
            .order_by(cls.created_at, cls.id)
        )
        return session.scalars(stmt).all()
