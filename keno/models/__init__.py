from .base import Base

# import models so Alembic/autoloaders can discover mappers
from .game import Game, GameStatus  # noqa: F401

__all__ = [
    "Base",
    "Game",
    "GameStatus",
]
