"""Identifier helpers for game records."""

from __future__ import annotations

import secrets
import string
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .game import Game

BASE62_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


def _game_id_taken(session: Session, candidate: str) -> bool:
    if any(isinstance(obj, Game) and obj.game_id == candidate for obj in session.new):
        return True
    return session.scalar(select(Game.id).where(Game.game_id == candidate)) is not None


def generate_unique_game_id(
    session: Optional[Session] = None,
    prefix: str = "game",
    length: int = 16,
    max_attempts: int = 32,
) -> str:
    """Return ``<prefix>_<base62 suffix>``, truncated to the column's 64 chars.

    With a session, candidates already used by a stored or pending ``Game``
    are redrawn, up to ``max_attempts`` times before ``RuntimeError``.
    """

    for _ in range(max_attempts):
        suffix = "".join(secrets.choice(BASE62_ALPHABET) for _ in range(length))
        candidate = f"{prefix}_{suffix}"[:64]
        if session is None or not _game_id_taken(session, candidate):
            return candidate

    raise RuntimeError(
        "Unable to generate a unique game identifier after multiple attempts"
    )
