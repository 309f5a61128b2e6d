"""Environment-based settings for scripts and tooling."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def log_level() -> int:
    """Resolve ``KENO_LOG_LEVEL`` to a :mod:`logging` level, WARNING by default."""
    name = os.getenv("KENO_LOG_LEVEL", "WARNING").upper().strip()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: Optional[int] = None) -> None:
    logging.basicConfig(
        level=level if level is not None else log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # SQL echo is controlled through make_engine(echo=...)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
