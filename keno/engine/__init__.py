"""Draw and payout engines for Keno games."""

from .draw import DrawEngine
from .payout import (
    DEFAULT_PAY_TABLE,
    HouseEdgeCheck,
    PayoutEngine,
    ScoreResult,
    combinations,
)

__all__ = [
    "DEFAULT_PAY_TABLE",
    "DrawEngine",
    "HouseEdgeCheck",
    "PayoutEngine",
    "ScoreResult",
    "combinations",
]
