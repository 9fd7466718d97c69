"""
Bot strategies for the tic-tac-toe engine.

Every strategy has the shape ``strategy(board, symbol, rng=None)`` and
returns a (row, col) square, or None when the board is full.
"""

from typing import Callable, Dict, Optional

from logic.game_state import Square
from .random_bot import random_strategy
from .easy_bot import easy_strategy
from .minimax_player import MinimaxPlayer, minimax_strategy

Strategy = Callable[..., Optional[Square]]

STRATEGIES: Dict[str, Strategy] = {
    "random": random_strategy,
    "easy": easy_strategy,
    "heuristic": easy_strategy,
    "minimax": minimax_strategy,
    "unbeatable": minimax_strategy,
}


def resolve_strategy(name: Optional[str]) -> Optional[Strategy]:
    """
    Look up a strategy by name (case-insensitive).

    Returns:
        The strategy function, or None if the name is unknown.
    """
    if not name:
        return None
    return STRATEGIES.get(name.strip().lower())
