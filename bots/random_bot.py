"""
Random bot: plays any empty square.
"""

from typing import Optional

from logic.game_state import Board, Square, Symbol
from logic.move_validator import list_available_moves
from .common import pick_random


def random_strategy(board: Board, symbol: Symbol, rng=None) -> Optional[Square]:
    """
    Pick a uniformly random empty square. No look-ahead.

    Args:
        board: Current board (not modified).
        symbol: The bot's symbol (unused).
        rng: Optional random.Random for reproducible picks.

    Returns:
        (row, col), or None if the board is full.
    """
    return pick_random(list_available_moves(board), rng)
