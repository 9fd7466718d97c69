"""
Easy bot: wins or blocks when it notices, otherwise plays at random.
"""

import logging
from typing import Optional

from logic.game_state import Board, Square, Symbol
from logic.move_validator import list_available_moves
from .common import find_winning_move, get_rng, pick_random

logger = logging.getLogger(__name__)

# Chance of looking for a win or block before playing at random
SMART_MOVE_PROBABILITY = 0.7


def easy_strategy(board: Board, symbol: Symbol, rng=None) -> Optional[Square]:
    """
    Make a "smart" move most of the time and a random one otherwise.

    A smart move is the first immediate win in row-major order, else the
    first square that blocks an immediate opponent win. The block is not
    the best block, just the first one found.

    Args:
        board: Current board (not modified).
        symbol: The bot's symbol.
        rng: Optional random.Random for reproducible picks.

    Returns:
        (row, col), or None if the board is full.
    """
    moves = list_available_moves(board)

    if not moves:
        return None

    rng = get_rng(rng)

    if rng.random() < SMART_MOVE_PROBABILITY:
        win = find_winning_move(board, symbol, moves)
        if win is not None:
            return win

        block = find_winning_move(board, symbol.opposite(), moves)
        if block is not None:
            return block
    else:
        logger.debug("Easy bot %s is playing carelessly", symbol.value)

    return pick_random(moves, rng)
