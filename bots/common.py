"""
Helpers shared by the bot strategies.
"""

import random
from typing import Optional, List

from logic.game_state import Board, Square, Symbol, copy_board
from logic.win_checker import has_won


def get_rng(rng=None):
    """Use the given random generator, or the module-level one."""
    return rng if rng is not None else random


def pick_random(moves: List[Square], rng=None) -> Optional[Square]:
    """Pick a move with a uniform random index, or None if there are none."""
    if not moves:
        return None
    return moves[get_rng(rng).randrange(len(moves))]


def place(board: Board, square: Square, symbol: Symbol) -> Board:
    """Return a copy of the board with one extra mark."""
    row, col = square
    new_board = copy_board(board)
    new_board[row][col] = symbol
    return new_board


def find_winning_move(board: Board, symbol: Symbol, moves: List[Square]) -> Optional[Square]:
    """
    Find the first move in the list that completes a line for the symbol.

    Called with the opponent's symbol this finds the square to block.
    """
    for square in moves:
        if has_won(place(board, square, symbol), symbol):
            return square
    return None
