"""
Board model for the tic-tac-toe engine.
The board is never stored: it is rebuilt from the move history on demand.
"""

from enum import Enum
from typing import Optional, List, Tuple, Sequence
from dataclasses import dataclass


class Symbol(Enum):
    """The two marks. X always moves first."""
    X = "X"
    O = "O"

    def opposite(self) -> "Symbol":
        """Get the opposing symbol."""
        return Symbol.O if self == Symbol.X else Symbol.X


BOARD_SIZE = 3

Square = Tuple[int, int]
Board = List[List[Optional[Symbol]]]


@dataclass(frozen=True)
class Move:
    """
    A single move in the history.
    """
    square: Square          # (row, col), each 0-2
    symbol: Symbol          # Who made the move

    @property
    def row(self) -> int:
        return self.square[0]

    @property
    def col(self) -> int:
        return self.square[1]


History = Tuple[Move, ...]


def empty_board() -> Board:
    """Create a fresh 3x3 board with no marks."""
    return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


def copy_board(board: Board) -> Board:
    """Create a copy of the board that shares no rows with the original."""
    return [[cell for cell in row] for row in board]


def history_prefix(history: Sequence[Move], cursor: Optional[int] = None) -> Sequence[Move]:
    """
    Get the part of the history selected by a cursor.

    Args:
        history: All moves played so far.
        cursor: None for the live position, otherwise the index of the
            last move to include. Values past the end are clamped to the
            last move; negative values select no moves.

    Returns:
        The selected moves, oldest first.
    """
    if cursor is None:
        return history

    last_index = min(cursor, len(history) - 1)
    return history[:last_index + 1] if last_index >= 0 else history[:0]


def derive_board(history: Sequence[Move], cursor: Optional[int] = None) -> Board:
    """
    Replay the history up to the cursor and return the resulting board.

    The history is trusted: alternation and uniqueness are enforced by
    whoever appends to it, not re-checked here.

    Args:
        history: All moves played so far.
        cursor: None for the live position, otherwise a move index.

    Returns:
        A new 3x3 board.
    """
    board = empty_board()

    for move in history_prefix(history, cursor):
        board[move.row][move.col] = move.symbol

    return board


def derive_active_player(history: Sequence[Move], cursor: Optional[int] = None) -> Symbol:
    """
    Work out whose turn it is at the cursor.

    Args:
        history: All moves played so far.
        cursor: None for the live position, otherwise a move index.

    Returns:
        X if no move was played yet or the last one was O, otherwise O.
    """
    moves = history_prefix(history, cursor)

    if moves and moves[-1].symbol == Symbol.X:
        return Symbol.O
    return Symbol.X


def format_board(board: Board) -> str:
    """Render the board as text, with row and column indices."""
    lines = ["    0   1   2"]

    for row in range(BOARD_SIZE):
        cells = [cell.value if cell is not None else " " for cell in board[row]]
        lines.append(f"{row}   " + " | ".join(cells))

        if row < BOARD_SIZE - 1:
            lines.append("   ---+---+---")

    return "\n".join(lines)


# Quick test
if __name__ == "__main__":
    print("Testing board derivation...")

    moves = (
        Move((1, 1), Symbol.X),
        Move((0, 0), Symbol.O),
        Move((0, 2), Symbol.X),
    )

    for cursor in (0, 1, None):
        print(f"\nCursor: {cursor}, to move: {derive_active_player(moves, cursor).value}")
        print(format_board(derive_board(moves, cursor)))

    print("\nBoard derivation test done!")
