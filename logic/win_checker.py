"""
Win checker for the tic-tac-toe engine.
Classifies a board as in progress, won or drawn.
"""

from enum import Enum
from typing import Optional, Sequence, Tuple
from dataclasses import dataclass
from .game_state import Board, Move, Square, Symbol


Line = Tuple[Square, Square, Square]

# All possible winning lines, in scan order
WINNING_LINES: Tuple[Line, ...] = (
    # Rows
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # Columns
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # Diagonals
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


class GameStatus(Enum):
    """Where a game stands."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """
    Classification of a board position.

    winner and line are only set when status is WIN.
    """
    status: GameStatus
    winner: Optional[Symbol] = None
    line: Optional[Line] = None

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS


IN_PROGRESS = Outcome(GameStatus.IN_PROGRESS)
DRAW = Outcome(GameStatus.DRAW)


def _line_owner(board: Board, line: Line) -> Optional[Symbol]:
    """Return the symbol filling all three squares of the line, if any."""
    (r1, c1), (r2, c2), (r3, c3) = line
    first = board[r1][c1]

    if first is not None and first == board[r2][c2] == board[r3][c3]:
        return first
    return None


def winning_line(board: Board) -> Optional[Line]:
    """Get the first completed line in scan order, or None."""
    for line in WINNING_LINES:
        if _line_owner(board, line) is not None:
            return line
    return None


def has_won(board: Board, symbol: Symbol) -> bool:
    """Check whether the symbol owns any complete line."""
    return any(_line_owner(board, line) == symbol for line in WINNING_LINES)


def is_board_full(board: Board) -> bool:
    return all(cell is not None for row in board for cell in row)


def evaluate_outcome(board: Board) -> Outcome:
    """
    Classify the board.

    Lines are scanned rows top to bottom, then columns left to right,
    then the two diagonals; the first complete line decides the winner.

    Args:
        board: The board to check.

    Returns:
        A WIN outcome with its line, DRAW if the board is full,
        IN_PROGRESS otherwise.
    """
    line = winning_line(board)
    if line is not None:
        row, col = line[0]
        return Outcome(GameStatus.WIN, winner=board[row][col], line=line)

    if is_board_full(board):
        return DRAW

    return IN_PROGRESS


def is_draw(history: Sequence[Move], outcome: Outcome) -> bool:
    """A draw needs all nine moves played and no winner."""
    return len(history) == 9 and outcome.status != GameStatus.WIN
