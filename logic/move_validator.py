"""
Move validator for the tic-tac-toe engine.
Checks squares against a board and appends moves to a history.
"""

from typing import Optional, List, Sequence
from dataclasses import dataclass
from .game_state import BOARD_SIZE, Board, History, Move, Square, Symbol


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


def validate_move(board: Board, square: Square) -> ValidationResult:
    """
    Validate a square for the next move.

    Args:
        board: Current board.
        square: (row, col) to place a mark on.

    Returns:
        ValidationResult with is_valid and error_message.
    """
    row, col = square

    # Check if row/col are in valid range
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid position ({row}, {col}). Must be 0-2."
        )

    # Check if cell is empty
    if board[row][col] is not None:
        return ValidationResult(
            is_valid=False,
            error_message=f"Cell ({row}, {col}) is already occupied by {board[row][col].value}"
        )

    return ValidationResult(is_valid=True)


def is_legal_move(board: Board, square: Square) -> bool:
    """Check that the square is on the board and empty."""
    return validate_move(board, square).is_valid


def list_available_moves(board: Board) -> List[Square]:
    """
    Get all empty squares, scanned row by row.

    The order is part of the contract: strategies pick by index into it.

    Args:
        board: Current board.

    Returns:
        List of (row, col) tuples.
    """
    moves = []
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if board[row][col] is None:
                moves.append((row, col))
    return moves


def apply_move(history: Sequence[Move], square: Square, symbol: Symbol) -> History:
    """
    Append a move without touching the given history.

    Args:
        history: Moves played so far.
        square: (row, col) of the new move.
        symbol: Who plays it.

    Returns:
        A new history tuple ending with the new move.
    """
    row, col = square
    return tuple(history) + (Move((row, col), symbol),)
