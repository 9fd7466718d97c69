"""
Logic module for the tic-tac-toe engine.
Derives board state from the move history and applies the rules.
"""

from .game_state import (
    Board,
    History,
    Move,
    Square,
    Symbol,
    derive_active_player,
    derive_board,
)
from .move_validator import ValidationResult, apply_move, is_legal_move, list_available_moves
from .win_checker import WINNING_LINES, GameStatus, Outcome, evaluate_outcome, has_won
