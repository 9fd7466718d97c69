"""
Unbeatable bot for the tic-tac-toe engine.
Uses a fixed opening policy backed by a full Minimax search.
"""

import logging
from typing import Optional, Tuple, List, Dict

from logic.game_state import Board, Square, Symbol
from logic.move_validator import list_available_moves
from logic.win_checker import has_won
from .common import find_winning_move, get_rng, place

logger = logging.getLogger(__name__)

CENTER: Square = (1, 1)
CORNERS: Tuple[Square, ...] = ((0, 0), (0, 2), (2, 0), (2, 2))

WIN_SCORE = 10
LOSS_SCORE = -10
DRAW_SCORE = 0


class MinimaxPlayer:
    """
    An AI that plays tic-tac-toe and never loses.

    Before searching it applies a fixed policy, in order:
    win now, block the opponent, take the centre, take a corner.
    The policy decides which of several equally good moves is played.
    """

    def __init__(self, symbol: Symbol, rng=None):
        """
        Initialize the player.

        Args:
            symbol: Which symbol the AI plays.
            rng: Optional random.Random used to pick between corners.
        """
        self.symbol = symbol
        self.opponent = symbol.opposite()
        self.rng = get_rng(rng)

        # Keep track of how many positions we've evaluated (for debugging)
        self.positions_evaluated = 0

    def get_best_move(self, board: Board) -> Optional[Square]:
        """
        Get the move to play on this board.

        Args:
            board: Current board (not modified).

        Returns:
            (row, col) of the chosen move, or None if the board is full.
        """
        self.positions_evaluated = 0

        valid_moves = list_available_moves(board)

        if not valid_moves:
            return None

        win = find_winning_move(board, self.symbol, valid_moves)
        if win is not None:
            return win

        block = find_winning_move(board, self.opponent, valid_moves)
        if block is not None:
            return block

        if CENTER in valid_moves:
            return CENTER

        scores = self.score_moves(board, valid_moves)
        best_score = max(scores.values())

        # Only corners that are as good as the best move are worth taking
        corners = [c for c in CORNERS if c in scores and scores[c] == best_score]
        if corners:
            move = self.rng.choice(corners)
        else:
            move = next(m for m in valid_moves if scores[m] == best_score)

        logger.debug(
            "Minimax %s evaluated %d positions. Best move: %s (score: %d)",
            self.symbol.value, self.positions_evaluated, move, best_score
        )

        return move

    def score_moves(self, board: Board, moves: List[Square]) -> Dict[Square, int]:
        """
        Score each move with a full search.

        Args:
            board: Current board.
            moves: Moves to score, in the order they should be tried.

        Returns:
            Mapping of move to its exact Minimax score.
        """
        return {
            move: self._minimax(place(board, move, self.symbol), is_maximizing=False)
            for move in moves
        }

    def _minimax(
        self,
        board: Board,
        is_maximizing: bool,
        alpha: float = float('-inf'),
        beta: float = float('inf')
    ) -> int:
        """
        Minimax algorithm with alpha-beta pruning.

        Scores do not depend on depth: a win is a win however far away.

        Args:
            board: Position to evaluate (never modified).
            is_maximizing: True if it is this player's turn.
            alpha: Alpha value for pruning.
            beta: Beta value for pruning.

        Returns:
            The score of the position.
        """
        self.positions_evaluated += 1

        # Check terminal states
        if has_won(board, self.symbol):
            return WIN_SCORE
        if has_won(board, self.opponent):
            return LOSS_SCORE

        valid_moves = list_available_moves(board)

        if not valid_moves:
            return DRAW_SCORE

        if is_maximizing:
            max_score = LOSS_SCORE
            for move in valid_moves:
                score = self._minimax(place(board, move, self.symbol), False, alpha, beta)
                max_score = max(max_score, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break  # Prune
            return max_score
        else:
            min_score = WIN_SCORE
            for move in valid_moves:
                score = self._minimax(place(board, move, self.opponent), True, alpha, beta)
                min_score = min(min_score, score)
                beta = min(beta, score)
                if beta <= alpha:
                    break  # Prune
            return min_score


def minimax_strategy(board: Board, symbol: Symbol, rng=None) -> Optional[Square]:
    """Strategy wrapper around MinimaxPlayer."""
    return MinimaxPlayer(symbol, rng).get_best_move(board)
