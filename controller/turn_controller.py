"""
Turn controller for the tic-tac-toe engine.

Owns the move history and decides who plays next:
- Humans submit moves through submit_move()
- Bots are scheduled after a short delay and play through their strategy
- Every change is announced on the controller's EventBus
"""

import logging
from typing import Callable, Dict, List, Optional

from logic.game_state import (
    Board,
    History,
    Move,
    Square,
    Symbol,
    derive_active_player,
    derive_board,
)
from logic.move_validator import apply_move, validate_move
from logic.win_checker import GameStatus, Outcome, evaluate_outcome, is_draw
from bots import resolve_strategy
from .config import GameConfig, PlayerConfig, default_player_configs, make_player_config
from .events import EventBus, GameEvent, Listener
from .scheduler import ManualScheduler

logger = logging.getLogger(__name__)


class TurnController:
    """
    Main controller for one tic-tac-toe session.

    Game flow:
    1. start() (or restart()) begins a game with an empty history
    2. The active player moves: a human via submit_move(), a bot after
       its thinking delay
    3. After each move the outcome is checked and announced
    4. Repeat until someone wins or it's a draw

    Board, outcome and active player are always derived from the history
    and the cursor; nothing else is stored.
    """

    def __init__(
        self,
        players: Optional[Dict[Symbol, PlayerConfig]] = None,
        scheduler=None,
        rng=None,
        bot_delay_ms: int = GameConfig.BOT_DELAY_MS
    ):
        """
        Initialize the controller.

        Args:
            players: Config per symbol (defaults to two humans).
            scheduler: Object with call_later(delay_ms, callback) and
                cancel(handle). Defaults to a ManualScheduler.
            rng: Optional random.Random handed to the bot strategies.
            bot_delay_ms: Thinking delay before a bot moves.
        """
        # Copy through make_player_config so bad configs fall back to humans
        self.players = default_player_configs()
        for symbol, config in (players or {}).items():
            self.players[symbol] = make_player_config(
                symbol, config.name, config.kind, config.strategy_name
            )

        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.rng = rng
        self.bot_delay_ms = bot_delay_ms
        self.events = EventBus()

        self._history: History = ()
        self._cursor: Optional[int] = None
        self._pending_bot_turn = None
        self._bot_thinking = False

    # ==================== QUERIES ====================

    def current_board(self) -> Board:
        """Board at the cursor (a fresh copy every call)."""
        return derive_board(self._history, self._cursor)

    def current_outcome(self) -> Outcome:
        """Outcome of the board at the cursor."""
        return evaluate_outcome(self.current_board())

    def current_active_player(self) -> Symbol:
        """Symbol to move at the cursor."""
        return derive_active_player(self._history, self._cursor)

    def history_list(self) -> List[Move]:
        """All moves played, oldest first."""
        return list(self._history)

    @property
    def cursor(self) -> Optional[int]:
        """None when live, otherwise the index of the move being viewed."""
        return self._cursor

    @property
    def is_viewing_past(self) -> bool:
        return self._cursor is not None

    @property
    def is_bot_thinking(self) -> bool:
        return self._bot_thinking

    def player_config(self, symbol: Symbol) -> PlayerConfig:
        return self.players[symbol]

    def is_board_disabled(self) -> bool:
        """True when a human click would be ignored right now."""
        return (
            self.is_viewing_past
            or self._bot_thinking
            or self.players[self.current_active_player()].is_bot
            or self._live_outcome().is_terminal
        )

    # ==================== EVENTS ====================

    def subscribe(self, event: GameEvent, callback: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        return self.events.on(event, callback)

    def unsubscribe(self, event: GameEvent, callback: Listener):
        """Remove every registration of the callback for the event."""
        self.events.remove(event, callback)

    # ==================== COMMANDS ====================

    def start(self):
        """Begin play: schedules the first bot turn if X is a bot."""
        self._schedule_bot_turn()

    def submit_move(self, square: Square) -> bool:
        """
        Play a human move for the active player.

        Args:
            square: (row, col) to play.

        Returns:
            True if the move was applied. Moves are refused while viewing a
            past position, after the game ended, on a bot's turn, or when
            the square is off the board or taken.
        """
        if self.is_viewing_past:
            logger.debug("Ignoring move %s: viewing move %d", square, self._cursor)
            return False

        if self._live_outcome().is_terminal:
            logger.debug("Ignoring move %s: game is over", square)
            return False

        symbol = derive_active_player(self._history)
        if self.players[symbol].is_bot:
            logger.debug("Ignoring move %s: %s is a bot", square, symbol.value)
            return False

        result = validate_move(derive_board(self._history), square)
        if not result.is_valid:
            logger.debug("Ignoring move %s: %s", square, result.error_message)
            return False

        self.events.emit(GameEvent.SQUARE_SELECTED, {"square": tuple(square), "symbol": symbol})
        self._append_move(square, symbol, is_bot=False)
        return True

    def set_cursor(self, index: Optional[int]) -> bool:
        """
        View the position after a given move, or None for the live game.

        Any index, including the latest move, keeps the controller out of
        live play until return_to_live(). Viewing the past never changes
        the history and pauses any bot turn.

        Args:
            index: Move index in [0, len(history)) or None.

        Returns:
            True if the cursor is now at the requested position.
        """
        if index is not None and not 0 <= index < len(self._history):
            logger.debug("Ignoring cursor %d: history has %d moves", index, len(self._history))
            return False

        if index == self._cursor:
            return True

        self._cursor = index

        if index is None:
            self._schedule_bot_turn()
        else:
            self._cancel_bot_turn()

        return True

    def select_move(self, index: int) -> bool:
        """Move-log click: the latest move means live, older ones the past."""
        if index == len(self._history) - 1:
            return self.set_cursor(None)
        return self.set_cursor(index)

    def return_to_live(self) -> bool:
        """Go back to the current position."""
        return self.set_cursor(None)

    def restart(self):
        """Throw the game away and start a new one."""
        self._cancel_bot_turn()
        self.events.emit(GameEvent.GAME_RESTARTED, {})

        self._history = ()
        self._cursor = None

        logger.info("Game restarted")
        self.start()

    def set_player_name(self, symbol: Symbol, name: str) -> bool:
        """Rename a player. Empty names are refused."""
        name = (name or "").strip()
        if not name:
            return False

        self.players[symbol].name = name
        return True

    # ==================== TURN HANDLING ====================

    def _live_outcome(self) -> Outcome:
        return evaluate_outcome(derive_board(self._history))

    def _append_move(self, square: Square, symbol: Symbol, is_bot: bool):
        """Apply a validated move, announce it and move the game on."""
        self._cancel_bot_turn()

        self._history = apply_move(self._history, square, symbol)
        self._cursor = None

        move_index = len(self._history) - 1
        logger.info("%s plays %s (move %d)", symbol.value, tuple(square), move_index)

        self.events.emit(GameEvent.MOVE_APPLIED, {
            "square": tuple(square),
            "symbol": symbol,
            "move_index": move_index,
            "is_bot": is_bot,
        })

        outcome = self._live_outcome()

        if outcome.status == GameStatus.WIN:
            logger.info("%s wins on %s", outcome.winner.value, outcome.line)
            self.events.emit(GameEvent.GAME_WON, {
                "symbol": outcome.winner,
                "name": self.players[outcome.winner].name,
                "line": outcome.line,
            })
        elif is_draw(self._history, outcome):
            logger.info("Game drawn")
            self.events.emit(GameEvent.GAME_DRAWN, {})
        else:
            self._schedule_bot_turn()

    def _schedule_bot_turn(self):
        """Queue the bot's move if it is a bot's turn in the live game."""
        if self._pending_bot_turn is not None or self.is_viewing_past:
            return

        if self._live_outcome().is_terminal:
            return

        symbol = derive_active_player(self._history)
        config = self.players[symbol]
        if not config.is_bot:
            return

        # Store the handle before announcing, listeners may restart or move
        self._bot_thinking = True
        self._pending_bot_turn = self.scheduler.call_later(self.bot_delay_ms, self._run_bot_turn)

        self.events.emit(GameEvent.BOT_THINKING, {"symbol": symbol, "name": config.name})

    def _cancel_bot_turn(self):
        if self._pending_bot_turn is not None:
            self.scheduler.cancel(self._pending_bot_turn)
            self._pending_bot_turn = None
        self._bot_thinking = False

    def _run_bot_turn(self):
        """Scheduled callback: ask the strategy for a move and play it."""
        self._pending_bot_turn = None
        self._bot_thinking = False

        symbol = derive_active_player(self._history)
        config = self.players[symbol]
        strategy = resolve_strategy(config.strategy_name)

        if not config.is_bot or strategy is None:
            return

        square = strategy(derive_board(self._history), symbol, rng=self.rng)

        self.events.emit(GameEvent.BOT_MOVED, {"symbol": symbol, "name": config.name, "square": square})

        if square is None:
            logger.debug("%s has no move to make", symbol.value)
            return

        self._append_move(square, symbol, is_bot=True)
