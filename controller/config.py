"""
Game configuration for the tic-tac-toe engine.
Timing defaults and who controls each symbol.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from logic.game_state import Symbol
from bots import resolve_strategy

logger = logging.getLogger(__name__)

HUMAN = "human"
BOT = "bot"


class GameConfig:
    """
    Default game settings.
    Change these values to tune pacing and defaults.
    """

    # ==================== TIMING ====================
    # Pause before a bot plays, so its move is visible (milliseconds)
    BOT_DELAY_MS = 500

    # ==================== PLAYERS ====================
    DEFAULT_NAMES = {
        Symbol.X: "Player 1",
        Symbol.O: "Player 2",
    }

    # Strategy used when a bot is requested without naming one
    DEFAULT_STRATEGY = "minimax"


@dataclass
class PlayerConfig:
    """
    Who plays one of the two symbols.
    """
    symbol: Symbol
    name: str
    kind: str = HUMAN                       # "human" or "bot"
    strategy_name: Optional[str] = None     # Only used for bots

    @property
    def is_bot(self) -> bool:
        return self.kind == BOT


def make_player_config(
    symbol: Symbol,
    name: Optional[str] = None,
    kind: str = HUMAN,
    strategy_name: Optional[str] = None
) -> PlayerConfig:
    """
    Build a player config, falling back to a human player on bad input.

    A bot whose strategy name is unknown is played by a human instead.

    Args:
        symbol: Symbol this player controls.
        name: Display name (defaults to "Player 1" / "Player 2").
        kind: "human" or "bot".
        strategy_name: Strategy for a bot (defaults to minimax).

    Returns:
        A PlayerConfig that is always usable.
    """
    name = name or GameConfig.DEFAULT_NAMES[symbol]
    kind = (kind or HUMAN).strip().lower()

    if kind not in (HUMAN, BOT):
        # Allow the strategy name in place of "bot", e.g. kind="minimax"
        if resolve_strategy(kind) is not None:
            strategy_name, kind = kind, BOT
        else:
            logger.warning("Unknown player type %r for %s, using human", kind, symbol.value)
            kind = HUMAN

    if kind == HUMAN:
        return PlayerConfig(symbol=symbol, name=name)

    strategy_name = (strategy_name or GameConfig.DEFAULT_STRATEGY).strip().lower()
    if resolve_strategy(strategy_name) is None:
        logger.warning("Unknown strategy %r for %s, using human", strategy_name, symbol.value)
        return PlayerConfig(symbol=symbol, name=name)

    return PlayerConfig(symbol=symbol, name=name, kind=BOT, strategy_name=strategy_name)


def default_player_configs() -> Dict[Symbol, PlayerConfig]:
    """Two human players with the default names."""
    return {symbol: make_player_config(symbol) for symbol in Symbol}
