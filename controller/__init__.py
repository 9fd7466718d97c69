"""
Controller module for the tic-tac-toe engine.
Runs turns, schedules bots and announces game events.
"""

from .config import GameConfig, PlayerConfig, make_player_config, default_player_configs
from .events import EventBus, GameEvent
from .scheduler import ManualScheduler
from .turn_controller import TurnController
