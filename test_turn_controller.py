"""
Tests for the turn controller, its events, scheduling and player config.

Usage:
    pytest test_turn_controller.py
"""

import random

import pytest

from logic.game_state import Move, Symbol
from logic.win_checker import GameStatus
from controller import (
    EventBus,
    GameEvent,
    ManualScheduler,
    PlayerConfig,
    TurnController,
    make_player_config,
)


X, O = Symbol.X, Symbol.O


def record_events(controller):
    """Subscribe to every event and collect (event, data) pairs."""
    seen = []
    for event in GameEvent:
        controller.subscribe(event, lambda data, event=event: seen.append((event, data)))
    return seen


def event_names(seen):
    return [event for event, _ in seen]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def humans(scheduler):
    controller = TurnController(scheduler=scheduler)
    controller.start()
    return controller


def bot_game(scheduler, x="human", o="minimax", seed=0):
    players = {
        X: make_player_config(X, "Alice", x),
        O: make_player_config(O, "Robot", o),
    }
    controller = TurnController(players, scheduler=scheduler, rng=random.Random(seed))
    controller.start()
    return controller


# ==================== HUMAN PLAY ====================

def test_initial_state(humans):
    assert humans.history_list() == []
    assert humans.current_active_player() == X
    assert humans.current_outcome().status == GameStatus.IN_PROGRESS
    assert humans.cursor is None
    assert not humans.is_board_disabled()


def test_moves_alternate(humans):
    assert humans.submit_move((1, 1))
    assert humans.submit_move((0, 0))

    assert humans.history_list() == [Move((1, 1), X), Move((0, 0), O)]
    board = humans.current_board()
    assert board[1][1] == X
    assert board[0][0] == O
    assert humans.current_active_player() == X


@pytest.mark.parametrize("square", [(1, 1), (3, 0), (0, -1)])
def test_illegal_moves_are_refused(humans, square):
    humans.submit_move((1, 1))
    before = humans.history_list()

    assert not humans.submit_move(square)
    assert humans.history_list() == before


def test_moves_after_a_win_are_refused(humans):
    for square in [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)]:
        assert humans.submit_move(square)

    outcome = humans.current_outcome()
    assert outcome.status == GameStatus.WIN
    assert outcome.winner == X
    assert outcome.line == ((0, 0), (0, 1), (0, 2))

    assert not humans.submit_move((2, 2))
    assert len(humans.history_list()) == 5
    assert humans.is_board_disabled()


def test_move_and_win_events(humans):
    seen = record_events(humans)

    for square in [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)]:
        humans.submit_move(square)

    assert event_names(seen) == [GameEvent.SQUARE_SELECTED, GameEvent.MOVE_APPLIED] * 5 + [GameEvent.GAME_WON]

    _, first_move = seen[1]
    assert first_move == {"square": (0, 0), "symbol": X, "move_index": 0, "is_bot": False}

    _, win = seen[-1]
    assert win["symbol"] == X
    assert win["name"] == "Player 1"
    assert win["line"] == ((0, 0), (0, 1), (0, 2))


def test_draw(humans):
    seen = record_events(humans)
    squares = [(0, 0), (0, 1), (0, 2), (1, 1), (1, 0), (1, 2), (2, 1), (2, 0), (2, 2)]

    for square in squares:
        assert humans.submit_move(square)

    assert humans.current_outcome().status == GameStatus.DRAW
    assert event_names(seen)[-1] == GameEvent.GAME_DRAWN
    assert GameEvent.GAME_WON not in event_names(seen)


# ==================== CURSOR ====================

def test_viewing_the_past(humans):
    for square in [(0, 0), (1, 1), (2, 2)]:
        humans.submit_move(square)

    assert humans.set_cursor(0)
    assert humans.is_viewing_past
    board = humans.current_board()
    assert board[0][0] == X
    assert sum(cell is not None for row in board for cell in row) == 1
    assert humans.current_active_player() == O

    # Moves are refused while looking back, history untouched
    assert not humans.submit_move((0, 1))
    assert len(humans.history_list()) == 3
    assert humans.current_board() == board
    assert humans.is_board_disabled()

    assert humans.return_to_live()
    assert humans.cursor is None
    assert humans.submit_move((0, 1))


def test_selecting_the_latest_move_goes_live(humans):
    humans.submit_move((0, 0))
    humans.submit_move((1, 1))

    assert humans.select_move(0)
    assert humans.cursor == 0

    assert humans.select_move(1)
    assert humans.cursor is None
    assert not humans.is_viewing_past


def test_cursor_on_the_only_move_still_blocks_play(humans):
    humans.submit_move((0, 0))

    assert humans.set_cursor(0)
    assert humans.is_viewing_past
    board = humans.current_board()
    assert board[0][0] == X
    assert sum(cell is not None for row in board for cell in row) == 1

    assert not humans.submit_move((1, 1))
    assert humans.history_list() == [Move((0, 0), X)]
    assert humans.current_board() == board


def test_cursor_out_of_range_is_refused(humans):
    assert not humans.set_cursor(0)

    humans.submit_move((0, 0))
    humans.submit_move((1, 1))
    assert not humans.set_cursor(2)
    assert not humans.set_cursor(-1)
    assert humans.cursor is None


def test_viewing_past_does_not_emit(humans):
    humans.submit_move((0, 0))
    humans.submit_move((1, 1))
    seen = record_events(humans)

    humans.set_cursor(0)
    humans.return_to_live()

    assert seen == []


# ==================== RESTART ====================

def test_restart(humans):
    seen = record_events(humans)
    humans.submit_move((0, 0))
    humans.set_cursor(0)

    humans.restart()

    assert humans.history_list() == []
    assert humans.cursor is None
    assert event_names(seen)[-1] == GameEvent.GAME_RESTARTED


def test_restart_after_game_over_starts_fresh(humans):
    for square in [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)]:
        humans.submit_move(square)

    humans.restart()

    assert humans.current_outcome().status == GameStatus.IN_PROGRESS
    assert humans.submit_move((2, 2))


# ==================== BOTS ====================

def test_bot_turn_is_scheduled(scheduler):
    controller = bot_game(scheduler)
    seen = record_events(controller)

    assert controller.submit_move((0, 0))

    assert scheduler.pending == 1
    assert controller.is_bot_thinking
    assert controller.is_board_disabled()
    assert event_names(seen)[-1] == GameEvent.BOT_THINKING
    assert seen[-1][1] == {"symbol": O, "name": "Robot"}

    # Human can't play on the bot's turn
    assert not controller.submit_move((2, 2))

    assert scheduler.run_pending() == 1

    assert controller.history_list() == [Move((0, 0), X), Move((1, 1), O)]
    assert not controller.is_bot_thinking
    assert event_names(seen)[-2:] == [GameEvent.BOT_MOVED, GameEvent.MOVE_APPLIED]
    assert seen[-2][1]["square"] == (1, 1)
    assert seen[-1][1]["is_bot"] is True
    assert scheduler.pending == 0


def test_bot_plays_first_as_x(scheduler):
    controller = bot_game(scheduler, x="minimax", o="human")

    assert scheduler.pending == 1
    scheduler.run_pending()

    assert controller.history_list() == [Move((1, 1), X)]
    assert controller.current_active_player() == O


def test_restart_cancels_pending_bot_turn(scheduler):
    controller = bot_game(scheduler)
    controller.submit_move((0, 0))
    assert scheduler.pending == 1

    controller.restart()

    assert scheduler.pending == 0
    assert not controller.is_bot_thinking
    assert scheduler.run_pending() == 0
    assert controller.history_list() == []


def test_restart_reschedules_bot_playing_x(scheduler):
    controller = bot_game(scheduler, x="random", o="human")
    scheduler.run_pending()

    controller.restart()

    assert scheduler.pending == 1


def test_viewing_past_pauses_bot(scheduler):
    controller = bot_game(scheduler)
    controller.submit_move((0, 0))
    scheduler.run_pending()
    controller.submit_move((2, 2))
    assert scheduler.pending == 1

    controller.set_cursor(0)

    assert scheduler.pending == 0
    assert scheduler.run_pending() == 0
    assert len(controller.history_list()) == 3

    seen = record_events(controller)
    controller.return_to_live()

    assert scheduler.pending == 1
    assert event_names(seen) == [GameEvent.BOT_THINKING]

    scheduler.run_pending()
    assert len(controller.history_list()) == 4


def test_bots_play_a_full_game(scheduler):
    controller = bot_game(scheduler, x="minimax", o="minimax")
    seen = record_events(controller)

    while scheduler.run_pending():
        pass

    assert len(controller.history_list()) == 9
    assert controller.current_outcome().status == GameStatus.DRAW
    assert event_names(seen)[-1] == GameEvent.GAME_DRAWN
    assert event_names(seen).count(GameEvent.BOT_MOVED) == 9


def test_minimax_bot_beats_careless_human(scheduler):
    controller = bot_game(scheduler, x="human", o="minimax")

    controller.submit_move((0, 0))
    scheduler.run_pending()     # O takes the centre
    controller.submit_move((2, 2))
    scheduler.run_pending()     # O answers on an edge, threatening (2, 1)
    assert controller.history_list()[-1] == Move((0, 1), O)

    controller.submit_move((1, 0))
    scheduler.run_pending()

    outcome = controller.current_outcome()
    assert outcome.status == GameStatus.WIN
    assert outcome.winner == O


# ==================== PLAYERS ====================

def test_player_names(humans):
    assert humans.player_config(X).name == "Player 1"
    assert humans.set_player_name(X, "  Ada ")
    assert humans.player_config(X).name == "Ada"
    assert not humans.set_player_name(O, "   ")
    assert humans.player_config(O).name == "Player 2"


def test_make_player_config():
    config = make_player_config(O, "Robot", "bot", "Easy")
    assert config == PlayerConfig(O, "Robot", "bot", "easy")
    assert config.is_bot

    assert make_player_config(X, None, "bot").strategy_name == "minimax"
    assert make_player_config(X, None, "unbeatable").is_bot
    assert make_player_config(X).name == "Player 1"


@pytest.mark.parametrize("kind, strategy", [
    ("bot", "grandmaster"),
    ("alien", None),
    (None, None),
])
def test_bad_player_config_falls_back_to_human(kind, strategy):
    config = make_player_config(O, "Robot", kind, strategy)

    assert not config.is_bot
    assert config.kind == "human"
    assert config.name == "Robot"


# ==================== EVENT BUS ====================

def test_listeners_run_in_order_despite_errors():
    bus = EventBus()
    calls = []

    def broken(data):
        calls.append("broken")
        raise RuntimeError("listener failed")

    bus.on(GameEvent.GAME_DRAWN, lambda data: calls.append("first"))
    bus.on(GameEvent.GAME_DRAWN, broken)
    bus.on(GameEvent.GAME_DRAWN, lambda data: calls.append("last"))

    bus.emit(GameEvent.GAME_DRAWN)

    assert calls == ["first", "broken", "last"]


def test_unsubscribe():
    bus = EventBus()
    calls = []

    unsubscribe = bus.on(GameEvent.GAME_RESTARTED, calls.append)
    bus.emit(GameEvent.GAME_RESTARTED, {"n": 1})
    unsubscribe()
    unsubscribe()
    bus.emit(GameEvent.GAME_RESTARTED, {"n": 2})

    assert calls == [{"n": 1}]


def test_controller_unsubscribe(humans):
    calls = []
    humans.subscribe(GameEvent.MOVE_APPLIED, calls.append)
    humans.unsubscribe(GameEvent.MOVE_APPLIED, calls.append)

    humans.submit_move((0, 0))

    assert calls == []


def test_once_and_off():
    bus = EventBus()
    calls = []

    bus.once(GameEvent.MOVE_APPLIED, calls.append)
    bus.on(GameEvent.GAME_WON, calls.append)
    assert set(bus.event_types()) == {GameEvent.MOVE_APPLIED, GameEvent.GAME_WON}

    bus.emit(GameEvent.MOVE_APPLIED, {"n": 1})
    bus.emit(GameEvent.MOVE_APPLIED, {"n": 2})
    bus.off(GameEvent.GAME_WON)
    bus.emit(GameEvent.GAME_WON, {"n": 3})

    assert calls == [{"n": 1}]

    bus.clear()
    assert bus.event_types() == []


# ==================== SCHEDULER ====================

def test_scheduler_runs_in_order_and_cancels():
    scheduler = ManualScheduler()
    calls = []

    scheduler.call_later(10, lambda: calls.append("a"))
    handle = scheduler.call_later(10, lambda: calls.append("b"))
    scheduler.call_later(0, lambda: calls.append("c"))
    scheduler.cancel(handle)
    scheduler.cancel(12345)

    assert scheduler.pending == 2
    assert scheduler.run_pending() == 2
    assert calls == ["a", "c"]
    assert scheduler.pending == 0


def test_callbacks_queued_while_running_wait():
    scheduler = ManualScheduler()
    calls = []

    def first():
        calls.append("first")
        scheduler.call_later(0, lambda: calls.append("second"))

    scheduler.call_later(0, first)

    assert scheduler.run_pending() == 1
    assert calls == ["first"]
    assert scheduler.run_pending() == 1
    assert calls == ["first", "second"]


# ==================== CONFIG HANDED TO THE CONTROLLER ====================

@pytest.mark.parametrize("config", [
    PlayerConfig(O, "Robot", "bot", "grandmaster"),
    PlayerConfig(O, "Robot", "alien", None),
])
def test_bad_config_passed_directly_plays_as_human(scheduler, config):
    controller = TurnController({O: config}, scheduler=scheduler)
    controller.start()

    assert controller.submit_move((0, 0))
    scheduler.run_pending()

    assert not controller.player_config(O).is_bot
    assert not controller.is_board_disabled()
    assert controller.submit_move((1, 1))
    assert controller.history_list() == [Move((0, 0), X), Move((1, 1), O)]


def test_bot_without_strategy_uses_the_default(scheduler):
    controller = TurnController({O: PlayerConfig(O, "Robot", "bot", None)}, scheduler=scheduler)
    controller.start()

    controller.submit_move((0, 0))
    assert scheduler.run_pending() == 1

    assert controller.player_config(O).strategy_name == "minimax"
    assert controller.history_list()[-1] == Move((1, 1), O)


def test_renaming_leaves_the_given_config_alone(scheduler):
    config = PlayerConfig(X, "Alice")
    first = TurnController({X: config}, scheduler=scheduler)
    second = TurnController({X: config}, scheduler=scheduler)

    assert first.set_player_name(X, "Ada")

    assert first.player_config(X).name == "Ada"
    assert config.name == "Alice"
    assert second.player_config(X).name == "Alice"


def test_restart_from_bot_thinking_keeps_one_timer(scheduler):
    players = {
        X: make_player_config(X, "Robot 1", "minimax"),
        O: make_player_config(O, "Robot 2", "minimax"),
    }
    controller = TurnController(players, scheduler=scheduler)

    restarted = []

    def restart_once(data):
        if not restarted:
            restarted.append(True)
            controller.restart()

    controller.subscribe(GameEvent.BOT_THINKING, restart_once)
    controller.start()

    assert restarted
    assert scheduler.pending == 1
    assert controller.is_bot_thinking

    scheduler.run_pending()
    assert controller.history_list() == [Move((1, 1), X)]
    assert scheduler.pending == 1


def test_win_on_the_ninth_move_is_not_announced_as_draw(humans):
    seen = record_events(humans)
    squares = [(0, 0), (0, 1), (0, 2), (1, 1), (1, 0), (1, 2), (2, 1), (2, 2), (2, 0)]

    for square in squares:
        assert humans.submit_move(square)

    assert event_names(seen)[-1] == GameEvent.GAME_WON
    assert GameEvent.GAME_DRAWN not in event_names(seen)
