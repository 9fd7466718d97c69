"""
Console front end for the tic-tac-toe engine.

Play in the terminal against another person or one of the bots:
- Humans type "row col" (0-2 each)
- "view N" shows the position after move N, "live" returns to the game
- "restart", "name X|O NAME" and "quit" do what they say

Run this script to play, e.g. ``python main.py --o minimax``.
"""

import argparse
import logging
import random
from typing import Dict, Optional

from logic.game_state import Square, Symbol, format_board
from logic.win_checker import GameStatus
from bots import STRATEGIES
from controller import GameConfig, GameEvent, ManualScheduler, TurnController, make_player_config


class ConsoleGame:
    """
    Terminal session around a TurnController.

    Event listeners here play the part of the sound, animation and score
    consumers of a graphical front end.
    """

    def __init__(self, controller: TurnController, scheduler: ManualScheduler):
        self.controller = controller
        self.scheduler = scheduler
        self.is_running = False

        # Session scoreboard
        self.score: Dict[str, int] = {"X": 0, "O": 0, "Draw": 0}

        controller.subscribe(GameEvent.MOVE_APPLIED, self._on_move)
        controller.subscribe(GameEvent.GAME_WON, self._on_win)
        controller.subscribe(GameEvent.GAME_DRAWN, self._on_draw)
        controller.subscribe(GameEvent.GAME_RESTARTED, self._on_restart)
        controller.subscribe(GameEvent.BOT_THINKING, self._on_bot_thinking)

    # ==================== LISTENERS ====================

    def _on_move(self, data):
        player = self.controller.player_config(data["symbol"])
        row, col = data["square"]
        print(f"\n>>> {player.name} ({data['symbol'].value}) plays ({row}, {col})")

    def _on_win(self, data):
        self.score[data["symbol"].value] += 1
        print(f"\n🏆 {data['name']} ({data['symbol'].value}) WINS!")

    def _on_draw(self, data):
        self.score["Draw"] += 1
        print("\n🤝 It's a DRAW!")

    def _on_restart(self, data):
        print("\nResetting game...")

    def _on_bot_thinking(self, data):
        print(f"\n>>> {data['name']} is thinking...")

    # ==================== LOOP ====================

    def run(self):
        """Main game loop."""
        self.is_running = True
        self.controller.start()

        while self.is_running:
            # Let any scheduled bot turns play out
            if self.scheduler.run_pending(sleep=True):
                continue

            self._print_status()

            try:
                command = input("> ").strip()
            except EOFError:
                break

            self._handle_command(command)

        self._print_score()

    def _print_status(self):
        controller = self.controller
        print()
        print(format_board(controller.current_board()))

        if controller.is_viewing_past:
            print(f"\nViewing move {controller.cursor} of {len(controller.history_list()) - 1}"
                  " (type 'live' to return)")
            return

        outcome = controller.current_outcome()
        if outcome.status == GameStatus.IN_PROGRESS:
            player = controller.player_config(controller.current_active_player())
            print(f"\nCurrent turn: {player.name} ({player.symbol.value})")
        else:
            print("\nGame over. Type 'restart' to play again or 'quit'.")

    def _print_score(self):
        print("\n" + "=" * 40)
        print(f"   X: {self.score['X']}  |  O: {self.score['O']}  |  Draws: {self.score['Draw']}")
        print("=" * 40)

    def _handle_command(self, command: str):
        """Dispatch one line of user input."""
        parts = command.split()
        if not parts:
            return

        keyword = parts[0].lower()

        if keyword in ("q", "quit", "exit"):
            self.is_running = False
        elif keyword == "restart":
            self.controller.restart()
        elif keyword == "live":
            self.controller.return_to_live()
        elif keyword == "view" and len(parts) == 2 and parts[1].isdigit():
            if not self.controller.select_move(int(parts[1])):
                print("No such move.")
        elif keyword == "name" and len(parts) >= 3 and parts[1].upper() in ("X", "O"):
            self.controller.set_player_name(Symbol(parts[1].upper()), " ".join(parts[2:]))
        else:
            square = parse_square(parts)
            if square is None:
                print("Enter a move as 'row col', e.g. '1 1'.")
            elif not self.controller.submit_move(square):
                print("That move is not allowed right now.")


def parse_square(parts) -> Optional[Square]:
    """Parse ["row", "col"] or ["row,col"] into a square."""
    if len(parts) == 1 and "," in parts[0]:
        parts = parts[0].split(",")

    if len(parts) != 2:
        return None

    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def main():
    """Main entry point."""
    choices = ["human"] + sorted(STRATEGIES)

    parser = argparse.ArgumentParser(description="Tic-tac-toe in the terminal")
    parser.add_argument("--x", default="human", choices=choices, help="Who plays X (moves first)")
    parser.add_argument("--o", default="human", choices=choices, help="Who plays O")
    parser.add_argument("--x-name", default=None, help="Display name for X")
    parser.add_argument("--o-name", default=None, help="Display name for O")
    parser.add_argument(
        "--delay",
        type=int,
        default=GameConfig.BOT_DELAY_MS,
        help="Bot thinking delay in milliseconds"
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the bots' random choices")
    parser.add_argument("--verbose", action="store_true", help="Show debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    players = {
        Symbol.X: make_player_config(Symbol.X, args.x_name, args.x),
        Symbol.O: make_player_config(Symbol.O, args.o_name, args.o),
    }

    rng = random.Random(args.seed) if args.seed is not None else None
    scheduler = ManualScheduler()
    controller = TurnController(players, scheduler=scheduler, rng=rng, bot_delay_ms=args.delay)

    game = ConsoleGame(controller, scheduler)

    try:
        game.run()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
