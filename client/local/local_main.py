"""
Local Call Break session.

Opens the score store on this device and reports the game that can be
resumed, along with recent finished games.
"""

import logging
import sys

from PyQt6.QtCore import QCoreApplication

from tracker.config import configure_logging, settings
from tracker.game_engine import format_score
from client.local.controller import LocalGameController


logger = logging.getLogger(__name__)


def describe_session(controller: LocalGameController) -> list[str]:
    """Summary lines for the resumable game and the finished ones."""
    lines = []
    game = controller.game
    if game is None:
        lines.append("No game in progress.")
    else:
        dealer = game.current_dealer
        lines.append(
            f"Game in progress: round {game.current_round}, "
            f"next step: {game.next_action.value}"
        )
        if dealer:
            lines.append(f"Dealer: {dealer.display_name}")
        for score in game.standings:
            lines.append(f"  {score.player_name}: {format_score(score.cumulative_score)}")

    completed = controller.history(completed_only=True)
    lines.append(f"Completed games: {len(completed)}")
    for finished in completed[:5]:
        winner = finished.winner
        if winner:
            lines.append(f"  {finished.completed_at:%Y-%m-%d} won by {winner.display_name}")
    return lines


def run_local_session(argv: list[str] | None = None) -> int:
    """Configure logging, open the store and print the session summary."""
    configure_logging()

    app = QCoreApplication.instance() or QCoreApplication(argv or sys.argv)
    app.setApplicationName("Call Break Tracker")

    controller = LocalGameController()
    controller.load_active_game()
    logger.info(f"Session opened on {settings.DATABASE_PATH}")

    for line in describe_session(controller):
        print(line)
    return 0


def main():
    """Main entry point."""
    print("\n" + "=" * 50)
    print(" CALL BREAK - SCORE TRACKER")
    print("=" * 50 + "\n")

    sys.exit(run_local_session())


if __name__ == "__main__":
    main()
