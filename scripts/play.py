"""
Interactive play script for the falling blocks game.

Play manually in the terminal or watch a random player.
"""
import argparse
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional
import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tetris.leaderboard import Leaderboard
from tetris.renderer import Renderer, clear_screen
from tetris.session import GameSession
from utils.config import load_config
from utils.logger import Logger


def now_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


def ask_player_name(default: Optional[str] = None) -> str:
    """Prompt until a non-empty name is entered."""
    while True:
        prompt = "Enter your name to start playing"
        if default:
            prompt += f" [{default}]"
        name = input(prompt + ": ").strip() or (default or "")
        if name:
            return name
        print("Name must not be empty.")


def make_logger(config: Dict[str, Any]) -> Optional[Logger]:
    log_config = config.get('logging', {})
    if not log_config.get('enabled', True):
        return None
    return Logger(log_config.get('log_dir', 'logs'), log_config.get('name', 'session'))


def play_manual(
    leaderboard: Leaderboard,
    player_name: str,
    seed: Optional[int] = None,
    logger: Optional[Logger] = None,
) -> int:
    """
    Play one game in the terminal.

    The board keeps falling in real time; each input line is a string of
    keys applied at once (a/d move, w rotate, s soft drop). input() blocks,
    so at most one overdue tick fires after each line and the timer is
    re-armed from the moment the keys arrive.

    Returns:
        Final score
    """
    renderer = Renderer()
    session = GameSession(player_name, leaderboard, seed=seed, logger=logger)
    session.start(now_ms())

    while not session.is_over:
        session.update(now_ms())
        clear_screen()
        print(renderer.render_game_state(session.engine.get_state()))
        if session.is_over:
            break

        print("\nControls: a=left d=right w=rotate s=down, Enter=refresh, q=quit")
        try:
            user_input = input("> ").strip().lower()
        except EOFError:
            break

        if user_input == 'q':
            print("Thanks for playing!")
            break

        session.update(now_ms(), max_ticks=1)
        session.press(user_input)

    clear_screen()
    print(renderer.render_game_state(session.engine.get_state()))
    score = session.final_score if session.final_score is not None else session.engine.score
    print(f"\nFinal Score: {score:,}")
    if logger is not None:
        logger.print_metrics(session.engine.get_statistics())
    return score


def play_random(
    leaderboard: Leaderboard,
    num_games: int = 1,
    seed: Optional[int] = None,
    delay: float = 0.05,
    logger: Optional[Logger] = None,
) -> None:
    """
    Watch a random player.

    Every frame presses one random key and then fires exactly one tick on
    a simulated clock.
    """
    renderer = Renderer()
    rng = np.random.default_rng(seed)
    keys = ["a", "d", "w", ""]

    for game_num in range(num_games):
        game_seed = None if seed is None else seed + game_num
        session = GameSession(f"random-{game_num + 1}", leaderboard, seed=game_seed, logger=logger)
        clock = 0.0
        session.start(clock)

        while not session.is_over:
            session.press(keys[rng.integers(len(keys))])
            clock += session.engine.drop_interval_ms
            session.update(clock)

            if delay > 0:
                clear_screen()
                print(f"Game {game_num + 1}/{num_games}")
                print(renderer.render_game_state(session.engine.get_state()))
                time.sleep(delay)

        stats = session.engine.get_statistics()
        if logger is not None:
            logger.print_metrics(stats)
        print(f"Game {game_num + 1}: Score={stats['score']:,}, "
              f"Lines={stats['total_lines_cleared']}, "
              f"Pieces={stats['pieces_locked']}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Play falling blocks")
    parser.add_argument(
        "--config",
        type=str,
        default="config/default.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["manual", "random"],
        default=None,
        help="Play manually or watch a random player"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of games for random mode"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed"
    )

    args = parser.parse_args()
    config = load_config(args.config)

    mode = args.mode or config['play']['mode']
    seed = args.seed if args.seed is not None else config['game']['seed']
    logger = make_logger(config)
    leaderboard = Leaderboard()

    if mode == "manual":
        player_name = ask_player_name(config['play']['player_name'])
        while True:
            play_manual(leaderboard, player_name, seed=seed, logger=logger)
            print()
            print(leaderboard)
            again = input("\nPlay again? (y/n): ").strip().lower()
            if again != 'y':
                break
            if seed is not None:
                seed += 1

    elif mode == "random":
        play_random(
            leaderboard,
            num_games=args.games,
            seed=seed,
            delay=config['play']['frame_delay'],
            logger=logger,
        )
        print()
        print(leaderboard)


if __name__ == "__main__":
    main()
