"""
Performance benchmark script for the falling blocks engine.

Measures engine throughput and random-play score statistics.
"""
import argparse
import sys
import time
from pathlib import Path
from typing import Dict, Any, List, Optional
import numpy as np
from tqdm import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from utils.config import load_config
from utils.logger import MetricsTracker


def benchmark_engine(num_games: int = 100, seed: int = 42, max_ticks: int = 100_000) -> Dict[str, Any]:
    """
    Benchmark the game engine with random play.

    Args:
        num_games: Number of games to play
        seed: Random seed
        max_ticks: Tick cap per game

    Returns:
        Dictionary of benchmark results
    """
    from tetris.engine import play_random_game

    tracker = MetricsTracker(window_size=num_games)
    scores: List[int] = []
    total_ticks = 0

    start = time.perf_counter()
    for i in tqdm(range(num_games), desc="Playing"):
        stats = play_random_game(seed=seed + i, max_ticks=max_ticks)
        total_ticks += stats['ticks']
        scores.append(stats['score'])
        tracker.add('score', stats['score'])
        tracker.add('lines', stats['total_lines_cleared'])
        tracker.add('pieces', stats['pieces_locked'])
    total_time = time.perf_counter() - start

    return {
        'num_games': num_games,
        'total_ticks': total_ticks,
        'total_time': total_time,
        'ticks_per_second': total_ticks / total_time,
        'games_per_second': num_games / total_time,
        'mean_score': tracker.get_mean('score'),
        'max_score': tracker.get_max('score'),
        'mean_lines': tracker.get_mean('lines'),
        'mean_pieces': tracker.get_mean('pieces'),
        'scores': scores,
        'summaries': tracker.get_all_summaries(),
    }


def plot_scores(scores: List[int], output_path: str) -> None:
    """Save a histogram of final scores."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.hist(scores, bins=max(1, len(set(scores))), color="tab:purple")
    ax.set_xlabel("Final score")
    ax.set_ylabel("Games")
    ax.set_title(f"Random play, {len(scores)} games (mean {np.mean(scores):.1f})")
    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)
    print(f"Saved score histogram to {output_path}")


def print_results(title: str, results: Dict[str, Any]) -> None:
    """Print benchmark results."""
    print(f"\n{'='*60}")
    print(title)
    print('='*60)
    for key, value in results.items():
        if key in ('scores', 'summaries'):
            continue
        if isinstance(value, float):
            print(f"  {key}: {value:.2f}")
        else:
            print(f"  {key}: {value}")
    print('='*60)
    print_summaries(results.get('summaries', {}))


def print_summaries(summaries: Dict[str, Dict[str, float]]) -> None:
    """Print per-metric rolling statistics as a small table."""
    if not summaries:
        return
    print(f"  {'metric':<8} {'mean':>9} {'std':>9} {'min':>7} {'max':>7}")
    for name, summary in summaries.items():
        print(f"  {name:<8} {summary['mean']:>9.2f} {summary['std']:>9.2f} "
              f"{summary['min']:>7.0f} {summary['max']:>7.0f}")
    print('='*60)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Benchmark falling blocks")
    parser.add_argument(
        "--config",
        type=str,
        default="config/default.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=None,
        help="Number of games to play"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed"
    )
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Write a score histogram to this image file"
    )

    args = parser.parse_args(argv)
    config = load_config(args.config)
    bench_config = config['benchmark']

    results = benchmark_engine(
        num_games=args.games or bench_config['num_games'],
        seed=args.seed,
        max_ticks=bench_config['max_ticks'],
    )
    print_results("GAME ENGINE BENCHMARK", results)

    if args.plot:
        plot_scores(results['scores'], args.plot)


if __name__ == "__main__":
    main()
