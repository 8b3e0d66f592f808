"""
Falling Blocks Game Engine.

This module implements the complete game logic including:
- Game state management
- Piece spawning (uniform random draw over the 7 tetrominos)
- Horizontal moves, rotation and the per-tick fall
- Locking, line clearing, scoring and speed progression
- Game over detection
"""
from dataclasses import dataclass
from typing import Callable, Optional, Dict, Any
from enum import Enum
import numpy as np

from .board import Board, BOARD_WIDTH, BOARD_HEIGHT
from .pieces import ActivePiece, Shape, get_random_tetromino, rotate_shape

SPAWN_X = BOARD_WIDTH // 2 - 1
SPAWN_Y = 0

ScoreSink = Callable[[int], None]
LockObserver = Callable[["LockResult"], None]


class GameStatus(Enum):
    """Game status enumeration."""
    UNINITIALIZED = "uninitialized"
    FALLING = "falling"
    GAME_OVER = "game_over"


@dataclass
class LockResult:
    """Result of a piece locking into the board."""
    lines_cleared: int = 0
    score_gained: int = 0
    drop_interval_ms: int = 0
    game_over: bool = False
    score: int = 0


@dataclass
class GameState:
    """Read-only snapshot of the game for renderers and loggers."""
    board: np.ndarray
    active_piece: Optional[ActivePiece]
    score: int
    drop_interval_ms: int
    is_over: bool
    status: GameStatus
    lines_cleared: int
    pieces_locked: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        piece = None
        if self.active_piece is not None:
            piece = {
                "name": self.active_piece.tetromino.name,
                "color": self.active_piece.color,
                "shape": [list(row) for row in self.active_piece.shape],
                "x": self.active_piece.x,
                "y": self.active_piece.y,
            }
        return {
            "board": self.board.tolist(),
            "active_piece": piece,
            "score": self.score,
            "drop_interval_ms": self.drop_interval_ms,
            "is_over": self.is_over,
            "status": self.status.value,
            "lines_cleared": self.lines_cleared,
            "pieces_locked": self.pieces_locked,
        }


class GameEngine:
    """
    Falling blocks game engine.

    Owns the board, the active piece, the score and the drop interval.
    Commands either change state or are silently rejected; the only
    terminal transition is game over, reported once to the score sink.
    """

    INITIAL_DROP_INTERVAL_MS = 1000
    MIN_DROP_INTERVAL_MS = 200
    SPEED_UP_STEP_MS = 50
    SCORE_PER_LINE = 100

    def __init__(
        self,
        seed: Optional[int] = None,
        on_game_over: Optional[ScoreSink] = None,
        on_lock: Optional[LockObserver] = None,
    ):
        """
        Initialize a new game.

        Args:
            seed: Random seed for reproducible piece sequences
            on_game_over: Score sink called once with the final score
            on_lock: Called with a LockResult every time a piece locks
        """
        self.board = Board()
        self.rng = np.random.default_rng(seed)
        self.on_game_over = on_game_over
        self.on_lock = on_lock

        self.active_piece: Optional[ActivePiece] = None
        self.score = 0
        self.drop_interval_ms = self.INITIAL_DROP_INTERVAL_MS
        self.status = GameStatus.UNINITIALIZED
        self.last_lock: Optional[LockResult] = None

        # Statistics
        self.total_lines_cleared = 0
        self.pieces_locked = 0
        self.pieces_spawned = 0

        self._score_reported = False

    @property
    def is_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self.is_over

    def collides(self, shape: Shape, x: int, y: int) -> bool:
        """Check a shape at (x, y) against the current board."""
        return self.board.collides(shape, x, y)

    def spawn(self) -> Optional[ActivePiece]:
        """
        Create a new active piece at the spawn position.

        Does not check for collision; callers that need the game-over
        check go through the lock path or the first advance().

        Returns:
            The new active piece, or None once the game is over
        """
        if self.is_over:
            return None

        tetromino = get_random_tetromino(self.rng)
        self.active_piece = ActivePiece(tetromino, tetromino.shape, SPAWN_X, SPAWN_Y)
        self.pieces_spawned += 1
        self.status = GameStatus.FALLING
        return self.active_piece

    def move_horizontal(self, direction: int) -> None:
        """Shift the active piece one column left (-1) or right (+1) if free."""
        if self.is_over or self.active_piece is None:
            return
        if direction not in (-1, 1):
            return

        candidate = self.active_piece.moved(dx=direction)
        if not self.collides(candidate.shape, candidate.x, candidate.y):
            self.active_piece = candidate

    def rotate(self) -> None:
        """Rotate the active piece clockwise in place; no wall kicks."""
        if self.is_over or self.active_piece is None:
            return

        piece = self.active_piece
        rotated = rotate_shape(piece.shape)
        if not self.collides(rotated, piece.x, piece.y):
            self.active_piece = piece.with_shape(rotated)

    def advance(self) -> None:
        """
        Move the active piece down one row, locking it if it has landed.

        With no active piece yet, the first call spawns one instead.
        """
        if self.is_over:
            return

        if self.active_piece is None:
            self._spawn_and_check()
            return

        candidate = self.active_piece.moved(dy=1)
        if not self.collides(candidate.shape, candidate.x, candidate.y):
            self.active_piece = candidate
            return

        self._lock()

    def _lock(self) -> LockResult:
        """Merge the landed piece, clear rows, score, then respawn."""
        piece = self.active_piece
        self.board.merge(piece.shape, piece.x, piece.y, piece.code)
        self.pieces_locked += 1

        lines_cleared = self.board.clear_full_rows()
        score_gained = 0
        if lines_cleared > 0:
            score_gained = lines_cleared * self.SCORE_PER_LINE
            self.score += score_gained
            self.total_lines_cleared += lines_cleared
            self.drop_interval_ms = max(
                self.MIN_DROP_INTERVAL_MS,
                self.drop_interval_ms - self.SPEED_UP_STEP_MS,
            )

        blocked = self._spawn_blocked()

        self.last_lock = LockResult(
            lines_cleared=lines_cleared,
            score_gained=score_gained,
            drop_interval_ms=self.drop_interval_ms,
            game_over=blocked,
            score=self.score,
        )
        if self.on_lock is not None:
            self.on_lock(self.last_lock)
        if blocked:
            self._end_game()
        return self.last_lock

    def _spawn_and_check(self) -> None:
        """Spawn a piece and end the game if it is blocked at the spawn position."""
        if self._spawn_blocked():
            self._end_game()

    def _spawn_blocked(self) -> bool:
        piece = self.spawn()
        return piece is not None and self.collides(piece.shape, piece.x, piece.y)

    def _end_game(self) -> None:
        self.status = GameStatus.GAME_OVER
        self.active_piece = None
        if not self._score_reported:
            self._score_reported = True
            if self.on_game_over is not None:
                self.on_game_over(self.score)

    def get_state(self) -> GameState:
        """Get the current game state."""
        return GameState(
            board=self.board.get_state(),
            active_piece=self.active_piece,
            score=self.score,
            drop_interval_ms=self.drop_interval_ms,
            is_over=self.is_over,
            status=self.status,
            lines_cleared=self.total_lines_cleared,
            pieces_locked=self.pieces_locked,
        )

    def get_statistics(self) -> Dict[str, Any]:
        """Get game statistics."""
        heights = self.board.get_column_heights()
        return {
            'score': self.score,
            'total_lines_cleared': self.total_lines_cleared,
            'pieces_locked': self.pieces_locked,
            'pieces_spawned': self.pieces_spawned,
            'drop_interval_ms': self.drop_interval_ms,
            'board_fill_ratio': self.board.total_blocks / (BOARD_WIDTH * BOARD_HEIGHT),
            'max_height': int(heights.max()),
        }

    def __str__(self) -> str:
        """String representation of the game state."""
        grid = self.board.get_state()
        if self.active_piece is not None:
            for r, c in self.active_piece.cells():
                if self.board.in_bounds(r, c):
                    grid[r, c] = -1
        lines = [
            "".join("·" if v == 0 else ("▣" if v < 0 else "█") for v in row)
            for row in grid
        ]
        lines.append(f"Score: {self.score} | Lines: {self.total_lines_cleared} | "
                     f"Interval: {self.drop_interval_ms}ms | Status: {self.status.value}")
        return "\n".join(lines)


def play_random_game(
    seed: Optional[int] = None,
    max_ticks: int = 100_000,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Play a complete game with random inputs for testing.

    Each tick applies a random command (left, right, rotate or nothing)
    followed by one advance().

    Args:
        seed: Random seed
        max_ticks: Safety cap on the number of advances
        verbose: Whether to print game progress

    Returns:
        Dictionary with game statistics
    """
    final_scores = []
    engine = GameEngine(seed=seed, on_game_over=final_scores.append)

    if verbose:
        print("Starting random game...")

    ticks = 0
    while not engine.is_game_over() and ticks < max_ticks:
        choice = engine.rng.integers(4)
        if choice == 0:
            engine.move_horizontal(-1)
        elif choice == 1:
            engine.move_horizontal(1)
        elif choice == 2:
            engine.rotate()

        locked_before = engine.pieces_locked
        engine.advance()
        ticks += 1

        locked = engine.pieces_locked > locked_before
        if verbose and locked and engine.last_lock.lines_cleared > 0:
            print(f"Cleared {engine.last_lock.lines_cleared} lines, "
                  f"+{engine.last_lock.score_gained} points")

    stats = engine.get_statistics()
    stats['ticks'] = ticks
    stats['game_over'] = engine.is_game_over()
    stats['reported_score'] = final_scores[0] if final_scores else None

    if verbose:
        print("\n" + "=" * 40)
        print("GAME OVER!" if engine.is_game_over() else "Tick limit reached")
        print(engine)
        print(f"\nFinal Statistics: {stats}")

    return stats


if __name__ == "__main__":
    stats = play_random_game(seed=42, verbose=True)
    print(f"\nFinal score: {stats['score']}")
