"""Falling blocks game engine."""
from .pieces import Tetromino, ActivePiece, TETROMINOS, get_tetromino_by_name, rotate_shape
from .board import Board, BOARD_WIDTH, BOARD_HEIGHT
from .engine import GameEngine, GameState, GameStatus, LockResult
from .leaderboard import Leaderboard

__all__ = [
    "Tetromino",
    "ActivePiece",
    "TETROMINOS",
    "get_tetromino_by_name",
    "rotate_shape",
    "Board",
    "BOARD_WIDTH",
    "BOARD_HEIGHT",
    "GameEngine",
    "GameState",
    "GameStatus",
    "LockResult",
    "Leaderboard",
]
