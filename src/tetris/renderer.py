"""
Falling Blocks Renderer.

Provides ASCII visualization of the playfield and the falling piece.
"""
from typing import Optional
import numpy as np

from .board import EMPTY
from .engine import GameState
from .pieces import ActivePiece, get_tetromino_by_code


class Renderer:
    """
    ASCII renderer for the falling blocks game.

    Settled cells show the letter of the tetromino that left them, the
    falling piece is drawn with a solid block.
    """

    EMPTY = "·"
    ACTIVE = "█"

    def __init__(self, show_border: bool = True):
        """Initialize renderer."""
        self.show_border = show_border

    def _cell_char(self, value: int) -> str:
        if value == EMPTY:
            return self.EMPTY
        tetromino = get_tetromino_by_code(value)
        return tetromino.name if tetromino is not None else "?"

    def render_board(self, board: np.ndarray, active_piece: Optional[ActivePiece] = None) -> str:
        """
        Render a board grid, optionally with the falling piece on top.

        Args:
            board: (rows, cols) array of cell tags
            active_piece: Piece to overlay, if any

        Returns:
            String representation of the board
        """
        overlay = set()
        if active_piece is not None:
            overlay = set(active_piece.cells())

        rows, cols = board.shape
        lines = []
        for row in range(rows):
            cells = []
            for col in range(cols):
                if (row, col) in overlay:
                    cells.append(self.ACTIVE)
                else:
                    cells.append(self._cell_char(board[row, col]))
            line = " ".join(cells)
            if self.show_border:
                line = f"|{line}|"
            lines.append(line)

        if self.show_border:
            lines.append("+" + "-" * (cols * 2 - 1) + "+")

        return "\n".join(lines)

    def render_game_state(self, state: GameState) -> str:
        """
        Render the complete game state.

        Args:
            state: Snapshot returned by GameEngine.get_state()

        Returns:
            Complete game state visualization
        """
        lines = []
        lines.append("=" * 24)
        lines.append(f"Score: {state.score:,}  |  Lines: {state.lines_cleared}")
        lines.append(f"Drop interval: {state.drop_interval_ms}ms")
        lines.append("=" * 24)
        lines.append(self.render_board(state.board, state.active_piece))
        if state.active_piece is not None:
            lines.append(f"Falling: {state.active_piece.tetromino.name} "
                         f"({state.active_piece.color})")
        if state.is_over:
            lines.append("*** GAME OVER ***")
        return "\n".join(lines)


def clear_screen():
    """Clear the terminal screen."""
    import os
    os.system('cls' if os.name == 'nt' else 'clear')
