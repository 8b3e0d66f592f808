"""
Playfield Board Module.

This module implements the 20x10 playfield with:
- Collision testing against walls, floor and settled cells
- Merging a landed piece into the grid
- Full-row detection and clearing with gravity compaction
"""
from typing import List
import numpy as np

from .pieces import Shape

BOARD_WIDTH = 10
BOARD_HEIGHT = 20
EMPTY = 0


class Board:
    """
    Represents the fixed-size playfield.

    The board is a (BOARD_HEIGHT, BOARD_WIDTH) numpy array where:
    - 0 = empty cell
    - 1..7 = tag of the tetromino kind occupying the cell
    Row 0 is the top row.
    """

    def __init__(self):
        """Initialize an empty board."""
        self.height = BOARD_HEIGHT
        self.width = BOARD_WIDTH
        self.grid = np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8)

    @property
    def total_blocks(self) -> int:
        """Return total number of occupied cells."""
        return int(np.count_nonzero(self.grid))

    @property
    def empty_cells(self) -> int:
        """Return number of empty cells."""
        return self.grid.size - self.total_blocks

    def get_cell(self, row: int, col: int) -> int:
        """Get the tag stored in a cell."""
        return int(self.grid[row, col])

    def is_empty(self, row: int, col: int) -> bool:
        """Check if a cell is empty."""
        return self.grid[row, col] == EMPTY

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if coordinates are within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    def collides(self, shape: Shape, x: int, y: int) -> bool:
        """
        Check whether a shape placed with its top-left at (x, y) collides.

        A cell collides when it lands below the floor, outside either wall,
        or on an occupied cell. Cells above the top row are only checked
        against the walls.

        Args:
            shape: 0/1 shape matrix
            x: Column of the shape's top-left corner
            y: Row of the shape's top-left corner

        Returns:
            True if any occupied cell of the shape is blocked
        """
        height = self.height
        width = self.width
        grid = self.grid
        for dy, row in enumerate(shape):
            for dx, value in enumerate(row):
                if not value:
                    continue
                r, c = y + dy, x + dx
                if r >= height or c < 0 or c >= width:
                    return True
                if r >= 0 and grid[r, c] != EMPTY:
                    return True
        return False

    def merge(self, shape: Shape, x: int, y: int, tag: int) -> None:
        """
        Write a shape's occupied cells into the board with the given tag.

        The grid is replaced rather than modified so earlier snapshots stay
        untouched. Cells above the top row are dropped.
        """
        new_grid = self.grid.copy()
        for dy, row in enumerate(shape):
            for dx, value in enumerate(row):
                if value:
                    r, c = y + dy, x + dx
                    if self.in_bounds(r, c):
                        new_grid[r, c] = tag
        self.grid = new_grid

    def find_full_rows(self) -> List[int]:
        """Return the indices of all fully occupied rows, bottom to top."""
        full = np.all(self.grid != EMPTY, axis=1)
        return [int(row) for row in np.flatnonzero(full)[::-1]]

    def clear_full_rows(self) -> int:
        """
        Remove all full rows and shift the rows above them down.

        Empty rows are inserted at the top so the board keeps its height,
        and the remaining rows keep their relative order.

        Returns:
            Number of rows cleared
        """
        rows = self.find_full_rows()
        cleared = len(rows)
        if cleared == 0:
            return 0

        kept = np.delete(self.grid, rows, axis=0)
        empty_rows = np.zeros((cleared, self.width), dtype=np.int8)
        self.grid = np.vstack([empty_rows, kept])
        return cleared

    def get_column_heights(self) -> np.ndarray:
        """Get the stack height of each column (0 for an empty column)."""
        occupied = self.grid != EMPTY
        heights = np.where(
            occupied.any(axis=0),
            self.height - occupied.argmax(axis=0),
            0,
        )
        return heights.astype(np.int32)

    def get_state(self) -> np.ndarray:
        """Get the board state as a numpy array."""
        return self.grid.copy()

    def set_state(self, state: np.ndarray) -> None:
        """Set the board state from a numpy array."""
        state = np.asarray(state, dtype=np.int8)
        if state.shape != (self.height, self.width):
            raise ValueError(
                f"Board state must have shape {(self.height, self.width)}, got {state.shape}"
            )
        self.grid = state.copy()

    def __str__(self) -> str:
        """Create a string visualization of the board."""
        lines = []
        for row in range(self.height):
            lines.append("".join(
                "·" if self.grid[row, col] == EMPTY else "█"
                for col in range(self.width)
            ))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board({self.height}x{self.width}, blocks={self.total_blocks})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return False
        return np.array_equal(self.grid, other.grid)
