"""
Tetromino Definitions.

This module defines the seven tetromino kinds (I, O, T, L, J, S, Z).
Each kind is a fixed 0/1 shape matrix plus a color tag. Rotation always
builds a new matrix; the catalog itself is never modified.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import numpy as np

Shape = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class Tetromino:
    """Represents one of the seven tetromino kinds."""
    name: str
    code: int  # Tag written into board cells (1-7, 0 is empty)
    color: str
    shape: Shape

    @property
    def width(self) -> int:
        """Return the width of the base shape."""
        return len(self.shape[0])

    @property
    def height(self) -> int:
        """Return the height of the base shape."""
        return len(self.shape)

    @property
    def num_blocks(self) -> int:
        """Return the number of occupied cells."""
        return sum(sum(row) for row in self.shape)

    def __repr__(self) -> str:
        return f"Tetromino({self.name})"


@dataclass(frozen=True)
class ActivePiece:
    """The currently falling piece: a tetromino, its current shape and top-left position."""
    tetromino: Tetromino
    shape: Shape
    x: int
    y: int

    @property
    def code(self) -> int:
        return self.tetromino.code

    @property
    def color(self) -> str:
        return self.tetromino.color

    def moved(self, dx: int = 0, dy: int = 0) -> "ActivePiece":
        """Return a copy translated by (dx, dy)."""
        return ActivePiece(self.tetromino, self.shape, self.x + dx, self.y + dy)

    def with_shape(self, shape: Shape) -> "ActivePiece":
        """Return a copy with a different shape at the same position."""
        return ActivePiece(self.tetromino, shape, self.x, self.y)

    def cells(self) -> List[Tuple[int, int]]:
        """Absolute (row, col) board coordinates of every occupied cell."""
        return [
            (self.y + dy, self.x + dx)
            for dy, row in enumerate(self.shape)
            for dx, value in enumerate(row)
            if value
        ]


def _make_shape(rows: List[List[int]]) -> Shape:
    """Freeze a nested list into an immutable shape matrix."""
    return tuple(tuple(int(v) for v in row) for row in rows)


def rotate_shape(shape: Shape) -> Shape:
    """
    Rotate a shape 90 degrees clockwise.

    For an R x C shape the result is C x R with
    rotated[i][j] = shape[R - 1 - j][i].
    """
    num_rows = len(shape)
    num_cols = len(shape[0])
    return tuple(
        tuple(shape[num_rows - 1 - j][i] for j in range(num_rows))
        for i in range(num_cols)
    )


# =============================================================================
# THE SEVEN TETROMINOS
# =============================================================================

I = Tetromino("I", 1, "cyan", _make_shape([[1, 1, 1, 1]]))

O = Tetromino("O", 2, "yellow", _make_shape([
    [1, 1],
    [1, 1],
]))

T = Tetromino("T", 3, "purple", _make_shape([
    [0, 1, 0],
    [1, 1, 1],
]))

L = Tetromino("L", 4, "orange", _make_shape([
    [1, 0],
    [1, 0],
    [1, 1],
]))

J = Tetromino("J", 5, "blue", _make_shape([
    [0, 1],
    [0, 1],
    [1, 1],
]))

S = Tetromino("S", 6, "green", _make_shape([
    [0, 1, 1],
    [1, 1, 0],
]))

Z = Tetromino("Z", 7, "red", _make_shape([
    [1, 1, 0],
    [0, 1, 1],
]))


TETROMINOS: Dict[str, Tetromino] = {
    "I": I,
    "O": O,
    "T": T,
    "L": L,
    "J": J,
    "S": S,
    "Z": Z,
}

TETROMINO_LIST: List[Tetromino] = list(TETROMINOS.values())
NUM_TETROMINOS: int = len(TETROMINOS)

# Board tag -> tetromino, used by renderers to resolve colors
TETROMINOS_BY_CODE: Dict[int, Tetromino] = {t.code: t for t in TETROMINO_LIST}

assert NUM_TETROMINOS == 7, f"Expected 7 tetrominos, got {NUM_TETROMINOS}"


def get_tetromino_by_name(name: str) -> Tetromino:
    """Get a tetromino by its name."""
    if name not in TETROMINOS:
        raise ValueError(f"Unknown tetromino: {name}. Valid kinds: {list(TETROMINOS.keys())}")
    return TETROMINOS[name]


def get_tetromino_by_code(code: int) -> Optional[Tetromino]:
    """Get the tetromino a board tag belongs to, or None for empty cells."""
    return TETROMINOS_BY_CODE.get(int(code))


def get_random_tetromino(rng: np.random.Generator = None) -> Tetromino:
    """Draw one tetromino uniformly from the seven kinds."""
    if rng is None:
        rng = np.random.default_rng()
    return TETROMINO_LIST[int(rng.integers(NUM_TETROMINOS))]


def visualize_shape(shape: Shape) -> str:
    """Create a string visualization of a shape."""
    return "\n".join("".join("□" if cell else " " for cell in row) for row in shape)


if __name__ == "__main__":
    for name, tetromino in TETROMINOS.items():
        print(f"\n{name} ({tetromino.color}, {tetromino.width}x{tetromino.height}):")
        shape = tetromino.shape
        for _ in range(4):
            print(visualize_shape(shape))
            print("-" * 4)
            shape = rotate_shape(shape)
