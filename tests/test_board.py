"""
Tests for the playfield board.
"""
import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tetris.board import Board, BOARD_WIDTH, BOARD_HEIGHT, EMPTY
from tetris.pieces import I, O, T, rotate_shape


def fill_row(board: Board, row: int, tag: int = 1, skip=()) -> None:
    grid = board.get_state()
    for col in range(BOARD_WIDTH):
        if col not in skip:
            grid[row, col] = tag
    board.set_state(grid)


class TestBoardBasics:
    """Test basic board operations."""

    def test_board_creation(self):
        board = Board()
        assert board.grid.shape == (BOARD_HEIGHT, BOARD_WIDTH)
        assert (BOARD_HEIGHT, BOARD_WIDTH) == (20, 10)
        assert board.total_blocks == 0
        assert board.empty_cells == 200

    def test_get_state_is_copy(self):
        board = Board()
        state = board.get_state()
        state[0, 0] = 3
        assert board.is_empty(0, 0)

    def test_set_state_wrong_shape(self):
        board = Board()
        with pytest.raises(ValueError):
            board.set_state(np.zeros((8, 8), dtype=np.int8))

    def test_in_bounds(self):
        board = Board()
        assert board.in_bounds(0, 0)
        assert board.in_bounds(19, 9)
        assert not board.in_bounds(20, 0)
        assert not board.in_bounds(0, 10)
        assert not board.in_bounds(-1, 0)


class TestCollision:
    """Test collision against walls, floor and settled cells."""

    def test_free_position(self):
        board = Board()
        assert not board.collides(I.shape, 0, 0)
        assert not board.collides(I.shape, 6, 19)

    def test_right_wall(self):
        board = Board()
        assert board.collides(I.shape, 7, 0)

    def test_left_wall(self):
        board = Board()
        assert board.collides(O.shape, -1, 5)

    def test_floor(self):
        board = Board()
        assert not board.collides(O.shape, 0, 18)
        assert board.collides(O.shape, 0, 19)

    def test_settled_cell(self):
        board = Board()
        fill_row(board, 19, skip=(0, 1))
        assert not board.collides(O.shape, 0, 18)
        assert board.collides(O.shape, 1, 18)

    def test_above_top_not_checked_for_occupancy(self):
        board = Board()
        fill_row(board, 0)
        vertical_i = rotate_shape(I.shape)
        # Rows -4..-1 are above the board and never collide with cells
        assert not board.collides(vertical_i, 3, -4)
        assert board.collides(vertical_i, 3, -3)

    def test_above_top_still_checks_walls(self):
        board = Board()
        assert board.collides(I.shape, -1, -1)

    def test_empty_cells_of_shape_ignored(self):
        board = Board()
        shape = ((0, 1), (0, 1))
        assert not board.collides(shape, -1, 0)
        fill_row(board, 19, skip=(4,))
        # Only the middle cell of this row shape is occupied
        assert not board.collides(((0, 1, 0),), 3, 19)
        assert board.collides(((0, 1, 0),), 4, 19)

    def test_collides_is_pure(self):
        board = Board()
        before = board.get_state()
        board.collides(T.shape, 4, 18)
        assert np.array_equal(board.grid, before)


class TestMerge:
    """Test merging a landed piece."""

    def test_merge_writes_tag(self):
        board = Board()
        board.merge(T.shape, 4, 18, T.code)
        assert board.get_cell(18, 5) == T.code
        assert board.get_cell(19, 4) == T.code
        assert board.get_cell(19, 6) == T.code
        assert board.get_cell(18, 4) == EMPTY
        assert board.total_blocks == 4

    def test_merge_replaces_grid(self):
        board = Board()
        old_grid = board.grid
        board.merge(O.shape, 0, 0, O.code)
        assert old_grid is not board.grid
        assert np.all(old_grid == EMPTY)


class TestLineClearing:
    """Test full-row detection and clearing."""

    def test_no_full_rows(self):
        board = Board()
        fill_row(board, 19, skip=(3,))
        assert board.find_full_rows() == []
        assert board.clear_full_rows() == 0
        assert board.total_blocks == 9

    def test_single_row_clear(self):
        board = Board()
        fill_row(board, 19)
        board.merge(O.shape, 0, 17, O.code)
        assert board.find_full_rows() == [19]

        cleared = board.clear_full_rows()
        assert cleared == 1
        assert board.grid.shape == (BOARD_HEIGHT, BOARD_WIDTH)
        # The O piece shifted down by one row
        assert board.get_cell(18, 0) == O.code
        assert board.get_cell(19, 1) == O.code
        assert np.all(board.grid[0] == EMPTY)
        assert board.total_blocks == 4

    def test_multiple_rows_clear(self):
        board = Board()
        fill_row(board, 19)
        fill_row(board, 18)
        fill_row(board, 17, tag=5, skip=(9,))
        fill_row(board, 16)
        assert board.find_full_rows() == [19, 18, 16]

        assert board.clear_full_rows() == 3
        # The partial row drops to the floor with its contents intact
        assert list(board.grid[19]) == [5] * 9 + [EMPTY]
        assert np.all(board.grid[:19] == EMPTY)

    def test_non_adjacent_rows_keep_order(self):
        board = Board()
        fill_row(board, 19)
        fill_row(board, 18, tag=2, skip=(0,))
        fill_row(board, 17)
        fill_row(board, 16, tag=3, skip=(1,))

        assert board.clear_full_rows() == 2
        assert board.get_cell(19, 1) == 2
        assert board.get_cell(18, 0) == 3
        assert np.all(board.grid[:18] == EMPTY)

    def test_four_rows_at_once(self):
        board = Board()
        for row in range(16, 20):
            fill_row(board, row)
        assert board.clear_full_rows() == 4
        assert board.total_blocks == 0


class TestHeights:
    """Test column heights."""

    def test_empty_heights(self):
        board = Board()
        assert list(board.get_column_heights()) == [0] * BOARD_WIDTH

    def test_heights(self):
        board = Board()
        board.merge(T.shape, 0, 18, T.code)
        assert list(board.get_column_heights()[:4]) == [1, 2, 1, 0]


def test_str_and_repr():
    board = Board()
    fill_row(board, 19)
    text = str(board)
    assert text.splitlines()[-1] == "█" * BOARD_WIDTH
    assert "blocks=10" in repr(board)
