"""
Tests for the tick driver and input adapter.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tetris.driver import InputAdapter, TickDriver
from tetris.engine import GameEngine, GameStatus
from tetris.pieces import ActivePiece, O, T


def engine_with_piece(tetromino=T, x: int = 4, y: int = 0) -> GameEngine:
    engine = GameEngine(seed=0)
    engine.active_piece = ActivePiece(tetromino, tetromino.shape, x, y)
    engine.status = GameStatus.FALLING
    return engine


def block_spawn(engine: GameEngine) -> None:
    grid = engine.board.get_state()
    grid[0:2, 3:8] = 1
    engine.board.set_state(grid)


class TestTickDriver:
    """Test interval scheduling."""

    def test_not_running_before_start(self):
        driver = TickDriver(engine_with_piece())
        assert not driver.running
        assert driver.poll(10_000) == 0

    def test_first_tick_after_one_interval(self):
        engine = engine_with_piece()
        driver = TickDriver(engine)
        driver.start(0)

        assert driver.poll(999) == 0
        assert engine.active_piece.y == 0
        assert driver.poll(1000) == 1
        assert engine.active_piece.y == 1
        assert driver.next_tick_ms == 2000

    def test_catches_up_on_missed_ticks(self):
        engine = engine_with_piece()
        driver = TickDriver(engine)
        driver.start(0)

        assert driver.poll(3500) == 3
        assert engine.active_piece.y == 3
        assert driver.next_tick_ms == 4000
        assert driver.ticks == 3

    def test_max_ticks_drops_backlog(self):
        engine = engine_with_piece()
        driver = TickDriver(engine)
        driver.start(0)

        # Five intervals overdue, e.g. after a blocking read
        assert driver.poll(5500, max_ticks=1) == 1
        assert engine.active_piece.y == 1
        assert driver.next_tick_ms == 6500
        assert driver.poll(6499) == 0
        assert driver.poll(6500) == 1
        assert engine.active_piece.y == 2

    def test_max_ticks_not_reached(self):
        engine = engine_with_piece()
        driver = TickDriver(engine)
        driver.start(0)

        assert driver.poll(2500, max_ticks=5) == 2
        assert driver.next_tick_ms == 3000

    def test_speed_up_applies_to_next_tick(self):
        engine = engine_with_piece()
        driver = TickDriver(engine)
        driver.start(0)

        engine.drop_interval_ms = 500
        # The already armed tick keeps its schedule
        assert driver.poll(999) == 0
        assert driver.poll(1000) == 1
        assert driver.next_tick_ms == 1500
        assert driver.poll(1499) == 0
        assert driver.poll(1500) == 1
        assert driver.armed_interval_ms == 500

    def test_stops_on_game_over(self):
        engine = GameEngine(seed=0)
        block_spawn(engine)
        driver = TickDriver(engine)
        driver.start(0)

        assert driver.poll(5000) == 1
        assert engine.is_game_over()
        assert not driver.running
        assert driver.poll(10_000) == 0

    def test_start_after_game_over_does_nothing(self):
        engine = GameEngine(seed=0)
        block_spawn(engine)
        engine.advance()
        driver = TickDriver(engine)
        driver.start(0)
        assert not driver.running

    def test_stop(self):
        driver = TickDriver(engine_with_piece())
        driver.start(0)
        driver.stop()
        assert driver.poll(5000) == 0


class TestInputAdapter:
    """Test key dispatch."""

    def test_move_keys(self):
        engine = engine_with_piece()
        adapter = InputAdapter(engine)

        assert adapter.handle("a")
        assert engine.active_piece.x == 3
        assert adapter.handle("right")
        assert adapter.handle("D")
        assert engine.active_piece.x == 5

    def test_rotate_key(self):
        engine = engine_with_piece()
        adapter = InputAdapter(engine)
        assert adapter.handle("w")
        assert engine.active_piece.shape == ((1, 0), (1, 1), (1, 0))
        assert adapter.handle("up")
        assert engine.active_piece.shape == ((1, 1, 1), (0, 1, 0))

    def test_down_key_advances(self):
        engine = engine_with_piece()
        adapter = InputAdapter(engine)
        assert adapter.handle("s")
        assert adapter.handle("down")
        assert engine.active_piece.y == 2

    def test_unknown_key(self):
        engine = engine_with_piece()
        adapter = InputAdapter(engine)
        assert not adapter.handle("x")
        assert not adapter.handle("")
        assert (engine.active_piece.x, engine.active_piece.y) == (4, 0)

    def test_rejected_move_is_still_handled(self):
        engine = engine_with_piece(O, x=0)
        adapter = InputAdapter(engine)
        assert adapter.handle("a")
        assert engine.active_piece.x == 0

    def test_ignored_after_game_over(self):
        engine = GameEngine(seed=0)
        block_spawn(engine)
        engine.advance()
        adapter = InputAdapter(engine)
        assert not adapter.handle("a")

    def test_handle_sequence(self):
        engine = engine_with_piece()
        adapter = InputAdapter(engine)
        assert adapter.handle_sequence("aaqs") == 3
        assert (engine.active_piece.x, engine.active_piece.y) == (2, 1)
