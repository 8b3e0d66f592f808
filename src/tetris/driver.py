"""
Tick and input drivers for the game engine.

The engine itself has no notion of time or keys. TickDriver decides when
advance() is due from a millisecond clock, and InputAdapter turns key names
into engine commands.
"""
from typing import Callable, Dict, Optional

from .engine import GameEngine


class TickDriver:
    """
    Issues advance() every drop_interval_ms milliseconds.

    The driver is polled with the current time rather than owning a thread.
    The interval is re-read after every tick, so a speed-up applies from
    the next scheduled tick on.
    """

    def __init__(self, engine: GameEngine):
        self.engine = engine
        self.next_tick_ms: Optional[float] = None
        self.armed_interval_ms = engine.drop_interval_ms
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self.next_tick_ms is not None

    def start(self, now_ms: float) -> None:
        """Arm the first tick one interval after now_ms."""
        if self.engine.is_game_over():
            return
        self.armed_interval_ms = self.engine.drop_interval_ms
        self.next_tick_ms = now_ms + self.armed_interval_ms

    def stop(self) -> None:
        """Disarm the timer."""
        self.next_tick_ms = None

    def poll(self, now_ms: float, max_ticks: Optional[int] = None) -> int:
        """
        Fire the ticks that are due at now_ms.

        Args:
            now_ms: Current time in milliseconds (monotonic)
            max_ticks: Cap on ticks fired by this call. When the cap is hit
                with ticks still overdue, the backlog is dropped and the
                next tick is armed one interval after now_ms.

        Returns:
            Number of advance() calls issued
        """
        fired = 0
        while self.running and now_ms >= self.next_tick_ms:
            if max_ticks is not None and fired >= max_ticks:
                self.next_tick_ms = now_ms + self.armed_interval_ms
                break
            tick_time = self.next_tick_ms
            self.engine.advance()
            self.ticks += 1
            fired += 1

            if self.engine.is_game_over():
                self.stop()
                break

            self.armed_interval_ms = self.engine.drop_interval_ms
            self.next_tick_ms = tick_time + self.armed_interval_ms
        return fired


class InputAdapter:
    """Maps key names to engine commands."""

    KEY_BINDINGS: Dict[str, str] = {
        "left": "left",
        "a": "left",
        "right": "right",
        "d": "right",
        "down": "down",
        "s": "down",
        "up": "rotate",
        "w": "rotate",
    }

    def __init__(self, engine: GameEngine):
        self.engine = engine
        self._commands: Dict[str, Callable[[], None]] = {
            "left": lambda: engine.move_horizontal(-1),
            "right": lambda: engine.move_horizontal(1),
            "down": engine.advance,
            "rotate": engine.rotate,
        }

    def handle(self, key: str) -> bool:
        """
        Dispatch one key press.

        Returns:
            True if the key is bound and the game is still running
        """
        if self.engine.is_game_over():
            return False
        command = self.KEY_BINDINGS.get(key.strip().lower())
        if command is None:
            return False
        self._commands[command]()
        return True

    def handle_sequence(self, keys: str) -> int:
        """Dispatch a string of single-character keys; returns how many were handled."""
        return sum(1 for key in keys if self.handle(key))
