"""
One player's game: engine plus the drivers, leaderboard and logger around it.
"""
from typing import Optional

from .driver import InputAdapter, TickDriver
from .engine import GameEngine, LockResult
from .leaderboard import Leaderboard


class GameSession:
    """
    Wires a GameEngine to its collaborators for a single game.

    The final score goes to the leaderboard under the player's name.
    Every lock and the game over are written to the logger if one is given.
    """

    def __init__(
        self,
        player_name: str,
        leaderboard: Leaderboard,
        seed: Optional[int] = None,
        logger=None,
    ):
        """
        Args:
            player_name: Name recorded with the final score
            leaderboard: Score sink for the finished game
            seed: Random seed for the piece sequence
            logger: Optional utils.logger.Logger
        """
        player_name = (player_name or "").strip()
        if not player_name:
            raise ValueError("Player name must not be empty")

        self.player_name = player_name
        self.leaderboard = leaderboard
        self.logger = logger
        self.final_score: Optional[int] = None
        self._submit_score = leaderboard.sink_for(player_name)

        self.engine = GameEngine(
            seed=seed,
            on_game_over=self._on_game_over,
            on_lock=self._on_lock,
        )
        self.driver = TickDriver(self.engine)
        self.input = InputAdapter(self.engine)

    def start(self, now_ms: float) -> None:
        """Spawn the first piece and arm the tick timer."""
        self.engine.advance()
        self.driver.start(now_ms)

    def update(self, now_ms: float, max_ticks: Optional[int] = None) -> int:
        """Run the ticks due at now_ms (at most max_ticks); returns the number fired."""
        return self.driver.poll(now_ms, max_ticks=max_ticks)

    def press(self, keys: str) -> int:
        """Feed single-character keys to the input adapter."""
        return self.input.handle_sequence(keys)

    @property
    def is_over(self) -> bool:
        return self.engine.is_game_over()

    def _on_lock(self, lock: LockResult) -> None:
        if self.logger is not None:
            self.logger.log("lock", {
                'player': self.player_name,
                'lines_cleared': lock.lines_cleared,
                'score_gained': lock.score_gained,
                'score': lock.score,
                'drop_interval_ms': lock.drop_interval_ms,
                'game_over': lock.game_over,
            })

    def _on_game_over(self, score: int) -> None:
        self.final_score = score
        self.driver.stop()
        self._submit_score(score)
        if self.logger is not None:
            self.logger.log("game_over", {
                'player': self.player_name,
                **self.engine.get_statistics(),
            })
