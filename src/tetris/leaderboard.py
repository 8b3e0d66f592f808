"""
In-memory leaderboard of finished games.
"""
from dataclasses import dataclass
from typing import Callable, List

LEADERBOARD_SIZE = 10


@dataclass(frozen=True)
class ScoreEntry:
    """One finished game."""
    name: str
    score: int


class Leaderboard:
    """
    Keeps the best scores by descending value.

    Entries with equal scores keep their submission order. Only the top
    LEADERBOARD_SIZE entries are retained.
    """

    def __init__(self, size: int = LEADERBOARD_SIZE):
        self.size = size
        self._entries: List[ScoreEntry] = []

    def submit(self, name: str, score: int) -> bool:
        """
        Record a final score.

        Returns:
            True if the entry made it onto the board
        """
        if score < 0:
            raise ValueError(f"Score must be non-negative, got {score}")
        entry = ScoreEntry(name, int(score))
        # sorted() is stable, so earlier submissions win ties
        self._entries = sorted(
            self._entries + [entry], key=lambda e: e.score, reverse=True
        )[:self.size]
        return any(e is entry for e in self._entries)

    def sink_for(self, name: str) -> Callable[[int], None]:
        """Return a score sink that submits under the given player name."""
        return lambda score: self.submit(name, score)

    def entries(self) -> List[ScoreEntry]:
        """Get a copy of the current entries, best first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __str__(self) -> str:
        if not self._entries:
            return "No scores yet!"
        lines = ["LEADERBOARD"]
        for rank, entry in enumerate(self._entries, start=1):
            lines.append(f"{rank:>2}. {entry.name:<16} {entry.score:>8,}")
        return "\n".join(lines)
