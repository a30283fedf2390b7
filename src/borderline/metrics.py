"""
Metrics collection for guessing sessions.

The collector observes sessions through three hooks (game start, each guess,
game end) and aggregates:
1. Outcomes: how many games were won, given up, or abandoned.
2. Guess quality: correct/wrong ratios and how many guesses a win takes.
3. Puzzle shape: path lengths and how many alternative paths puzzles offer.

Sessions only notify the collector; all aggregation lives here. Nothing is
written to disk.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from statistics import mean
from typing import Any, Dict, Iterable, List, Optional

from .logger import get_logger

logger = get_logger(__name__)


def _safe_mean(values: Iterable[Optional[float]]) -> Optional[float]:
    """Return the mean of non-null values or None if nothing is available."""
    filtered = [v for v in values if v is not None]
    return mean(filtered) if filtered else None


@dataclass
class GameRecord:
    game_id: str
    start: str
    end: str
    path_length: int
    path_count: int
    outcomes: Counter = field(default_factory=Counter)
    result: Optional[str] = None

    @property
    def guess_count(self) -> int:
        return sum(self.outcomes.values())


class GameMetrics:
    """Collects per-session data and produces aggregate statistics."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.completed_games: List[GameRecord] = []
        self.result_counts: Counter[str] = Counter()
        self._active_games: Dict[str, GameRecord] = {}

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def reset(self) -> None:
        self.completed_games.clear()
        self.result_counts.clear()
        self._active_games.clear()

    # ------------------------------------------------------------------ #
    # Event hooks
    # ------------------------------------------------------------------ #

    def on_game_start(
        self,
        *,
        game_id: str,
        start: str,
        end: str,
        path_length: int,
        path_count: int,
    ) -> None:
        """Open a record for a freshly started puzzle."""
        if not self.enabled:
            return

        if game_id in self._active_games:
            # Restarted without ending the previous puzzle.
            self.on_game_end(game_id=game_id, result="abandoned")

        self._active_games[game_id] = GameRecord(
            game_id=game_id,
            start=start,
            end=end,
            path_length=path_length,
            path_count=path_count,
        )

    def on_guess(self, *, game_id: str, outcome: str) -> None:
        if not self.enabled:
            return
        record = self._active_games.get(game_id)
        if record is None:
            return
        record.outcomes[outcome] += 1

    def on_game_end(self, *, game_id: str, result: str) -> None:
        """Close the record with ``won``, ``revealed`` or ``abandoned``."""
        if not self.enabled:
            return
        record = self._active_games.pop(game_id, None)
        if record is None:
            return

        record.result = result
        self.result_counts[result] += 1
        self.completed_games.append(record)
        logger.debug(
            "Game %s finished as %s after %d guesses",
            game_id,
            result,
            record.guess_count,
        )

    # ------------------------------------------------------------------ #
    # Public reporting API
    # ------------------------------------------------------------------ #

    def get_overall_metrics(self) -> Dict[str, Any]:
        """Aggregate metrics across all completed games."""
        total_games = len(self.completed_games)
        won = [g for g in self.completed_games if g.result == "won"]

        correct = sum(g.outcomes.get("correct", 0) for g in self.completed_games)
        wrong = sum(g.outcomes.get("wrong", 0) for g in self.completed_games)
        scored = correct + wrong

        return {
            "games_played": total_games,
            "results": dict(self.result_counts),
            "win_rate": len(won) / total_games if total_games else 0.0,
            "guess_accuracy": correct / scored if scored else 0.0,
            "average_guesses_to_win": _safe_mean(g.guess_count for g in won),
            "average_path_length": _safe_mean(
                g.path_length for g in self.completed_games
            ),
            "average_path_count": _safe_mean(
                g.path_count for g in self.completed_games
            ),
        }


__all__ = ["GameMetrics", "GameRecord"]
