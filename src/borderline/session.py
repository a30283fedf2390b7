"""
The guessing session engine.

A session owns one puzzle at a time and walks through these phases:

    INACTIVE --start()--> ACTIVE --winning guess--> WON
                            |
                            +------reveal()------> ENDED

``start()`` may be called from any phase to begin a new puzzle and ``end()``
always returns to INACTIVE.

Guess validation works against the *possible* paths: every shortest path
that passes through all correct guesses so far. A correct guess narrows that
set for good, and the game is won as soon as one remaining path has every
interior node guessed, even if other shortest paths are still open.

Sessions hold no global state, so any number of them can run side by side
over the same shared graph.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import uuid4

from .generator import GeneratedPuzzle
from .logger import get_logger
from .metrics import GameMetrics
from .pathfinding import Path, PathSet
from .resolver import NameResolver
from .state import (
    GamePhase,
    GameState,
    GuessOutcome,
    interior,
    is_path_complete,
)

logger = get_logger(__name__)


class GameSession:
    """Stateful engine for one player working through puzzles."""

    def __init__(
        self,
        resolver: NameResolver,
        *,
        metrics: Optional[GameMetrics] = None,
        session_id: Optional[str] = None,
    ):
        self.resolver = resolver
        self.metrics = metrics
        self.session_id = session_id or f"session-{uuid4().hex[:8]}"
        self.state = GameState()
        self._game_id: Optional[str] = None

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    def start(self, puzzle: GeneratedPuzzle) -> None:
        """Begin ``puzzle``, discarding whatever was in play."""
        if not puzzle.paths:
            raise ValueError(
                f"Puzzle {puzzle.start} -> {puzzle.end} has no connecting path"
            )

        if self.state.phase == GamePhase.ACTIVE:
            self._finish("abandoned")

        self.state = GameState(
            phase=GamePhase.ACTIVE,
            start=puzzle.start,
            end=puzzle.end,
            full_paths=puzzle.paths,
            possible_paths=puzzle.paths,
            guessed_correct={puzzle.start, puzzle.end},
        )
        self._game_id = f"{self.session_id}-{uuid4().hex[:8]}"

        logger.info(
            "Started puzzle %s -> %s: %d nodes to find, %d shortest paths",
            puzzle.start,
            puzzle.end,
            self.total_to_find,
            len(puzzle.paths),
        )
        if self.metrics:
            self.metrics.on_game_start(
                game_id=self._game_id,
                start=puzzle.start,
                end=puzzle.end,
                path_length=puzzle.paths.path_length,
                path_count=len(puzzle.paths),
            )

    def guess(self, raw_text: str) -> Optional[GuessOutcome]:
        """Evaluate one guess.

        Returns None without touching state when no game is active or the
        text is blank; otherwise returns the outcome, also kept as
        ``last_outcome``.
        """
        state = self.state
        if state.phase != GamePhase.ACTIVE:
            return None
        text = (raw_text or "").strip()
        if not text:
            return None

        node = self.resolver.resolve(text)
        if node is None:
            outcome = GuessOutcome.INVALID
        elif node in state.guessed_correct or node in state.guessed_wrong:
            outcome = GuessOutcome.ALREADY_GUESSED
        elif any(node in path for path in state.possible_paths):
            outcome = GuessOutcome.CORRECT
            state.guessed_correct.add(node)
            state.possible_paths = state.possible_paths.containing(node)
            if self._find_completed_path() is not None:
                state.phase = GamePhase.WON
        else:
            outcome = GuessOutcome.WRONG
            state.guessed_wrong.add(node)

        state.last_outcome = outcome
        logger.debug(
            "Guess %r -> %s (%s), %d possible paths left",
            text,
            node,
            outcome.value,
            len(state.possible_paths),
        )
        if self.metrics:
            self.metrics.on_guess(game_id=self._game_id, outcome=outcome.value)

        if state.phase == GamePhase.WON:
            logger.info(
                "Puzzle %s -> %s solved via %s",
                state.start,
                state.end,
                " -> ".join(self.completed_path or ()),
            )
            self._finish("won")

        return outcome

    def reveal(self) -> None:
        """Give up: show the first shortest path without counting a win."""
        state = self.state
        if state.phase != GamePhase.ACTIVE:
            return
        state.guessed_correct = set(state.full_paths[0])
        state.revealed = True
        state.phase = GamePhase.ENDED
        logger.info("Revealed %s", " -> ".join(state.full_paths[0]))
        self._finish("revealed")

    def end(self) -> None:
        """Drop the current puzzle entirely. Safe to call repeatedly."""
        if self.state.phase == GamePhase.ACTIVE:
            self._finish("abandoned")
        self.state = GameState()
        self._game_id = None

    # ------------------------------------------------------------------ #
    # Read-only projections
    # ------------------------------------------------------------------ #

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def is_active(self) -> bool:
        return self.state.phase == GamePhase.ACTIVE

    @property
    def is_won(self) -> bool:
        return self.state.phase == GamePhase.WON

    @property
    def start_node(self) -> Optional[str]:
        return self.state.start

    @property
    def end_node(self) -> Optional[str]:
        return self.state.end

    @property
    def full_paths(self) -> PathSet:
        return self.state.full_paths

    @property
    def possible_paths(self) -> PathSet:
        return self.state.possible_paths

    @property
    def guessed_correct(self) -> frozenset:
        return frozenset(self.state.guessed_correct)

    @property
    def guessed_wrong(self) -> frozenset:
        return frozenset(self.state.guessed_wrong)

    @property
    def last_outcome(self) -> Optional[GuessOutcome]:
        return self.state.last_outcome

    @property
    def found_count(self) -> int:
        """Correct guesses, endpoints not counted."""
        endpoints = {self.state.start, self.state.end}
        return len(self.state.guessed_correct - endpoints)

    @property
    def total_to_find(self) -> int:
        return max(0, self.state.full_paths.path_length - 2)

    @property
    def completed_path(self) -> Optional[Path]:
        """The path the player finished; only defined once the game is won."""
        if self.state.phase != GamePhase.WON:
            return None
        return self._find_completed_path()

    @property
    def display_order(self) -> List[Path]:
        paths = list(self.state.full_paths)
        completed = self.completed_path
        if completed is None:
            return paths
        return [completed] + [path for path in paths if path != completed]

    def remaining_nodes(self, path: Path) -> List[str]:
        """Interior nodes of ``path`` not guessed yet."""
        return [node for node in interior(path) if node not in self.state.guessed_correct]

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the session for presentation layers."""
        state = self.state
        return {
            "session_id": self.session_id,
            "phase": state.phase.value,
            "start": state.start,
            "end": state.end,
            "full_paths": [list(path) for path in state.full_paths],
            "possible_paths": [list(path) for path in state.possible_paths],
            "guessed_correct": sorted(state.guessed_correct),
            "guessed_wrong": sorted(state.guessed_wrong),
            "last_outcome": state.last_outcome.value if state.last_outcome else None,
            "found_count": self.found_count,
            "total_to_find": self.total_to_find,
            "display_order": [list(path) for path in self.display_order],
            "revealed": state.revealed,
            "truncated": state.full_paths.truncated,
        }

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _find_completed_path(self) -> Optional[Path]:
        for path in self.state.possible_paths:
            if is_path_complete(path, self.state.guessed_correct):
                return path
        return None

    def _finish(self, result: str) -> None:
        if self.metrics and self._game_id:
            self.metrics.on_game_end(game_id=self._game_id, result=result)
