"""
State structures for a guessing session.

``GameState`` is the single mutable aggregate a ``GameSession`` owns. The
enums are what the presentation layer reads back after each operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Set

from .pathfinding import PathSet


class GamePhase(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    WON = "won"
    ENDED = "ended"


class GuessOutcome(str, Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    ALREADY_GUESSED = "already"
    INVALID = "invalid"


@dataclass
class GameState:
    """Everything a session knows about the puzzle in play."""

    phase: GamePhase = GamePhase.INACTIVE
    start: Optional[str] = None
    end: Optional[str] = None
    full_paths: PathSet = field(default_factory=PathSet)
    possible_paths: PathSet = field(default_factory=PathSet)
    guessed_correct: Set[str] = field(default_factory=set)
    guessed_wrong: Set[str] = field(default_factory=set)
    last_outcome: Optional[GuessOutcome] = None
    revealed: bool = False

    @property
    def guessed(self) -> Set[str]:
        return self.guessed_correct | self.guessed_wrong


def interior(path) -> tuple:
    """Nodes of ``path`` without its two endpoints."""
    return tuple(path[1:-1])


def is_path_complete(path, guessed: Set[str]) -> bool:
    """True when every interior node of ``path`` has been guessed."""
    return all(node in guessed for node in interior(path))
