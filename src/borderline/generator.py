"""
Puzzle generation.

A puzzle is a pair of endpoints whose shortest connection, counted in nodes
including both endpoints, falls inside a configured band. Endpoints are drawn
at random from the eligible nodes until a pair fits or the attempt budget is
spent. Running out of attempts is an ordinary outcome reported as a
``GenerationFailure`` value; whether to retry is up to the caller.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Collection, List, Mapping, Optional, Sequence, Union

from .config import GameConfig
from .logger import get_logger
from .pathfinding import PathSet, enumerate_shortest_paths

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeneratedPuzzle:
    """Accepted endpoints with every shortest path between them."""

    start: str
    end: str
    paths: PathSet
    attempts: int = 1

    @property
    def path_length(self) -> int:
        return self.paths.path_length


@dataclass(frozen=True)
class GenerationFailure:
    """No pair fit the band within the attempt budget."""

    attempts: int
    reason: str


GenerationResult = Union[GeneratedPuzzle, GenerationFailure]


def eligible_nodes(
    graph: Mapping[str, Sequence[str]], excluded: Collection[str] = ()
) -> List[str]:
    """Nodes with at least one neighbor that are not excluded, in graph order."""
    return [node for node, neighbors in graph.items() if neighbors and node not in excluded]


def generate_puzzle(
    graph: Mapping[str, Sequence[str]],
    eligible: Sequence[str],
    band_min: int,
    band_max: int,
    max_attempts: int,
    *,
    rng: Optional[random.Random] = None,
    max_paths: Optional[int] = None,
) -> GenerationResult:
    """
    Sample endpoint pairs until one has a shortest path inside the band.

    Args:
        graph: Symmetric adjacency mapping.
        eligible: Candidate endpoints, each sampled uniformly.
        band_min: Smallest accepted path length in nodes, inclusive.
        band_max: Largest accepted path length in nodes, inclusive.
        max_attempts: Number of pairs to sample before giving up.
        rng: Random source; pass a seeded ``random.Random`` for reproducible
            puzzles.
        max_paths: Optional cap forwarded to path enumeration.

    Returns:
        ``GeneratedPuzzle`` on success, ``GenerationFailure`` otherwise.
    """
    if band_min < 1 or band_min > band_max:
        raise ValueError(f"Invalid path length band [{band_min}, {band_max}]")
    if max_attempts < 1:
        raise ValueError("max_attempts must be positive")

    if not eligible:
        return GenerationFailure(attempts=0, reason="no eligible nodes")

    rng = rng or random.Random()

    for attempt in range(1, max_attempts + 1):
        start = rng.choice(eligible)
        end = rng.choice(eligible)

        if start == end:
            continue
        # Neighbors leave nothing to guess.
        if end in graph.get(start, ()):
            continue

        paths = enumerate_shortest_paths(graph, start, end, max_paths=max_paths)
        if not paths:
            continue

        if band_min <= len(paths[0]) <= band_max:
            return GeneratedPuzzle(start=start, end=end, paths=paths, attempts=attempt)

    return GenerationFailure(
        attempts=max_attempts,
        reason=f"no pair with a path of {band_min}-{band_max} nodes "
        f"after {max_attempts} attempts",
    )


class PuzzleGenerator:
    """Configured puzzle source shared by sessions over one graph."""

    def __init__(
        self,
        graph: Mapping[str, Sequence[str]],
        *,
        min_length: int = 5,
        max_length: int = 7,
        max_attempts: int = 100,
        max_paths: Optional[int] = None,
        excluded: Collection[str] = (),
        rng: Optional[random.Random] = None,
    ):
        self.graph = graph
        self.min_length = min_length
        self.max_length = max_length
        self.max_attempts = max_attempts
        self.max_paths = max_paths
        self.eligible = eligible_nodes(graph, excluded)
        self.rng = rng or random.Random()

    @classmethod
    def from_config(
        cls,
        graph: Mapping[str, Sequence[str]],
        config: GameConfig,
        *,
        excluded: Collection[str] = (),
        rng: Optional[random.Random] = None,
    ) -> "PuzzleGenerator":
        return cls(
            graph,
            min_length=config.min_path_length,
            max_length=config.max_path_length,
            max_attempts=config.max_attempts,
            max_paths=config.max_paths,
            excluded=set(excluded) | set(config.excluded_nodes),
            rng=rng,
        )

    def generate(self) -> GenerationResult:
        result = generate_puzzle(
            self.graph,
            self.eligible,
            self.min_length,
            self.max_length,
            self.max_attempts,
            rng=self.rng,
            max_paths=self.max_paths,
        )
        if isinstance(result, GenerationFailure):
            logger.warning("Puzzle generation failed: %s", result.reason)
        else:
            logger.debug(
                "Generated %s -> %s (%d nodes, %d shortest paths) in %d attempts",
                result.start,
                result.end,
                result.path_length,
                len(result.paths),
                result.attempts,
            )
        return result
