"""
Read-only adjacency graph of political entities.

The graph is loaded once and shared by every session. Structural problems
(dangling neighbor ids, self-loops, one-way borders) are configuration
defects, so they are rejected when the graph is built instead of being
handled during play.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List, Tuple

from .config import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)


class GraphConfigurationError(ConfigurationError):
    """Raised when adjacency data violates the graph invariants."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        preview = "; ".join(self.problems[:5])
        more = len(self.problems) - 5
        suffix = f" (and {more} more)" if more > 0 else ""
        super().__init__(f"Malformed adjacency graph: {preview}{suffix}")


def find_graph_problems(adjacency: Mapping[str, Iterable[str]]) -> List[str]:
    """Return a human readable list of invariant violations, empty if valid."""
    problems: List[str] = []
    for node, neighbors in adjacency.items():
        seen = set()
        for neighbor in neighbors:
            if neighbor == node:
                problems.append(f"{node} lists itself as a neighbor")
            elif neighbor in seen:
                problems.append(f"{node} lists {neighbor} more than once")
            elif neighbor not in adjacency:
                problems.append(f"{node} references unknown node {neighbor}")
            elif node not in adjacency[neighbor]:
                problems.append(f"{node} borders {neighbor} but not the reverse")
            seen.add(neighbor)
    return problems


class AdjacencyGraph(Mapping):
    """Immutable mapping of node id to the tuple of its neighbor ids.

    Neighbor order is kept exactly as given; path enumeration relies on it
    for reproducible tie-breaking.
    """

    def __init__(self, adjacency: Mapping[str, Iterable[str]], *, validate: bool = True):
        self._adjacency: Dict[str, Tuple[str, ...]] = {
            node: tuple(neighbors) for node, neighbors in adjacency.items()
        }
        if validate:
            problems = find_graph_problems(self._adjacency)
            if problems:
                raise GraphConfigurationError(problems)
        logger.debug(
            "Built adjacency graph with %d nodes and %d borders",
            len(self._adjacency),
            self.edge_count,
        )

    def __getitem__(self, node: str) -> Tuple[str, ...]:
        return self._adjacency[node]

    def __iter__(self) -> Iterator[str]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    def __repr__(self) -> str:
        return f"AdjacencyGraph(nodes={len(self)}, edges={self.edge_count})"

    def neighbors(self, node: str) -> Tuple[str, ...]:
        """Neighbors of ``node``; unknown nodes have none."""
        return self._adjacency.get(node, ())

    def are_adjacent(self, a: str, b: str) -> bool:
        return b in self.neighbors(a)

    @property
    def edge_count(self) -> int:
        return sum(len(neighbors) for neighbors in self._adjacency.values()) // 2

    def is_symmetric(self) -> bool:
        return all(
            node in self._adjacency.get(neighbor, ())
            for node, neighbors in self._adjacency.items()
            for neighbor in neighbors
        )
