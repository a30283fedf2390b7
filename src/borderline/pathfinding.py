"""
Shortest path search over the adjacency graph.

Two passes are used:
- a breadth-first sweep from the start node records the hop distance of every
  reachable node;
- a backward walk from the end node follows every neighbor exactly one hop
  closer to the start, which yields all minimum-length paths.

The backward walk uses an explicit stack instead of recursion but visits
neighbors in the same order a recursive walk would, so the first path of a
result is stable for a given graph.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .logger import get_logger

logger = get_logger(__name__)

Path = Tuple[str, ...]


@dataclass(frozen=True)
class PathSet(Sequence):
    """All shortest paths between ``start`` and ``end``, in enumeration order.

    ``truncated`` is set when enumeration stopped at a cap while more paths
    of the same length existed.
    """

    start: Optional[str] = None
    end: Optional[str] = None
    paths: Tuple[Path, ...] = ()
    truncated: bool = False

    def __getitem__(self, index):
        return self.paths[index]

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __contains__(self, path) -> bool:
        return tuple(path) in self.paths

    @property
    def path_length(self) -> int:
        """Node count shared by every path, 0 when empty."""
        return len(self.paths[0]) if self.paths else 0

    def nodes(self) -> List[str]:
        """Every node on any path, first occurrence order."""
        return list(dict.fromkeys(node for path in self.paths for node in path))

    def containing(self, node: str) -> "PathSet":
        """Subset of paths passing through ``node``, order preserved."""
        return PathSet(
            start=self.start,
            end=self.end,
            paths=tuple(path for path in self.paths if node in path),
            truncated=self.truncated,
        )

    def issubset(self, other: "PathSet") -> bool:
        return all(path in other.paths for path in self.paths)


def compute_distances(graph: Mapping[str, Sequence[str]], start: str) -> Dict[str, int]:
    """Hop distance from ``start`` to every reachable node.

    Unreachable nodes are absent from the result.
    """
    distances = {start: 0}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        current_distance = distances[current]
        for neighbor in graph.get(current, ()):
            if neighbor not in distances:
                distances[neighbor] = current_distance + 1
                queue.append(neighbor)

    return distances


def enumerate_shortest_paths(
    graph: Mapping[str, Sequence[str]],
    start: str,
    end: str,
    max_paths: Optional[int] = None,
) -> PathSet:
    """Enumerate every minimum-length path from ``start`` to ``end``.

    Args:
        graph: Symmetric adjacency mapping.
        start: First node of every path.
        end: Last node of every path.
        max_paths: Optional cap. When more paths exist than the cap, the
            result holds the first ``max_paths`` of them and is flagged as
            truncated.

    Returns:
        A ``PathSet``; empty when ``start == end`` or ``end`` is unreachable.
    """
    if max_paths is not None and max_paths < 1:
        raise ValueError("max_paths must be positive")

    empty = PathSet(start=start, end=end)
    if start == end:
        return empty

    distances = compute_distances(graph, start)
    if end not in distances:
        return empty

    def closer(node: str) -> Iterator[str]:
        # Neighbors one hop nearer the start, in adjacency order.
        target = distances[node] - 1
        return (n for n in graph.get(node, ()) if distances.get(n) == target)

    paths: List[Path] = []
    truncated = False
    chain = [end]
    stack = [closer(end)]

    while stack:
        step = next(stack[-1], None)
        if step is None:
            stack.pop()
            chain.pop()
            continue

        if step == start:
            if max_paths is not None and len(paths) == max_paths:
                truncated = True
                break
            paths.append(tuple(reversed(chain + [start])))
            continue

        chain.append(step)
        stack.append(closer(step))

    if truncated:
        logger.warning(
            "Stopped enumerating %s -> %s paths at the cap of %d",
            start,
            end,
            max_paths,
        )

    return PathSet(start=start, end=end, paths=tuple(paths), truncated=truncated)


def shortest_distance(graph: Mapping[str, Sequence[str]], start: str, end: str) -> Optional[int]:
    """Hop count between two nodes, None when unreachable."""
    return compute_distances(graph, start).get(end)
