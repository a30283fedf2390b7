"""Shared graph fixtures."""

import pytest

from src.borderline.graph import AdjacencyGraph


@pytest.fixture
def chain_graph():
    """A - B - C - D - E"""
    return AdjacencyGraph(
        {
            "A": ["B"],
            "B": ["A", "C"],
            "C": ["B", "D"],
            "D": ["C", "E"],
            "E": ["D"],
        }
    )


@pytest.fixture
def diamond_graph():
    """Two shortest paths from A to D: through B or through C."""
    return AdjacencyGraph(
        {
            "A": ["B", "C"],
            "B": ["A", "D"],
            "C": ["A", "D"],
            "D": ["B", "C"],
        }
    )


@pytest.fixture
def grid_graph():
    """3x3 grid; corner to corner has six shortest paths."""
    adjacency = {}
    for row in range(3):
        for col in range(3):
            neighbors = []
            for dr, dc in ((-1, 0), (0, -1), (0, 1), (1, 0)):
                r, c = row + dr, col + dc
                if 0 <= r < 3 and 0 <= c < 3:
                    neighbors.append(f"{r}{c}")
            adjacency[f"{row}{col}"] = neighbors
    return AdjacencyGraph(adjacency)


@pytest.fixture
def split_graph():
    """Two components plus an isolated node."""
    return AdjacencyGraph(
        {
            "A": ["B"],
            "B": ["A", "C"],
            "C": ["B"],
            "X": ["Y"],
            "Y": ["X"],
            "Z": [],
        }
    )


class StubResolver:
    """Upper-cases guesses and accepts only known nodes."""

    def __init__(self, nodes):
        self.nodes = set(nodes)

    def resolve(self, text):
        code = text.strip().upper()
        return code if code in self.nodes else None


@pytest.fixture
def resolver_for():
    return StubResolver
