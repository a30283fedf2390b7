"""
Tests for BFS distances and shortest path enumeration.
"""

import pytest

from src.borderline.pathfinding import (
    PathSet,
    compute_distances,
    enumerate_shortest_paths,
    shortest_distance,
)


def exhaustive_shortest_paths(graph, start, end):
    """Every minimum-length simple path, found by brute force."""
    found = []

    def walk(path):
        node = path[-1]
        if node == end:
            found.append(tuple(path))
            return
        for neighbor in graph[node]:
            if neighbor not in path:
                walk(path + [neighbor])

    if start == end:
        return set()
    walk([start])
    if not found:
        return set()
    best = min(len(p) for p in found)
    return {p for p in found if len(p) == best}


class TestComputeDistances:
    def test_chain_distances(self, chain_graph):
        assert compute_distances(chain_graph, "A") == {
            "A": 0,
            "B": 1,
            "C": 2,
            "D": 3,
            "E": 4,
        }

    def test_unreachable_nodes_are_absent(self, split_graph):
        distances = compute_distances(split_graph, "A")
        assert set(distances) == {"A", "B", "C"}
        assert "X" not in distances
        assert "Z" not in distances

    def test_isolated_start(self, split_graph):
        assert compute_distances(split_graph, "Z") == {"Z": 0}

    def test_shortest_distance(self, grid_graph, split_graph):
        assert shortest_distance(grid_graph, "00", "22") == 4
        assert shortest_distance(split_graph, "A", "Y") is None


class TestEnumerateShortestPaths:
    def test_same_node_has_no_path(self, chain_graph):
        result = enumerate_shortest_paths(chain_graph, "C", "C")
        assert isinstance(result, PathSet)
        assert len(result) == 0
        assert not result

    def test_unreachable_end_has_no_path(self, split_graph):
        assert not enumerate_shortest_paths(split_graph, "A", "X")
        assert not enumerate_shortest_paths(split_graph, "A", "Z")

    def test_single_path_on_chain(self, chain_graph):
        result = enumerate_shortest_paths(chain_graph, "A", "E")
        assert list(result) == [("A", "B", "C", "D", "E")]
        assert result.start == "A"
        assert result.end == "E"
        assert result.path_length == 5
        assert not result.truncated

    def test_adjacent_nodes(self, chain_graph):
        assert list(enumerate_shortest_paths(chain_graph, "B", "C")) == [("B", "C")]

    def test_diamond_returns_both_paths_in_adjacency_order(self, diamond_graph):
        result = enumerate_shortest_paths(diamond_graph, "A", "D")
        assert list(result) == [("A", "B", "D"), ("A", "C", "D")]

    def test_order_follows_end_node_adjacency(self):
        graph = {
            "A": ["B", "C"],
            "B": ["A", "D"],
            "C": ["A", "D"],
            "D": ["C", "B"],
        }
        result = enumerate_shortest_paths(graph, "A", "D")
        assert result[0] == ("A", "C", "D")

    def test_grid_paths_match_exhaustive_search(self, grid_graph):
        result = enumerate_shortest_paths(grid_graph, "00", "22")
        assert len(result) == 6
        assert set(result) == exhaustive_shortest_paths(grid_graph, "00", "22")

    @pytest.mark.parametrize(
        "start,end",
        [("00", "22"), ("01", "21"), ("10", "12"), ("00", "11"), ("02", "20")],
    )
    def test_every_path_is_shortest_and_simple(self, grid_graph, start, end):
        distance = compute_distances(grid_graph, start)[end]
        result = enumerate_shortest_paths(grid_graph, start, end)

        assert set(result) == exhaustive_shortest_paths(grid_graph, start, end)
        for path in result:
            assert len(path) == distance + 1
            assert len(set(path)) == len(path)
            assert path[0] == start and path[-1] == end
            for a, b in zip(path, path[1:]):
                assert b in grid_graph[a]

    def test_cap_truncates_and_flags(self, grid_graph):
        full = enumerate_shortest_paths(grid_graph, "00", "22")
        capped = enumerate_shortest_paths(grid_graph, "00", "22", max_paths=2)

        assert capped.truncated
        assert list(capped) == list(full)[:2]

    def test_cap_not_reached_is_not_truncated(self, diamond_graph):
        result = enumerate_shortest_paths(diamond_graph, "A", "D", max_paths=2)
        assert len(result) == 2
        assert not result.truncated

    def test_invalid_cap(self, diamond_graph):
        with pytest.raises(ValueError):
            enumerate_shortest_paths(diamond_graph, "A", "D", max_paths=0)

    def test_plain_dict_graph_is_accepted(self):
        graph = {"A": ["B"], "B": ["A", "C"], "C": ["B"]}
        assert list(enumerate_shortest_paths(graph, "C", "A")) == [("C", "B", "A")]


class TestPathSet:
    def test_containing_preserves_order(self, grid_graph):
        paths = enumerate_shortest_paths(grid_graph, "00", "22")
        through_center = paths.containing("11")

        assert len(through_center) == 4
        assert through_center.issubset(paths)
        assert list(through_center) == [p for p in paths if "11" in p]

    def test_nodes_union(self, diamond_graph):
        paths = enumerate_shortest_paths(diamond_graph, "A", "D")
        assert paths.nodes() == ["A", "B", "D", "C"]

    def test_membership_accepts_lists(self, diamond_graph):
        paths = enumerate_shortest_paths(diamond_graph, "A", "D")
        assert ["A", "B", "D"] in paths
        assert ("A", "D") not in paths
