"""
Checks on the bundled world dataset and dataset loading.
"""

import pytest

from src.borderline.config import ConfigurationError
from src.borderline.graph import GraphConfigurationError
from src.borderline.pathfinding import enumerate_shortest_paths
from src.borderline.world import build_world, load_world


@pytest.fixture(scope="module")
def world():
    return load_world()


def test_bundled_graph_is_symmetric(world):
    graph = world.graph
    for node, neighbors in graph.items():
        for neighbor in neighbors:
            assert node in graph[neighbor], f"{node} -> {neighbor}"


def test_bundled_world_contents(world):
    assert len(world.graph) == 168
    assert world.resolver.resolve("Deutschland") == "GMY"
    assert world.resolver.resolve("Antarctica") is None
    assert world.display_name("USR") == "Russia"
    assert world.excluded_nodes == {"TRI", "SRI", "JPN", "PHI", "TAW", "CYP"}


def test_known_route(world):
    assert list(enumerate_shortest_paths(world.graph, "FRN", "POL")) == [
        ("FRN", "GMY", "POL")
    ]


def test_build_world_rejects_asymmetric_borders():
    data = {
        "countries": {
            "AAA": {"names": ["Aland"], "neighbors": ["BBB"]},
            "BBB": {"names": ["Bland"], "neighbors": []},
        }
    }
    with pytest.raises(GraphConfigurationError):
        build_world(data)


def test_build_world_rejects_unknown_exclusions():
    data = {
        "countries": {"AAA": {"names": ["Aland"]}},
        "excluded_nodes": ["ZZZ"],
    }
    with pytest.raises(ConfigurationError):
        build_world(data)


def test_build_world_rejects_bad_shape():
    with pytest.raises(ConfigurationError):
        build_world({"countries": {}})


def test_load_world_from_file(tmp_path):
    path = tmp_path / "tiny.yaml"
    path.write_text(
        "countries:\n"
        "  AAA: {names: [Aland], neighbors: [BBB]}\n"
        "  BBB: {names: [Bland], neighbors: [AAA]}\n",
        encoding="utf-8",
    )
    world = load_world(path)
    assert world.resolver.resolve("bland") == "BBB"
    assert world.graph["AAA"] == ("BBB",)
