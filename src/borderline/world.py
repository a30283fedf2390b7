"""
Loading of the country dataset used by the game.

The dataset is a YAML file validated with Pydantic and turned into the three
collaborators the engine needs: the adjacency graph, the name resolver, and
the set of nodes that must never be picked as puzzle endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List

from pydantic import BaseModel, Field, ValidationError, field_validator

from .config import BUNDLED_WORLD_PATH, ConfigurationError, load_yaml
from .graph import AdjacencyGraph
from .logger import get_logger
from .resolver import TableResolver

logger = get_logger(__name__)


class CountryModel(BaseModel):
    """One entry of the ``countries`` section."""

    names: List[str] = Field(default_factory=list)
    neighbors: List[str] = Field(default_factory=list)

    @field_validator("names")
    @classmethod
    def validate_names(cls, value: List[str]) -> List[str]:
        if any(not name.strip() for name in value):
            raise ValueError("Country names must be non-empty strings")
        return value


class WorldModel(BaseModel):
    """Pydantic model for a whole dataset file."""

    countries: Dict[str, CountryModel]
    excluded_names: List[str] = Field(default_factory=list)
    excluded_nodes: List[str] = Field(default_factory=list)

    @field_validator("countries")
    @classmethod
    def validate_countries(cls, value: Dict[str, CountryModel]) -> Dict[str, CountryModel]:
        if not value:
            raise ValueError("The dataset must define at least one country")
        return value


@dataclass(frozen=True)
class World:
    """Graph, resolver and endpoint exclusions built from one dataset."""

    graph: AdjacencyGraph
    resolver: TableResolver
    excluded_nodes: FrozenSet[str] = field(default_factory=frozenset)

    def display_name(self, node: str) -> str:
        return self.resolver.display_name(node)


def build_world(data: Dict, *, source: str = "<memory>") -> World:
    """Validate raw dataset content and assemble a ``World``."""
    try:
        model = WorldModel.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid world dataset in {source}: {exc.errors()}"
        ) from exc

    unknown = [node for node in model.excluded_nodes if node not in model.countries]
    if unknown:
        raise ConfigurationError(
            f"Excluded nodes {unknown} in {source} are not defined countries"
        )

    graph = AdjacencyGraph(
        {code: entry.neighbors for code, entry in model.countries.items()}
    )
    resolver = TableResolver(
        {code: entry.names for code, entry in model.countries.items()},
        excluded_names=model.excluded_names,
    )
    return World(
        graph=graph,
        resolver=resolver,
        excluded_nodes=frozenset(model.excluded_nodes),
    )


def load_world(path: str | Path | None = None) -> World:
    """Load a dataset file, the bundled world map by default."""
    data_path = Path(path).expanduser() if path else BUNDLED_WORLD_PATH
    world = build_world(load_yaml(data_path), source=str(data_path))
    logger.info(
        "Loaded %d countries and %d borders from %s",
        len(world.graph),
        world.graph.edge_count,
        data_path.name,
    )
    return world
