"""
Lightweight dependency container for wiring runtime services into sessions.

Instead of relying on module-level singletons, the collaborators a game
needs (configuration, the loaded world, the metrics collector) are bundled
into a simple data class and passed explicitly. This makes it trivial to
spin up several isolated sessions, for tests or for concurrent players.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import GameConfig, load_config
from .generator import PuzzleGenerator
from .metrics import GameMetrics
from .session import GameSession
from .world import World, load_world


@dataclass(slots=True)
class GameDependencies:
    """Container object that holds the runtime services a game needs."""

    config: GameConfig
    world: World
    metrics: GameMetrics

    def puzzle_generator(self, rng: Optional[random.Random] = None) -> PuzzleGenerator:
        return PuzzleGenerator.from_config(
            self.world.graph,
            self.config,
            excluded=self.world.excluded_nodes,
            rng=rng,
        )

    def new_session(self, session_id: Optional[str] = None) -> GameSession:
        return GameSession(
            self.world.resolver,
            metrics=self.metrics,
            session_id=session_id,
        )


def build_dependencies(
    *,
    config: GameConfig | None = None,
    world: World | None = None,
    metrics: GameMetrics | None = None,
    config_path: str | Path | None = None,
) -> GameDependencies:
    """
    Construct a ``GameDependencies`` instance.

    Args:
        config: Optional pre-built ``GameConfig``.
        world: Optional pre-loaded ``World``; otherwise read from
            ``config.world_path``.
        metrics: Optional ``GameMetrics`` instance (useful for sharing collectors).
        config_path: Optional config path when ``config`` is not supplied.
    """
    cfg = config or load_config(config_path)
    loaded_world = world or load_world(cfg.world_path)
    collector = metrics or GameMetrics(enabled=cfg.metrics_enabled)
    return GameDependencies(config=cfg, world=loaded_world, metrics=collector)
