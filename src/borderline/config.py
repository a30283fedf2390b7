"""
Configuration management for the Borderline puzzle engine.

Configuration is layered: a user-provided ``config.yaml`` is merged over the
built-in defaults and the merged result is validated with Pydantic models so
bad values surface with clear messages at startup rather than mid-game.

Configuration precedence:
1. Built-in defaults defined in ``DEFAULT_CONFIG``.
2. Values provided in ``config.yaml`` (or a custom path passed to
   ``load_config``), merged over the defaults.
3. Pydantic model defaults for any fields still unset after the merge.
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .logger import get_logger


class ConfigurationError(RuntimeError):
    """Raised when configuration or data files cannot be loaded or validated."""


BUNDLED_WORLD_PATH = Path(__file__).resolve().parent / "data" / "world.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "puzzle": {
        # Node counts, endpoints included: 3-5 countries to find.
        "min_path_length": 5,
        "max_path_length": 7,
        "max_attempts": 100,
        "max_paths": None,
        "excluded_nodes": [],
    },
    "world": {"data_path": None},
    "metrics": {"enabled": False},
}


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries without mutating the inputs."""
    result: Dict[str, Any] = {}
    for key in base.keys() | overrides.keys():
        base_value = base.get(key)
        override_value = overrides.get(key)

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = _deep_merge(base_value, override_value)
        elif override_value is not None:
            result[key] = override_value
        else:
            result[key] = deepcopy(base_value)
    return result


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from the provided path."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse YAML file at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Failed to read YAML file at {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"YAML file at {path} must contain a top-level mapping."
        )

    return data


class PuzzleModel(BaseModel):
    """Pydantic model for the puzzle section."""

    min_path_length: int = Field(default=5, ge=3)
    max_path_length: int = Field(default=7, ge=3)
    max_attempts: int = Field(default=100, ge=1)
    max_paths: Optional[int] = Field(default=None, ge=1)
    excluded_nodes: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_band(self) -> "PuzzleModel":
        if self.min_path_length > self.max_path_length:
            raise ValueError("min_path_length cannot exceed max_path_length")
        return self


class WorldConfigModel(BaseModel):
    """Where the adjacency dataset is read from."""

    data_path: Optional[Path] = None


class MetricsConfigModel(BaseModel):
    """Configuration for optional metrics collection."""

    enabled: bool = False


class ProjectConfigModel(BaseModel):
    """Top-level Pydantic model for project configuration."""

    puzzle: PuzzleModel = Field(default_factory=PuzzleModel)
    world: WorldConfigModel = Field(default_factory=WorldConfigModel)
    metrics: MetricsConfigModel = Field(default_factory=MetricsConfigModel)


class GameConfig:
    """Validated configuration for puzzle generation and sessions."""

    def __init__(
        self,
        config_path: str | Path | None = None,
        overrides: Dict[str, Any] | None = None,
    ):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. If None, uses defaults.
            overrides: Extra values merged over the file, mostly for tests and
                command-line flags.
        """
        self.config_path = Path(config_path).expanduser() if config_path else None
        self._config = self._load_config(overrides or {})

    def _load_config(self, overrides: Dict[str, Any]) -> ProjectConfigModel:
        """Load configuration from file, merge with defaults, and validate."""
        user_config: Dict[str, Any] = {}

        if self.config_path and self.config_path.exists():
            user_config = load_yaml(self.config_path)

        merged = _deep_merge(deepcopy(DEFAULT_CONFIG), user_config)
        merged = _deep_merge(merged, overrides)

        try:
            return ProjectConfigModel.model_validate(merged)
        except ValidationError as exc:
            detail = exc.errors()
            location = self.config_path or "built-in defaults"
            raise ConfigurationError(
                f"Invalid configuration in {location}: {detail}"
            ) from exc

    @property
    def min_path_length(self) -> int:
        return self._config.puzzle.min_path_length

    @property
    def max_path_length(self) -> int:
        return self._config.puzzle.max_path_length

    @property
    def max_attempts(self) -> int:
        """Number of endpoint pairs sampled before generation gives up."""
        return self._config.puzzle.max_attempts

    @property
    def max_paths(self) -> int | None:
        """Cap on enumerated shortest paths per puzzle, None for unbounded."""
        return self._config.puzzle.max_paths

    @property
    def excluded_nodes(self) -> List[str]:
        """Node ids never used as puzzle endpoints, on top of the dataset's."""
        return list(self._config.puzzle.excluded_nodes)

    @property
    def world_path(self) -> Path:
        """Path of the adjacency dataset, the bundled world by default."""
        data_path = self._config.world.data_path
        if data_path is None:
            return BUNDLED_WORLD_PATH
        if not data_path.is_absolute() and self.config_path is not None:
            return self.config_path.parent / data_path
        return data_path

    @property
    def metrics_enabled(self) -> bool:
        """Return whether metrics collection is enabled."""
        return self._config.metrics.enabled


# Global configuration instance
_config_instance: GameConfig | None = None
logger = get_logger(__name__)


def _default_config_path() -> Path:
    project_root = Path(__file__).resolve().parents[2]
    return project_root / "config.yaml"


def load_config(
    config_path: str | Path | None = None,
    overrides: Dict[str, Any] | None = None,
) -> GameConfig:
    """Build a fresh ``GameConfig`` without touching the cached instance."""
    return GameConfig(config_path or _default_config_path(), overrides=overrides)


def get_config(config_path: str | Path | None = None) -> GameConfig:
    """
    Get the global configuration instance.

    Args:
        config_path: Path to configuration file. If None, uses default location.

    Returns:
        GameConfig instance
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = load_config(config_path)
        logger.debug("Loaded configuration from %s", _config_instance.config_path)

    return _config_instance


def reload_config(config_path: str | Path | None = None) -> GameConfig:
    """
    Reload the configuration from file.

    Args:
        config_path: Path to configuration file. If None, uses default location.

    Returns:
        GameConfig instance
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)
