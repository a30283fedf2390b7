import pytest

from src.borderline.config import (
    BUNDLED_WORLD_PATH,
    ConfigurationError,
    GameConfig,
    load_config,
)


def test_defaults_without_file(tmp_path):
    config = load_config(tmp_path / "missing.yaml")
    assert config.min_path_length == 5
    assert config.max_path_length == 7
    assert config.max_attempts == 100
    assert config.max_paths is None
    assert config.excluded_nodes == []
    assert config.world_path == BUNDLED_WORLD_PATH
    assert config.metrics_enabled is False


def test_yaml_overrides_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "puzzle:\n"
        "  max_path_length: 9\n"
        "  max_paths: 50\n"
        "world:\n"
        "  data_path: maps/europe.yaml\n"
        "metrics:\n"
        "  enabled: true\n",
        encoding="utf-8",
    )
    config = GameConfig(path)

    assert config.min_path_length == 5
    assert config.max_path_length == 9
    assert config.max_paths == 50
    assert config.world_path == tmp_path / "maps" / "europe.yaml"
    assert config.metrics_enabled is True


def test_invalid_band_is_rejected():
    with pytest.raises(ConfigurationError):
        GameConfig(overrides={"puzzle": {"min_path_length": 8, "max_path_length": 6}})


def test_malformed_yaml_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        GameConfig(path)
