"""Pytest configuration and shared fixtures for topology engine tests."""

import pytest


@pytest.fixture
def sample_config():
    """Sample configuration dictionary for testing."""
    return {
        "limits": {
            "mesh": {"min_size": 2, "max_size_by_dims": {2: 6, 3: 4}},
            "fat_tree": {"k_max": 3, "max_hosts": 64},
            "max_nodes": 500,
        },
        "layout": {
            "mesh_shear": 0.5,
            "wk_radius_per_level": 5.0,
        },
        "output": {"json_indent": 4},
    }


@pytest.fixture
def temp_config_file(tmp_path, sample_config):
    """Create a temporary configuration file for testing."""
    import yaml

    config_file = tmp_path / "test_config.yml"
    with open(config_file, "w") as f:
        yaml.dump(sample_config, f, default_flow_style=False, indent=2)
    return config_file


@pytest.fixture
def invalid_config_file(tmp_path):
    """Create an invalid YAML configuration file for testing."""
    config_file = tmp_path / "invalid_config.yml"
    config_file.write_text("invalid: yaml: content: [unclosed")
    return config_file


@pytest.fixture
def engine_config(temp_config_file):
    """Create an EngineConfig object loaded from the sample YAML."""
    from topoengine.config import EngineConfig

    return EngineConfig.from_yaml(temp_config_file)


@pytest.fixture
def engine():
    """Engine with default configuration."""
    from topoengine.engine import TopologyEngine

    return TopologyEngine()
