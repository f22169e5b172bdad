"""Tests for configuration management."""

from pathlib import Path

import pytest
import yaml

from topoengine.config import EngineConfig, GridLimits, LimitsConfig
from topoengine.params import FatTreeParams
from topoengine.validation import validate


def test_config_defaults() -> None:
    """Test default configuration values."""
    config = EngineConfig()

    assert config.limits.mesh.min_size == 2
    assert config.limits.mesh.max_size_by_dims == {2: 25, 3: 10, 4: 5}
    assert config.limits.torus.min_size == 3
    assert config.limits.torus.max_size_by_dims == {2: 20, 3: 8}
    assert config.limits.fat_tree.max_hosts == 1024
    assert (config.limits.wk.k_min, config.limits.wk.k_max) == (3, 8)
    assert config.limits.max_nodes is None
    assert config.layout.mesh_shear == 0.3
    assert config.output.json_indent == 2


def test_config_from_yaml(engine_config, temp_config_file) -> None:
    """Test loading configuration from YAML file."""
    assert engine_config.limits.mesh.max_size_by_dims == {2: 6, 3: 4}
    assert engine_config.limits.fat_tree.k_max == 3
    assert engine_config.limits.fat_tree.max_hosts == 64
    # Unspecified keys keep their defaults
    assert engine_config.limits.fat_tree.n_max == 5
    assert engine_config.limits.torus == LimitsConfig().torus
    assert engine_config.limits.max_nodes == 500
    assert engine_config.layout.mesh_shear == 0.5
    assert engine_config.layout.wk_scale_large == 0.35
    assert engine_config.output.json_indent == 4
    assert engine_config._source_path == Path(temp_config_file)


def test_partial_grid_section_merges_with_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "partial.yml"
    config_path.write_text(yaml.dump({"limits": {"torus": {"min_size": 4}}}))

    config = EngineConfig.from_yaml(config_path)

    assert config.limits.torus.min_size == 4
    assert config.limits.torus.max_size_by_dims == {2: 20, 3: 8}


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yml"
    config_path.write_text("")

    config = EngineConfig.from_yaml(config_path)

    assert config.limits == LimitsConfig()


def test_missing_file_raises() -> None:
    with pytest.raises(FileNotFoundError):
        EngineConfig.from_yaml(Path("does/not/exist.yml"))


def test_invalid_yaml_raises(invalid_config_file) -> None:
    with pytest.raises(yaml.YAMLError):
        EngineConfig.from_yaml(invalid_config_file)


def test_unknown_section_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown configuration sections"):
        EngineConfig._from_dict({"rendering": {}})


def test_unknown_key_rejected() -> None:
    with pytest.raises(ValueError, match="limits.wk"):
        EngineConfig._from_dict({"limits": {"wk": {"depth": 3}}})


def test_grid_limits_normalizes_string_keys() -> None:
    limits = GridLimits(min_size="2", max_size_by_dims={"2": "7"})

    assert limits.min_size == 2
    assert limits.max_size(2) == 7
    assert limits.max_size(3) is None
    assert (limits.dims_min, limits.dims_max) == (2, 2)


def test_quoted_limits_are_normalized(tmp_path: Path) -> None:
    config_file = tmp_path / "quoted.yml"
    config_file.write_text(
        yaml.dump(
            {
                "limits": {
                    "fat_tree": {"k_max": "4", "max_hosts": "256"},
                    "wk": {"l_max": "3"},
                    "max_nodes": "500",
                }
            }
        )
    )

    limits = EngineConfig.from_yaml(config_file).limits

    assert limits.fat_tree.k_max == 4
    assert limits.fat_tree.max_hosts == 256
    assert limits.wk.l_max == 3
    assert limits.max_nodes == 500
    assert validate("fat_tree", {"k": 2, "n": 3}, limits) == FatTreeParams(2, 3)


@pytest.mark.parametrize(
    "limits_section",
    [
        {"fat_tree": {"k_max": "four"}},
        {"wk": {"k_min": 2.5}},
        {"wk": {"l_max": True}},
        {"max_nodes": "lots"},
        {"mesh": {"min_size": "two"}},
    ],
)
def test_non_integer_limits_rejected(limits_section) -> None:
    with pytest.raises(ValueError, match="must be an integer"):
        EngineConfig._from_dict({"limits": limits_section})


def test_grid_limits_require_dims() -> None:
    with pytest.raises(ValueError):
        GridLimits(min_size=2, max_size_by_dims={})
