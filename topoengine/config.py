"""Configuration management for the topology engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from topoengine.log_config import get_logger

logger = get_logger(__name__)


def _to_int(name: str, value: Any) -> int:
    """Convert a YAML scalar to int, rejecting booleans and fractions."""
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be an integer, got {value!r}")
    try:
        as_int = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"'{name}' must be an integer, got {value!r}") from None
    if isinstance(value, float) and value != as_int:
        raise ValueError(f"'{name}' must be an integer, got {value!r}")
    return as_int


def _normalize_int_fields(section: Any) -> None:
    for f in fields(section):
        setattr(section, f.name, _to_int(f.name, getattr(section, f.name)))


@dataclass
class GridLimits:
    """Parameter bounds for grid families (mesh and torus).

    The allowed dimensionalities are the keys of ``max_size_by_dims``; each
    maps to the largest side length accepted for that dimensionality.
    """

    min_size: int
    max_size_by_dims: dict[int, int]

    def __post_init__(self) -> None:
        """Normalize YAML-loaded keys and values to integers."""
        self.min_size = _to_int("min_size", self.min_size)
        self.max_size_by_dims = {
            _to_int("dims", dims): _to_int("max_size", size)
            for dims, size in self.max_size_by_dims.items()
        }
        if not self.max_size_by_dims:
            raise ValueError("Grid limits require at least one dimensionality")

    @property
    def dims_min(self) -> int:
        return min(self.max_size_by_dims)

    @property
    def dims_max(self) -> int:
        return max(self.max_size_by_dims)

    def max_size(self, dims: int) -> int | None:
        """Return the largest side length for ``dims`` or None if unsupported."""
        return self.max_size_by_dims.get(dims)


@dataclass
class FatTreeLimits:
    """Parameter bounds for k-ary n-tree fat-trees.

    ``max_hosts`` caps the derived host count ``k**n`` independently of the
    per-field ranges.
    """

    k_min: int = 2
    k_max: int = 4
    n_min: int = 2
    n_max: int = 5
    max_hosts: int = 1024

    def __post_init__(self) -> None:
        _normalize_int_fields(self)


@dataclass
class WKLimits:
    """Parameter bounds for WK-recursive networks."""

    k_min: int = 3
    k_max: int = 8
    l_min: int = 1
    l_max: int = 5

    def __post_init__(self) -> None:
        _normalize_int_fields(self)


@dataclass
class LimitsConfig:
    """Validation bounds for every topology family.

    Bounds keep the generated node count within what an interactive renderer
    can draw. ``max_nodes`` is an optional global cap applied on top of the
    per-family bounds.
    """

    mesh: GridLimits = field(
        default_factory=lambda: GridLimits(
            min_size=2, max_size_by_dims={2: 25, 3: 10, 4: 5}
        )
    )
    torus: GridLimits = field(
        default_factory=lambda: GridLimits(min_size=3, max_size_by_dims={2: 20, 3: 8})
    )
    fat_tree: FatTreeLimits = field(default_factory=FatTreeLimits)
    wk: WKLimits = field(default_factory=WKLimits)
    max_nodes: int | None = None

    def __post_init__(self) -> None:
        if self.max_nodes is not None:
            self.max_nodes = _to_int("limits.max_nodes", self.max_nodes)


@dataclass
class LayoutConfig:
    """Embedding constants used when placing nodes in 3-D space."""

    mesh_shear: float = 0.3  # Per-slice offset projecting the 4th mesh axis
    fat_tree_host_spacing: float = 1.2
    fat_tree_stage_height: float = 2.0
    wk_radius_per_level: float = 10.0  # Top-level circle radius is this times l
    wk_scale_large: float = 0.35  # Child radius factor when k > 3
    wk_scale_small: float = 0.45  # Child radius factor when k <= 3


@dataclass
class OutputConfig:
    """Formatting settings for CLI output."""

    json_indent: int = 2


def _build_section(cls: type, data: Any, section: str, default: Any = None) -> Any:
    """Instantiate a flat dataclass section from a mapping with strict keys.

    Keys missing from ``data`` fall back to ``default`` when given, otherwise
    to the dataclass defaults.
    """
    if data is None:
        return default if default is not None else cls()
    if not isinstance(data, dict):
        raise ValueError(f"'{section}' configuration section must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown keys in '{section}' configuration: {unknown}")
    base = {f.name: getattr(default, f.name) for f in fields(cls)} if default else {}
    return cls(**{**base, **data})


@dataclass
class EngineConfig:
    """Complete topology engine configuration.

    Aggregates validation limits, layout constants and output formatting.
    Every section is optional; omitted sections keep their defaults.
    """

    limits: LimitsConfig = field(default_factory=LimitsConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    _source_path: Path | None = None

    @classmethod
    def from_yaml(cls, config_path: Path) -> EngineConfig:
        """Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file.

        Returns:
            Parsed configuration object.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
            ValueError: If configuration is invalid.
        """
        config_path = Path(config_path)
        logger.info(f"Loading configuration from: {config_path}")

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in configuration: {e}")
            raise

        cfg = cls._from_dict(raw_config or {})
        cfg._source_path = config_path
        return cfg

    @classmethod
    def _from_dict(cls, config_dict: dict[str, Any]) -> EngineConfig:
        """Create configuration from dictionary.

        Args:
            config_dict: Raw configuration dictionary.

        Returns:
            Parsed configuration object.
        """
        if not isinstance(config_dict, dict):
            raise ValueError("Configuration root must be a mapping")

        unknown = sorted(set(config_dict) - {"limits", "layout", "output"})
        if unknown:
            raise ValueError(f"Unknown configuration sections: {unknown}")

        limits_dict = dict(config_dict.get("limits") or {})
        limits_unknown = sorted(
            set(limits_dict) - {"mesh", "torus", "fat_tree", "wk", "max_nodes"}
        )
        if limits_unknown:
            raise ValueError(f"Unknown keys in 'limits' configuration: {limits_unknown}")

        defaults = LimitsConfig()
        limits = LimitsConfig(
            mesh=_build_section(
                GridLimits, limits_dict.get("mesh"), "limits.mesh", defaults.mesh
            ),
            torus=_build_section(
                GridLimits, limits_dict.get("torus"), "limits.torus", defaults.torus
            ),
            fat_tree=_build_section(
                FatTreeLimits, limits_dict.get("fat_tree"), "limits.fat_tree"
            ),
            wk=_build_section(WKLimits, limits_dict.get("wk"), "limits.wk"),
            max_nodes=limits_dict.get("max_nodes"),
        )

        return cls(
            limits=limits,
            layout=_build_section(LayoutConfig, config_dict.get("layout"), "layout"),
            output=_build_section(OutputConfig, config_dict.get("output"), "output"),
        )
