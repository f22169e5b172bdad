"""Topology families and their parameter records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Family(str, Enum):
    """Supported interconnection-network families."""

    MESH = "mesh"
    TORUS = "torus"
    FAT_TREE = "fat_tree"
    WK = "wk"

    @classmethod
    def parse(cls, tag: object) -> Family | None:
        """Return the family for a tag or alias, or None when unrecognized.

        Tags are matched case-insensitively; hyphens and underscores are
        interchangeable.
        """
        if isinstance(tag, Family):
            return tag
        if not isinstance(tag, str):
            return None
        key = tag.strip().lower().replace("-", "_")
        return _ALIASES.get(key)


_ALIASES: dict[str, Family] = {
    "mesh": Family.MESH,
    "torus": Family.TORUS,
    "toroid": Family.TORUS,
    "fat_tree": Family.FAT_TREE,
    "fattree": Family.FAT_TREE,
    "wk": Family.WK,
    "wk_recursive": Family.WK,
}


@dataclass(frozen=True)
class MeshParams:
    """k-ary n-cube without wraparound: ``size`` nodes along each of ``dims`` axes."""

    size: int
    dims: int

    @property
    def family(self) -> Family:
        return Family.MESH

    @property
    def num_nodes(self) -> int:
        return self.size**self.dims


@dataclass(frozen=True)
class TorusParams:
    """k-ary n-cube with wraparound on every axis."""

    size: int
    dims: int

    @property
    def family(self) -> Family:
        return Family.TORUS

    @property
    def num_nodes(self) -> int:
        return self.size**self.dims


@dataclass(frozen=True)
class FatTreeParams:
    """k-ary n-tree: ``k**n`` hosts below ``n`` stages of ``k**(n-1)`` switches."""

    k: int
    n: int

    @property
    def family(self) -> Family:
        return Family.FAT_TREE

    @property
    def num_hosts(self) -> int:
        return self.k**self.n

    @property
    def switches_per_stage(self) -> int:
        return self.k ** (self.n - 1)

    @property
    def num_switches(self) -> int:
        return self.n * self.switches_per_stage

    @property
    def num_nodes(self) -> int:
        """Hosts plus switches, i.e. the number of generated graph nodes."""
        return self.num_hosts + self.num_switches


@dataclass(frozen=True)
class WKParams:
    """WK-recursive network with block arity ``k`` and ``l`` recursion levels."""

    k: int
    l: int  # noqa: E741

    @property
    def family(self) -> Family:
        return Family.WK

    @property
    def num_nodes(self) -> int:
        return self.k**self.l


TopologyParams = Union[MeshParams, TorusParams, FatTreeParams, WKParams]

PARAMS_TYPES: dict[Family, type] = {
    Family.MESH: MeshParams,
    Family.TORUS: TorusParams,
    Family.FAT_TREE: FatTreeParams,
    Family.WK: WKParams,
}

# Field names in declaration order; also the order violations are reported in.
PARAM_FIELDS: dict[Family, tuple[str, ...]] = {
    Family.MESH: ("size", "dims"),
    Family.TORUS: ("size", "dims"),
    Family.FAT_TREE: ("k", "n"),
    Family.WK: ("k", "l"),
}

# Parameters shown when a family is first selected.
DEFAULT_PARAMS: dict[Family, TopologyParams] = {
    Family.MESH: MeshParams(size=3, dims=2),
    Family.TORUS: TorusParams(size=4, dims=2),
    Family.FAT_TREE: FatTreeParams(k=2, n=3),
    Family.WK: WKParams(k=3, l=2),
}
