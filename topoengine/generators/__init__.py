"""Per-family topology generators.

Each generator maps validated parameters (and optional layout constants) to
a ``Topology``. ``generate`` dispatches on the parameter record's family.
"""

from __future__ import annotations

from typing import Callable

from topoengine.config import LayoutConfig
from topoengine.params import Family, TopologyParams
from topoengine.topology import Topology

from .fat_tree import generate_fat_tree
from .grid import generate_mesh, generate_torus
from .wk_recursive import generate_wk_recursive

GENERATORS: dict[Family, Callable[..., Topology]] = {
    Family.MESH: generate_mesh,
    Family.TORUS: generate_torus,
    Family.FAT_TREE: generate_fat_tree,
    Family.WK: generate_wk_recursive,
}


def generate(params: TopologyParams, layout: LayoutConfig | None = None) -> Topology:
    """Generate the topology described by ``params``.

    Args:
        params: Validated parameter record; its type selects the family.
        layout: Embedding constants; defaults to ``LayoutConfig()``.

    Returns:
        Freshly generated topology.
    """
    return GENERATORS[params.family](params, layout)


__all__ = [
    "GENERATORS",
    "generate",
    "generate_fat_tree",
    "generate_mesh",
    "generate_torus",
    "generate_wk_recursive",
]
