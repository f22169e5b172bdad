"""k-ary n-tree fat-tree generator with butterfly inter-stage wiring.

Node numbering: hosts come first (``0 .. k**n - 1``), followed by the
switches stage by stage; switch ``i`` of stage ``s`` has id
``k**n + s * k**(n-1) + i``. Stage ``n - 1`` is the core stage.
"""

from __future__ import annotations

import numpy as np

from topoengine.config import LayoutConfig
from topoengine.log_config import get_logger
from topoengine.params import FatTreeParams
from topoengine.topology import EdgeBuilder, Topology

logger = get_logger(__name__)


def switch_id(params: FatTreeParams, stage: int, index: int) -> int:
    """Return the node id of switch ``index`` in ``stage``."""
    return params.num_hosts + stage * params.switches_per_stage + index


def butterfly_targets(k: int, stage: int, index: int) -> list[int]:
    """Return the stage ``stage + 1`` switch indices wired to switch ``index``.

    Switches are grouped in blocks of ``k**(stage + 1)``; within a group a
    switch at ``offset = index % k**stage`` reaches the ``k`` upper switches
    sharing that offset, one per sub-block of ``k**stage``.
    """
    block = k**stage
    span = block * k
    group = index // span
    offset = index % block
    return [group * span + p * block + offset for p in range(k)]


def _centered_row(count: int, spacing: float) -> np.ndarray:
    return (np.arange(count, dtype=float) - (count - 1) / 2) * spacing


def _positions(params: FatTreeParams, layout: LayoutConfig) -> np.ndarray:
    """Hosts on the floor (y = 0), each stage on its own level above."""
    k, n = params.k, params.n
    hosts = params.num_hosts
    per_stage = params.switches_per_stage
    positions = np.zeros((params.num_nodes, 3), dtype=float)
    positions[:hosts, 0] = _centered_row(hosts, layout.fat_tree_host_spacing)
    switch_x = _centered_row(per_stage, layout.fat_tree_host_spacing * k)
    for stage in range(n):
        start = switch_id(params, stage, 0)
        positions[start : start + per_stage, 0] = switch_x
        height = (stage + 1) * layout.fat_tree_stage_height
        positions[start : start + per_stage, 1] = height
    return positions


def generate_fat_tree(
    params: FatTreeParams, layout: LayoutConfig | None = None
) -> Topology:
    """Generate a k-ary n-tree.

    Host ``h`` attaches to stage-0 switch ``h // k``; adjacent stages are
    joined by the butterfly permutation of ``butterfly_targets``.

    Args:
        params: Validated fat-tree parameters.
        layout: Embedding constants; defaults to ``LayoutConfig()``.

    Returns:
        Topology with ``k**n`` hosts, ``n * k**(n-1)`` switches and
        ``n * k**n`` edges.
    """
    layout = layout or LayoutConfig()
    k, n = params.k, params.n
    builder = EdgeBuilder()

    for host in range(params.num_hosts):
        builder.add(host, switch_id(params, 0, host // k), "host")

    for stage in range(n - 1):
        for index in range(params.switches_per_stage):
            source = switch_id(params, stage, index)
            for target in butterfly_targets(k, stage, index):
                builder.add(source, switch_id(params, stage + 1, target), "stage")

    roles = (
        ("host",) * params.num_hosts
        + ("switch",) * (params.num_switches - params.switches_per_stage)
        + ("core",) * params.switches_per_stage
    )
    edges, kinds = builder.build()
    logger.debug(
        f"Fat-tree k={k} n={n}: {params.num_hosts} hosts, "
        f"{params.num_switches} switches, {len(edges)} edges"
    )
    return Topology(
        params=params,
        positions=_positions(params, layout),
        edges=edges,
        roles=roles,
        edge_kinds=kinds,
    )
