"""WK-recursive network generator.

A WK(k, l) network has ``k**l`` nodes. Level 1 is a complete graph K_k;
level ``L`` joins ``k`` copies of level ``L - 1`` with one edge between every
pair of copies. Writing a node index as ``l`` base-k digits, the most
significant digit selects the top-level copy and the least significant digit
the position inside a base block.
"""

from __future__ import annotations

import math

import numpy as np

from topoengine.config import LayoutConfig
from topoengine.log_config import get_logger
from topoengine.params import WKParams
from topoengine.topology import EdgeBuilder, Topology

logger = get_logger(__name__)


def base_k_digits(k: int, l: int) -> np.ndarray:  # noqa: E741
    """Return the base-k digits of every node index, most significant first.

    Shape is ``(k**l, l)``; column 0 is the top recursion level.
    """
    indices = np.arange(k**l)
    powers = k ** np.arange(l - 1, -1, -1)
    return (indices[:, None] // powers[None, :]) % k


def repeated_digit(digit: int, count: int, k: int) -> int:
    """Return the base-k numeral made of ``count`` copies of ``digit``."""
    value = 0
    for _ in range(count):
        value = value * k + digit
    return value


def open_nodes(k: int, l: int) -> list[int]:  # noqa: E741
    """Return the ``k`` open (corner) nodes, whose digits are all identical."""
    return [repeated_digit(d, l, k) for d in range(k)]


def _positions(params: WKParams, layout: LayoutConfig) -> np.ndarray:
    """Place nodes by nested circles without recursion.

    The top level puts ``k`` sub-centers on a circle of radius
    ``wk_radius_per_level * l``; each deeper level repeats the pattern around
    its parent center with the radius scaled down. A node's position is the
    sum of the offsets selected by its digits, which visits nodes in the same
    angular order as a depth-first descent.
    """
    k, l = params.k, params.l
    scale = layout.wk_scale_large if k > 3 else layout.wk_scale_small
    radii = layout.wk_radius_per_level * l * scale ** np.arange(l)
    angles = math.pi / 2 + 2 * math.pi * base_k_digits(k, l) / k

    positions = np.zeros((k**l, 3), dtype=float)
    positions[:, 0] = (radii[None, :] * np.cos(angles)).sum(axis=1)
    positions[:, 1] = (radii[None, :] * np.sin(angles)).sum(axis=1)
    return positions


def _edges(params: WKParams) -> EdgeBuilder:
    k, l = params.k, params.l
    total = k**l
    builder = EdgeBuilder()

    # Base blocks: consecutive runs of k indices form complete graphs.
    for start in range(0, total, k):
        for u in range(k):
            for v in range(u + 1, k):
                builder.add(start + u, start + v, "local")

    # One edge between every pair of sibling sub-blocks at each level.
    for level in range(l, 1, -1):
        block_size = k**level
        sub_block = k ** (level - 1)
        for block_start in range(0, total, block_size):
            for i in range(k):
                for j in range(i + 1, k):
                    u = block_start + i * sub_block + repeated_digit(j, level - 1, k)
                    v = block_start + j * sub_block + repeated_digit(i, level - 1, k)
                    builder.add(u, v, "level")
    return builder


def generate_wk_recursive(
    params: WKParams, layout: LayoutConfig | None = None
) -> Topology:
    """Generate a WK-recursive network.

    Args:
        params: Validated WK parameters.
        layout: Embedding constants; defaults to ``LayoutConfig()``.

    Returns:
        Topology with ``k**l`` nodes where the ``k`` open nodes have degree
        ``k - 1`` and every other node degree ``k``.
    """
    layout = layout or LayoutConfig()
    edges, kinds = _edges(params).build()
    corners = set(open_nodes(params.k, params.l))
    roles = tuple(
        "open" if node in corners else "node" for node in range(params.num_nodes)
    )
    logger.debug(
        f"WK k={params.k} l={params.l}: {params.num_nodes} nodes, {len(edges)} edges"
    )
    return Topology(
        params=params,
        positions=_positions(params, layout),
        edges=edges,
        roles=roles,
        edge_kinds=kinds,
    )
