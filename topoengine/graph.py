"""NetworkX export and empirical measurement of generated topologies.

The closed-form metrics in ``topoengine.metrics`` describe a family in
theory; this module measures an actual generated graph so the two can be
cross-checked.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import networkx as nx

from topoengine.log_config import get_logger
from topoengine.metrics import MetricsRecord
from topoengine.params import Family
from topoengine.topology import Topology

logger = get_logger(__name__)


@dataclass(frozen=True)
class MeasuredMetrics:
    """Properties measured on a materialized graph.

    ``diameter`` is None when the graph is disconnected.
    """

    num_nodes: int
    num_edges: int
    min_degree: int
    max_degree: int
    diameter: int | None
    connected: bool


def to_networkx(topology: Topology) -> nx.Graph:
    """Convert a topology to an undirected NetworkX graph.

    Nodes are the integer node ids with ``pos`` (x, y, z tuple) and ``role``
    attributes; edges carry ``kind``. The graph's ``family`` and ``params``
    attributes record where it came from.

    Args:
        topology: Generated topology.

    Returns:
        NetworkX graph with one node per position and one edge per link.
    """
    graph = nx.Graph(
        family=topology.family.value, params=asdict(topology.params)
    )
    for node, (position, role) in enumerate(
        zip(topology.positions.tolist(), topology.roles)
    ):
        graph.add_node(node, pos=tuple(position), role=role)
    for (u, v), kind in zip(topology.edges, topology.edge_kinds):
        graph.add_edge(u, v, kind=kind)
    return graph


def measure(topology: Topology) -> MeasuredMetrics:
    """Measure node/edge counts, degree range and diameter of a topology.

    Args:
        topology: Generated topology.

    Returns:
        Measured metrics. Diameter uses all-pairs BFS, which is fine at the
        sizes the validator admits.
    """
    graph = to_networkx(topology)
    degrees = [d for _, d in graph.degree()]
    connected = graph.number_of_nodes() > 0 and nx.is_connected(graph)
    diameter = nx.diameter(graph) if connected else None
    if not connected:
        logger.warning(
            f"{topology.family.value} graph has "
            f"{nx.number_connected_components(graph)} components"
        )
    return MeasuredMetrics(
        num_nodes=graph.number_of_nodes(),
        num_edges=graph.number_of_edges(),
        min_degree=min(degrees) if degrees else 0,
        max_degree=max(degrees) if degrees else 0,
        diameter=diameter,
        connected=connected,
    )


def compare(metrics: MetricsRecord, measured: MeasuredMetrics) -> list[str]:
    """Return human-readable mismatches between closed-form and measured values.

    Fat-tree degree is a switch port count, so only its maximum is compared
    (hosts have degree 1 and core switches use only their down ports).

    Args:
        metrics: Closed-form metrics.
        measured: Measurements of the generated graph.

    Returns:
        List of mismatch descriptions; empty when everything agrees.
    """
    issues: list[str] = []
    expected_nodes = metrics.total_nodes + (metrics.total_hosts or 0)
    checks: list[tuple[str, Any, Any]] = [
        ("nodes", expected_nodes, measured.num_nodes),
        ("links", metrics.total_links, measured.num_edges),
        ("diameter", metrics.diameter, measured.diameter),
        ("max degree", metrics.degree.max, measured.max_degree),
    ]
    if metrics.family is not Family.FAT_TREE:
        checks.append(("min degree", metrics.degree.min, measured.min_degree))
    for name, expected, actual in checks:
        if expected != actual:
            issues.append(f"{name}: expected {expected}, measured {actual}")
    if not measured.connected:
        issues.append("graph is not connected")
    return issues


def topology_to_dict(
    topology: Topology, metrics: MetricsRecord | None = None
) -> dict[str, Any]:
    """Return a JSON-friendly document describing a topology.

    Args:
        topology: Generated topology.
        metrics: Optional metrics record to embed under ``metrics``.

    Returns:
        Mapping with ``family``, ``params``, ``nodes`` and ``edges`` keys.
    """
    out: dict[str, Any] = {
        "family": topology.family.value,
        "params": asdict(topology.params),
        "nodes": [
            {"id": node, "position": [float(c) for c in position], "role": role}
            for node, (position, role) in enumerate(
                zip(topology.positions.tolist(), topology.roles)
            )
        ],
        "edges": [
            {"source": u, "target": v, "kind": kind}
            for (u, v), kind in zip(topology.edges, topology.edge_kinds)
        ],
    }
    if metrics is not None:
        out["metrics"] = metrics.as_dict()
    return out
