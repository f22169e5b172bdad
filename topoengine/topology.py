"""Generated topology container.

A ``Topology`` holds the embedding (one 3-D position per node) and the
undirected edge list produced by a generator, plus per-node roles and
per-edge kinds used by renderers for styling. Node identities are row
indices into ``positions``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from topoengine.params import Family, TopologyParams


class EdgeBuilder:
    """Accumulate undirected edges without duplicates or self-loops.

    Edges are stored as ``(min, max)`` pairs in first-insertion order.
    """

    def __init__(self) -> None:
        self._edges: list[tuple[int, int]] = []
        self._kinds: list[str] = []
        self._seen: set[tuple[int, int]] = set()

    def add(self, u: int, v: int, kind: str) -> bool:
        """Add edge ``u``-``v``; return False if it was a loop or duplicate."""
        if u == v:
            return False
        key = (u, v) if u < v else (v, u)
        if key in self._seen:
            return False
        self._seen.add(key)
        self._edges.append(key)
        self._kinds.append(kind)
        return True

    def __len__(self) -> int:
        return len(self._edges)

    def build(self) -> tuple[tuple[tuple[int, int], ...], tuple[str, ...]]:
        return tuple(self._edges), tuple(self._kinds)


@dataclass(frozen=True, eq=False)
class Topology:
    """Nodes and edges of one generated topology.

    Attributes:
        params: Validated parameters the topology was generated from.
        positions: Read-only ``float64`` array of shape ``(N, 3)``.
        edges: Undirected edges as ``(u, v)`` with ``u < v``.
        roles: Role label per node (e.g. ``host``, ``switch``, ``open``).
        edge_kinds: Kind label per edge (e.g. ``link``, ``wrap``).
    """

    params: TopologyParams
    positions: np.ndarray
    edges: tuple[tuple[int, int], ...]
    roles: tuple[str, ...]
    edge_kinds: tuple[str, ...]

    def __post_init__(self) -> None:
        positions = np.asarray(self.positions, dtype=float)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(
                f"positions must have shape (N, 3), got {positions.shape}"
            )
        if len(self.roles) != positions.shape[0]:
            raise ValueError("roles must have one entry per node")
        if len(self.edge_kinds) != len(self.edges):
            raise ValueError("edge_kinds must have one entry per edge")
        positions.setflags(write=False)
        object.__setattr__(self, "positions", positions)

    @property
    def family(self) -> Family:
        return self.params.family

    @property
    def num_nodes(self) -> int:
        return int(self.positions.shape[0])

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def degrees(self) -> np.ndarray:
        """Return the degree of every node as an integer array."""
        if not self.edges:
            return np.zeros(self.num_nodes, dtype=int)
        endpoints = np.asarray(self.edges, dtype=int).ravel()
        return np.bincount(endpoints, minlength=self.num_nodes)

    def nodes_with_role(self, role: str) -> list[int]:
        return [i for i, r in enumerate(self.roles) if r == role]

    def edges_of_kind(self, kind: str) -> list[tuple[int, int]]:
        return [e for e, k in zip(self.edges, self.edge_kinds) if k == kind]
