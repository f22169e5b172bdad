"""Closed-form structural metrics for each topology family.

Metrics are computed from the parameters alone and never touch a generated
graph. Links are counted as physical undirected edges (one cable is one
link) for both ``total_links`` and ``bisection_width``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable

from topoengine.params import (
    FatTreeParams,
    Family,
    MeshParams,
    TopologyParams,
    TorusParams,
    WKParams,
)


@dataclass(frozen=True)
class DegreeRange:
    """Smallest and largest node degree of a family instance."""

    min: int
    max: int

    @property
    def is_constant(self) -> bool:
        return self.min == self.max

    def __str__(self) -> str:
        if self.is_constant:
            return str(self.min)
        return f"Max: {self.max}, Min: {self.min}"


@dataclass(frozen=True)
class MetricsRecord:
    """Theoretical properties of a topology family instance.

    Attributes:
        family: Topology family.
        symmetric: Whether all nodes are structurally equivalent.
        symmetry: Short explanation of the symmetry verdict.
        homogeneous: Whether every node (switch, for fat-trees) has the same
            degree.
        homogeneity: Short explanation of the homogeneity verdict.
        degree: Degree range; for fat-trees the switch port count.
        diameter: Maximum shortest-path hop count.
        bisection_width: Undirected links crossing a cut into equal halves.
        connectivity: Links to remove to isolate a node or subtree.
        total_nodes: Node count; switch count for fat-trees.
        total_links: Undirected link count, including host links.
        total_hosts: Host count for fat-trees, otherwise None.
    """

    family: Family
    symmetric: bool
    symmetry: str
    homogeneous: bool
    homogeneity: str
    degree: DegreeRange
    diameter: int
    bisection_width: int
    connectivity: int
    total_nodes: int
    total_links: int
    total_hosts: int | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of the record."""
        data = asdict(self)
        data["family"] = self.family.value
        return data


def _mesh_metrics(params: MeshParams) -> MetricsRecord:
    k, n = params.size, params.dims
    # With two nodes per axis every node is a corner.
    max_degree = 2 * n if k > 2 else n
    return MetricsRecord(
        family=Family.MESH,
        symmetric=False,
        symmetry="No (asymmetric at edges)",
        homogeneous=max_degree == n,
        homogeneity=(
            f"No (corners degree {n}, center {2 * n})"
            if max_degree != n
            else f"Yes (fixed degree {n})"
        ),
        degree=DegreeRange(n, max_degree),
        diameter=n * (k - 1),
        bisection_width=k ** (n - 1),
        connectivity=n,
        total_nodes=k**n,
        total_links=n * k ** (n - 1) * (k - 1),
    )


def _torus_metrics(params: TorusParams) -> MetricsRecord:
    k, n = params.size, params.dims
    degree = 2 * n if k > 2 else n
    return MetricsRecord(
        family=Family.TORUS,
        symmetric=True,
        symmetry="Yes (vertex-transitive)",
        homogeneous=True,
        homogeneity=f"Yes (fixed degree {degree})",
        degree=DegreeRange(degree, degree),
        diameter=n * (k // 2),
        bisection_width=2 * k ** (n - 1),
        connectivity=degree,
        total_nodes=k**n,
        total_links=n * k**n if k > 2 else n * k**n // 2,
    )


def _fat_tree_metrics(params: FatTreeParams) -> MetricsRecord:
    k, n = params.k, params.n
    hosts = params.num_hosts
    return MetricsRecord(
        family=Family.FAT_TREE,
        symmetric=False,
        symmetry="No (hierarchical)",
        homogeneous=True,
        homogeneity=f"Yes (fixed switch degree {2 * k})",
        degree=DegreeRange(2 * k, 2 * k),
        # Up to the core stage and back down.
        diameter=2 * n,
        bisection_width=hosts // 2,
        connectivity=k,
        total_nodes=params.num_switches,
        # Host links plus k links per switch across each of the n - 1 boundaries.
        total_links=n * hosts,
        total_hosts=hosts,
    )


def _wk_metrics(params: WKParams) -> MetricsRecord:
    k, l = params.k, params.l  # noqa: E741
    # A single level is the complete graph K_k.
    max_degree = k if l > 1 else k - 1
    return MetricsRecord(
        family=Family.WK,
        symmetric=False,
        symmetry="No (open nodes differ)",
        homogeneous=max_degree == k - 1,
        homogeneity=(
            f"No (interior degree {k}, open nodes {k - 1})"
            if max_degree == k
            else f"Yes (fixed degree {k - 1})"
        ),
        degree=DegreeRange(k - 1, max_degree),
        diameter=2**l - 1,
        bisection_width=k,
        connectivity=k - 1,
        total_nodes=k**l,
        total_links=(k**l * k - k) // 2,
    )


_CALCULATORS: dict[Family, Callable[[Any], MetricsRecord]] = {
    Family.MESH: _mesh_metrics,
    Family.TORUS: _torus_metrics,
    Family.FAT_TREE: _fat_tree_metrics,
    Family.WK: _wk_metrics,
}


def calculate_metrics(params: TopologyParams) -> MetricsRecord:
    """Return the closed-form metrics for validated parameters.

    Args:
        params: Validated parameter record; its type selects the family.

    Returns:
        Metrics record for the family instance.
    """
    return _CALCULATORS[params.family](params)
